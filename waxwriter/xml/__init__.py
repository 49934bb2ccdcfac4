"""Streaming XML output.

The module is organized into focused components:
- validation: name, comment, URI and version checks plus escaping
- namespaces: prefix scoping across nested elements
- schema: pending xsi:schemaLocation pairs
- doctype: DTD reference and internal entity definitions
- indentation: newline and indent text per nesting depth
- sinks: binding the writer to its output
- writer: the WAX state machine
"""

from .writer import WAX, ElementFrame, State

__all__ = [
    "WAX",
    "ElementFrame",
    "State",
]
