"""waxwriter package.

Writes XML incrementally, straight to a file or stream, without building a
document tree in memory.

Features:
- Call-order checking through a small state machine
- Namespace prefix scoping and xsi:schemaLocation generation
- DOCTYPE with external DTD and internal entity definitions
- Name, comment and URI validation, with an opt-out "trust me" mode
- Configurable indentation and line separators
"""

from importlib.metadata import PackageNotFoundError, version

try:  # pragma: no cover
    __version__ = version("waxwriter")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

from waxwriter.xml.writer import WAX, State
from waxwriter.config import ConfigLoader, WriterConfig
from waxwriter.constants import Version
from waxwriter.exceptions import (
    InvalidArgumentError,
    InvalidStateError,
    SinkError,
    WAXError,
)

__all__ = [
    "__version__",
    # Writer
    "WAX",
    "State",
    "Version",
    # Configuration
    "ConfigLoader",
    "WriterConfig",
    # Errors
    "WAXError",
    "InvalidArgumentError",
    "InvalidStateError",
    "SinkError",
]
