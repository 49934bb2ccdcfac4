"""Infrastructure layer for waxwriter.

Adapters for console output live here. They implement the ports defined in
``waxwriter.ports``.
"""

__all__ = []
