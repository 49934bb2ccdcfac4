from __future__ import annotations

from ..constants import Defaults, LineSeparators
from ..exceptions import InvalidArgumentError


def validate_indent(indent: str | None) -> None:
    """Accept ``None``, ``""``, a single tab or up to four spaces."""
    if indent is None or indent == "\t":
        return
    if not isinstance(indent, str):
        raise InvalidArgumentError(f"{indent!r} is an invalid indent value")
    if indent.strip(" ") or len(indent) > Defaults.MAX_INDENT_SPACES:
        raise InvalidArgumentError(f'"{indent}" is an invalid indent value')


def spaces(count: int) -> str:
    if count < 0:
        raise InvalidArgumentError("can't indent a negative number of spaces")
    if count > Defaults.MAX_INDENT_SPACES:
        raise InvalidArgumentError(f"{count} is an unreasonable indentation")
    return " " * count


class IndentationEngine:
    """Newline and indentation text for a given nesting depth.

    An ``indent`` of ``None`` keeps the whole document on one line; ``""``
    breaks lines without indenting them.
    """

    def __init__(
        self,
        indent: str | None = Defaults.INDENT,
        line_separator: str = Defaults.LINE_SEPARATOR,
    ) -> None:
        validate_indent(indent)
        self._indent = indent
        self.line_separator = line_separator

    @property
    def indent(self) -> str | None:
        return self._indent

    @indent.setter
    def indent(self, value: str | None) -> None:
        validate_indent(value)
        self._indent = value

    @property
    def line_separator(self) -> str:
        return self._line_separator

    @line_separator.setter
    def line_separator(self, value: str) -> None:
        if value not in LineSeparators.SUPPORTED:
            raise InvalidArgumentError(f"{value!r} is an invalid line separator")
        self._line_separator = value

    @property
    def enabled(self) -> bool:
        return self._indent is not None

    @property
    def newline(self) -> str | None:
        return self._line_separator if self.enabled else None

    def unit(self) -> str:
        return self._indent or ""

    def at(self, depth: int) -> str:
        if self._indent is None:
            return ""
        return self._line_separator + self._indent * depth
