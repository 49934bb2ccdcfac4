"""Syntax checks and escaping for emitted XML text.

All functions here are pure. The ``is_*`` predicates answer a yes/no
question; the matching ``verify_*`` functions raise
:class:`~waxwriter.exceptions.InvalidArgumentError` with a message of the
form ``"<value>" is an invalid <kind>``.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from ..constants import Patterns, Version
from ..exceptions import InvalidArgumentError

_NAME_TOKEN_RE = re.compile(Patterns.NAME_TOKEN)
_URI_CHARS_RE = re.compile(Patterns.URI_CHARS)
_URI_SCHEME_RE = re.compile(Patterns.URI_SCHEME)
_BAD_PERCENT_RE = re.compile(Patterns.PERCENT_ESCAPE)

_ESCAPES = {
    "<": "&lt;",
    ">": "&gt;",
    "'": "&apos;",
    '"': "&quot;",
    "&": "&amp;",
}
_ESCAPE_TABLE = str.maketrans(_ESCAPES)

_SUPPORTED_VERSIONS = frozenset(v.value for v in Version)


def escape(value: object) -> str:
    """Replace ``< > ' " &`` with their named character references."""
    return str(value).translate(_ESCAPE_TABLE)


def is_comment(text: str | None) -> bool:
    return text is not None and "--" not in text


def is_name_token(text: str | None) -> bool:
    if not text:
        return False
    return _NAME_TOKEN_RE.match(text) is not None


def is_uri(text: str | None) -> bool:
    """Check that ``text`` follows generic URI reference syntax.

    Accepts absolute URIs (``http://host/path``) and relative references
    (``music.dtd``, ``../schemas/car.xsd``). Rejects characters that must be
    percent-encoded, malformed percent escapes, a colon in the first
    segment of a relative reference (``:junk``), and authorities that
    cannot be parsed (bad IPv6 literal or non-numeric port).
    """
    if not text:
        return False
    if _URI_CHARS_RE.match(text) is None or _BAD_PERCENT_RE.search(text):
        return False
    if _URI_SCHEME_RE.match(text) is None:
        first_segment = re.split(r"[/?#]", text, maxsplit=1)[0]
        if ":" in first_segment:
            return False
    try:
        parts = urlsplit(text)
        _ = parts.port
    except ValueError:
        return False
    return True


def is_version(text: str | None) -> bool:
    return text in _SUPPORTED_VERSIONS


def verify_comment(text: str) -> None:
    if not is_comment(text):
        raise InvalidArgumentError(f'"{text}" is an invalid comment')


def verify_name(text: str) -> None:
    if not is_name_token(text):
        raise InvalidArgumentError(f'"{text}" is an invalid XML name')


def verify_uri(text: str) -> None:
    if not is_uri(text):
        raise InvalidArgumentError(f'"{text}" is an invalid URI')


def verify_version(text: str) -> None:
    if not is_version(text):
        raise InvalidArgumentError(f'"{text}" is an invalid XML version')


__all__ = [
    "escape",
    "is_comment",
    "is_name_token",
    "is_uri",
    "is_version",
    "verify_comment",
    "verify_name",
    "verify_uri",
    "verify_version",
]
