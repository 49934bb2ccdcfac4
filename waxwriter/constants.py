from enum import StrEnum
from typing import ClassVar


class Version(StrEnum):
    V1_0 = "1.0"
    V1_1 = "1.1"
    # Not a published XML version; accepted for compatibility with WAX.
    V1_2 = "1.2"


class Defaults:
    ENCODING = "UTF-8"
    INDENT = "  "
    LINE_SEPARATOR = "\n"
    MAX_INDENT_SPACES = 4


class LineSeparators:
    UNIX = "\n"
    WINDOWS = "\r\n"
    SUPPORTED: ClassVar[tuple[str, ...]] = (UNIX, WINDOWS)


class Namespaces:
    XMLSCHEMA_INSTANCE = "http://www.w3.org/1999/XMLSchema-instance"
    XMLSCHEMA_INSTANCE_PREFIX = "xsi"
    SCHEMA_LOCATION_ATTR = "schemaLocation"


class Patterns:
    NAME_TOKEN = "^[A-Za-z][A-Za-z0-9\\-_.]*$"
    URI_CHARS = "^[A-Za-z0-9\\-._~:/?#\\[\\]@!$&'()*+,;=%]*$"
    URI_SCHEME = "^[A-Za-z][A-Za-z0-9+\\-.]*:"
    PERCENT_ESCAPE = "%(?![0-9A-Fa-f]{2})"


XSLT_TARGET = "xml-stylesheet"
