from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import os
from pathlib import Path
import tomllib
from typing import cast
import warnings

from .constants import Defaults, LineSeparators
from .exceptions import InvalidArgumentError
from .xml.indentation import validate_indent
from .xml.validation import is_version

_LINE_SEPARATOR_NAMES = {"lf": LineSeparators.UNIX, "crlf": LineSeparators.WINDOWS}
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True, slots=True)
class WriterConfig:
    indent: str | None = Defaults.INDENT
    trust_me: bool = False
    line_separator: str = Defaults.LINE_SEPARATOR
    space_in_empty_elements: bool = False
    version: str | None = None

    def __post_init__(self) -> None:
        try:
            validate_indent(self.indent)
        except InvalidArgumentError as e:
            raise ValueError(f"indent must be None, a tab or 0-4 spaces: {e}") from e
        if self.line_separator not in LineSeparators.SUPPORTED:
            raise ValueError(
                f"line_separator must be LF or CRLF, got {self.line_separator!r}"
            )
        if self.version is not None and not is_version(self.version):
            raise ValueError(f"version must be 1.0, 1.1 or 1.2, got {self.version!r}")

    @classmethod
    def from_env(cls) -> WriterConfig:
        raw_separator = os.getenv("WAX_LINE_SEPARATOR", "lf").strip().lower()
        raw_version = os.getenv("WAX_VERSION")
        return cls(
            indent=_parse_indent(os.getenv("WAX_INDENT", Defaults.INDENT)),
            trust_me=_coerce_bool(os.getenv("WAX_TRUST_ME", "false"), key="WAX_TRUST_ME"),
            line_separator=_LINE_SEPARATOR_NAMES.get(raw_separator, raw_separator),
            space_in_empty_elements=_coerce_bool(
                os.getenv("WAX_SPACE_IN_EMPTY_ELEMENTS", "false"),
                key="WAX_SPACE_IN_EMPTY_ELEMENTS",
            ),
            version=(raw_version.strip() or None) if raw_version else None,
        )


class ConfigLoader:
    """Builds a WriterConfig from the environment and an optional TOML file."""

    @staticmethod
    def load(config_file: Path | None = None) -> WriterConfig:
        config = WriterConfig.from_env()
        if config_file is None:
            config_file = Path("waxwriter.toml")
        if config_file.exists():
            try:
                config = ConfigLoader._load_from_toml(config_file, config)
            except Exception as e:
                warnings.warn(
                    f"Failed to load config from {config_file}: {e}", stacklevel=2
                )
        return config

    @staticmethod
    def _load_from_toml(config_file: Path, base_config: WriterConfig) -> WriterConfig:
        with config_file.open("rb") as handle:
            data = tomllib.load(handle)
        section = _get_table(data, "writer")
        indent = base_config.indent
        if "indent" in section:
            indent = _coerce_indent(section["indent"], key="writer.indent")
        trust_me = base_config.trust_me
        if (value := section.get("trust_me")) is not None:
            trust_me = _coerce_bool(value, key="writer.trust_me")
        line_separator = base_config.line_separator
        if (value := section.get("line_separator")) is not None:
            raw = str(value).strip().lower()
            line_separator = _LINE_SEPARATOR_NAMES.get(raw, str(value))
        space_in_empty_elements = base_config.space_in_empty_elements
        if (value := section.get("space_in_empty_elements")) is not None:
            space_in_empty_elements = _coerce_bool(
                value, key="writer.space_in_empty_elements"
            )
        version = base_config.version
        if "version" in section:
            raw_version = section.get("version")
            cleaned = str(raw_version).strip() if raw_version is not None else ""
            version = cleaned or None
        return WriterConfig(
            indent=indent,
            trust_me=trust_me,
            line_separator=line_separator,
            space_in_empty_elements=space_in_empty_elements,
            version=version,
        )


def _get_table(data: Mapping[str, object], key: str) -> Mapping[str, object]:
    value = data.get(key)
    if isinstance(value, Mapping):
        return cast("Mapping[str, object]", value)
    return {}


def _parse_indent(raw: str) -> str | None:
    if raw.strip().lower() == "none":
        return None
    if raw.isdigit():
        return " " * int(raw)
    if raw == "\\t" or raw.lower() == "tab":
        return "\t"
    return raw


def _coerce_indent(value: object, *, key: str) -> str | None:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be a string or int, got bool")
    if isinstance(value, int):
        return " " * value
    if isinstance(value, str):
        return _parse_indent(value)
    raise ValueError(f"{key} must be a string or int, got {type(value).__name__}")


def _coerce_bool(value: object, *, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    raise ValueError(f"{key} must be a boolean, got {value!r}")
