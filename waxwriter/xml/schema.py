from __future__ import annotations


class SchemaLocationRegistry:
    """Namespace URI to schema path pairs awaiting an ``xsi:schemaLocation``."""

    def __init__(self) -> None:
        self._locations: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._locations)

    def is_empty(self) -> bool:
        return not self._locations

    def register(self, uri: str, schema_path: str) -> None:
        self._locations[uri] = schema_path

    def render(self, separator: str = " ") -> str:
        return separator.join(
            f"{uri} {path}" for uri, path in self._locations.items()
        )

    def clear(self) -> None:
        self._locations.clear()
