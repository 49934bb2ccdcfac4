"""DOCTYPE accumulation.

The prolog may name an external DTD and define internal entities. Nothing
is written until the root element starts, because the DOCTYPE has to name
the root element.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class DocTypeBuilder:
    system_id: str | None = None
    public_id: str | None = None
    entity_defs: list[str] = field(default_factory=list)

    @property
    def has_dtd(self) -> bool:
        return self.system_id is not None

    @property
    def has_content(self) -> bool:
        return self.system_id is not None or bool(self.entity_defs)

    def set_dtd(self, system_id: str, public_id: str | None = None) -> None:
        self.system_id = system_id
        self.public_id = public_id

    def add_entity(self, name: str, value: str) -> None:
        self.entity_defs.append(f'{name} "{value}"')

    def add_external_entity(self, name: str, path: str) -> None:
        self.add_entity(f"{name} SYSTEM", path)

    def render(
        self, root_name: str, *, newline: str | None, indent: str = ""
    ) -> str:
        """Build the DOCTYPE for ``root_name`` and drop the queued entities.

        ``newline`` is ``None`` when output stays on a single line.
        """
        if not self.has_content:
            return ""
        parts = [f"<!DOCTYPE {root_name}"]
        if self.public_id is not None:
            parts.append(f' PUBLIC "{self.public_id}" "{self.system_id}"')
        elif self.system_id is not None:
            parts.append(f' SYSTEM "{self.system_id}"')
        if self.entity_defs:
            parts.append(" [")
            for entity_def in self.entity_defs:
                if newline is not None:
                    parts.append(newline + indent)
                parts.append(f"<!ENTITY {entity_def}>")
            if newline is not None:
                parts.append(newline)
            parts.append("]")
            self.entity_defs.clear()
        parts.append(">")
        if newline is not None:
            parts.append(newline)
        return "".join(parts)
