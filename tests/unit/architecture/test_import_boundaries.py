"""Tests for architecture import boundaries.

The writer core (``waxwriter.xml`` and the modules it builds on) must stay
usable as a library, so it may not import the CLI or the console logger.
"""

from __future__ import annotations

import ast
from pathlib import Path

import pytest

PACKAGE_ROOT = Path(__file__).parent.parent.parent.parent / "waxwriter"

CORE_MODULES = [
    PACKAGE_ROOT / "xml",
    PACKAGE_ROOT / "config.py",
    PACKAGE_ROOT / "constants.py",
    PACKAGE_ROOT / "exceptions.py",
    PACKAGE_ROOT / "ports.py",
]


def get_python_files(path: Path) -> list[Path]:
    if path.is_file():
        return [path]
    return sorted(path.rglob("*.py"))


def module_name(file_path: Path) -> str:
    relative = file_path.relative_to(PACKAGE_ROOT.parent).with_suffix("")
    parts = list(relative.parts)
    if parts[-1] == "__init__":
        parts.pop()
    return ".".join(parts)


def extract_imports_from_file(file_path: Path) -> list[str]:
    """Return absolute module names imported by ``file_path``.

    Relative imports are resolved against the file's own package.
    """
    tree = ast.parse(file_path.read_text(encoding="utf-8"))
    package = module_name(file_path).split(".")
    if file_path.name != "__init__.py":
        package.pop()

    imports: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            imports.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            if node.level:
                base = package[: len(package) - node.level + 1]
                imports.append(".".join([*base, node.module] if node.module else base))
            elif node.module:
                imports.append(node.module)
    return imports


def core_files() -> list[Path]:
    files: list[Path] = []
    for path in CORE_MODULES:
        files.extend(get_python_files(path))
    return files


@pytest.mark.parametrize("file_path", core_files(), ids=lambda p: p.name)
def test_core_does_not_import_cli(file_path: Path):
    forbidden = [
        imp
        for imp in extract_imports_from_file(file_path)
        if imp.startswith(("waxwriter.cli", "click"))
    ]
    assert forbidden == [], f"{module_name(file_path)} imports {forbidden}"


@pytest.mark.parametrize("file_path", core_files(), ids=lambda p: p.name)
def test_core_does_not_import_console_logger(file_path: Path):
    forbidden = [
        imp
        for imp in extract_imports_from_file(file_path)
        if imp.startswith(("waxwriter.infrastructure.logging.console_logger", "rich"))
    ]
    assert forbidden == [], f"{module_name(file_path)} imports {forbidden}"


def test_relative_imports_are_resolved():
    imports = extract_imports_from_file(PACKAGE_ROOT / "xml" / "writer.py")
    assert "waxwriter.config" in imports
    assert "waxwriter.xml.doctype" in imports
