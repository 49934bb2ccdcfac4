from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing_extensions import override

from rich.console import Console
from rich.markup import escape as escape_markup

from ...ports import LoggerPort


class LogLevel(IntEnum):
    NORMAL = 0
    VERBOSE = 1
    DEBUG = 2


@dataclass(slots=True)
class LogContext:
    sink: str = ""
    root_element: str = ""
    operation: str = ""
    start_time: datetime = field(default_factory=datetime.now)

    def elapsed_ms(self) -> float:
        return (datetime.now() - self.start_time).total_seconds() * 1000


class ConsoleLogger(LoggerPort):
    pass

    def __init__(self, console: Console | None = None, verbosity: int = 0) -> None:
        super().__init__()
        self.console = console or Console(stderr=True)
        self.verbosity = verbosity
        self._context: LogContext | None = None
        self._stats: dict[str, int] = {
            "documents_started": 0,
            "documents_completed": 0,
            "elements_written": 0,
            "warnings": 0,
            "errors": 0,
        }

    def set_context(self, **kwargs: str) -> None:
        if self._context is None:
            self._context = LogContext()
        for key, value in kwargs.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

    def clear_context(self) -> None:
        self._context = None

    @override
    def info(self, message: str, *, level: int = LogLevel.NORMAL) -> None:
        if self.verbosity >= level:
            prefix = self._get_prefix()
            self.console.print(f"{prefix}{escape_markup(message)}")

    @override
    def verbose(self, message: str) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            prefix = self._get_prefix()
            self.console.print(f"[dim]{prefix}{escape_markup(message)}[/dim]")

    @override
    def debug(self, message: str) -> None:
        if self.verbosity >= LogLevel.DEBUG:
            prefix = self._get_prefix()
            self.console.print(
                f"[dim cyan]{prefix}{escape_markup(message)}[/dim cyan]"
            )

    @override
    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {escape_markup(message)}")

    @override
    def warning(self, message: str) -> None:
        self._stats["warnings"] += 1
        self.console.print(f"[yellow]⚠[/yellow] {escape_markup(message)}")

    @override
    def error(self, message: str) -> None:
        self._stats["errors"] += 1
        self.console.print(f"[red]✗[/red] {escape_markup(message)}")

    @override
    def log_document_start(self, sink: str, version: str | None) -> None:
        self.set_context(sink=sink)
        self._stats["documents_started"] += 1
        self.verbose(f"Writing XML to {sink}")
        if version is not None:
            self.debug(f"  XML declaration version {version}")

    @override
    def log_document_complete(self, sink: str, element_count: int) -> None:
        self._stats["documents_completed"] += 1
        self._stats["elements_written"] += element_count
        msg = f"Finished {sink}: {element_count:,} elements"
        if self._context is not None and self.verbosity >= LogLevel.DEBUG:
            msg += f" in {self._context.elapsed_ms():.1f} ms"
        self.verbose(msg)

    def log_final_stats(self) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            self.console.print()
            self.console.print("[dim]Writer Statistics:[/dim]")
            self.console.print(
                f"[dim]  Documents written: {self._stats['documents_completed']}[/dim]"
            )
            self.console.print(
                f"[dim]  Elements written: {self._stats['elements_written']:,}[/dim]"
            )
            if self._stats["warnings"] > 0:
                self.console.print(
                    f"[dim yellow]  Warnings: {self._stats['warnings']}[/dim yellow]"
                )
            if self._stats["errors"] > 0:
                self.console.print(
                    f"[dim red]  Errors: {self._stats['errors']}[/dim red]"
                )

    def get_stats(self) -> dict[str, int]:
        return self._stats.copy()

    def reset_stats(self) -> None:
        self._stats = {
            "documents_started": 0,
            "documents_completed": 0,
            "elements_written": 0,
            "warnings": 0,
            "errors": 0,
        }

    def _get_prefix(self) -> str:
        if self._context is None or self.verbosity < LogLevel.DEBUG:
            return ""
        parts: list[str] = []
        if self._context.operation:
            parts.append(self._context.operation)
        if self._context.root_element:
            parts.append(self._context.root_element)
        return f"\\[{':'.join(parts)}] " if parts else ""
