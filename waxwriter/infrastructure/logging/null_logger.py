from typing_extensions import override

from ...ports import LoggerPort


class NullLogger(LoggerPort):
    pass

    @override
    def info(self, message: str) -> None:
        return

    @override
    def success(self, message: str) -> None:
        return

    @override
    def warning(self, message: str) -> None:
        return

    @override
    def error(self, message: str) -> None:
        return

    @override
    def debug(self, message: str) -> None:
        return

    @override
    def verbose(self, message: str) -> None:
        return

    @override
    def log_document_start(self, sink: str, version: str | None) -> None:
        return None

    @override
    def log_document_complete(self, sink: str, element_count: int) -> None:
        return None
