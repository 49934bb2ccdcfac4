from typing import Protocol, runtime_checkable


@runtime_checkable
class LoggerPort(Protocol):
    pass

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def debug(self, message: str) -> None: ...

    def verbose(self, message: str) -> None: ...

    def log_document_start(self, sink: str, version: str | None) -> None: ...

    def log_document_complete(self, sink: str, element_count: int) -> None: ...


@runtime_checkable
class TextSink(Protocol):
    pass

    def write(self, text: str, /) -> object: ...
