"""Binding a writer to its output destination.

``open_sink`` turns the construction argument of :class:`~waxwriter.xml.WAX`
into a :class:`BoundSink`. Only destinations the writer opened itself are
closed on release; caller-supplied streams are flushed and left open.
"""

from __future__ import annotations

from dataclasses import dataclass
import io
import os
import sys
from typing import TYPE_CHECKING, Literal

from ..exceptions import SinkError

if TYPE_CHECKING:
    from ..ports import TextSink

SinkKind = Literal["stdout", "path", "binary", "text"]


@dataclass(slots=True)
class BoundSink:
    stream: TextSink
    kind: SinkKind
    description: str

    def write(self, text: str) -> None:
        try:
            self.stream.write(text)
        except OSError as exc:
            raise SinkError(f"failed writing to {self.description}: {exc}") from exc

    def release(self) -> None:
        """Flush, then close or detach according to who owns the stream."""
        stream = self.stream
        try:
            if self.kind == "path":
                stream.close()  # type: ignore[attr-defined]
            elif self.kind == "binary":
                stream.flush()  # type: ignore[attr-defined]
                stream.detach()  # type: ignore[attr-defined]
            else:
                flush = getattr(stream, "flush", None)
                if flush is not None:
                    flush()
        except OSError as exc:
            raise SinkError(f"failed releasing {self.description}: {exc}") from exc


def _is_binary(target: object) -> bool:
    if isinstance(target, (io.RawIOBase, io.BufferedIOBase)):
        return True
    mode = getattr(target, "mode", None)
    return isinstance(mode, str) and "b" in mode


def open_sink(target: object = None) -> BoundSink:
    if target is None:
        return BoundSink(sys.stdout, "stdout", "<stdout>")
    if isinstance(target, (str, os.PathLike)):
        path = os.fspath(target)
        try:
            stream = open(path, "w", encoding="utf-8", newline="")
        except OSError as exc:
            raise SinkError(f"can't open {path} for writing: {exc}") from exc
        return BoundSink(stream, "path", str(path))
    if _is_binary(target):
        wrapper = io.TextIOWrapper(
            target,  # type: ignore[arg-type]
            encoding="utf-8",
            newline="",
            write_through=True,
        )
        return BoundSink(wrapper, "binary", f"<{type(target).__name__}>")
    if callable(getattr(target, "write", None)):
        return BoundSink(target, "text", f"<{type(target).__name__}>")  # type: ignore[arg-type]
    raise TypeError(f"can't write XML to {type(target).__name__}")
