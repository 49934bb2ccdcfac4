"""Namespace prefix scoping for the streaming writer.

One scope frame is pushed per open element. A prefix (``""`` for the
default namespace) is in scope when it was declared on the current element
or on any of its ancestors. Prefixes used by element and attribute names
are queued as *pending* until the start tag is terminated, because a
namespace declaration for them may still follow in the same start tag.
"""

from __future__ import annotations

from ..exceptions import InvalidArgumentError, InvalidStateError


class NamespaceScopeTracker:
    def __init__(self) -> None:
        self._frames: list[set[str]] = []
        self._pending: list[str] = []

    @property
    def depth(self) -> int:
        return len(self._frames)

    @property
    def pending(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def push_scope(self) -> None:
        self._frames.append(set())

    def pop_scope(self) -> set[str]:
        if not self._frames:
            raise InvalidStateError("no namespace scope is open")
        return self._frames.pop()

    def declare(self, prefix: str | None, *, check: bool = True) -> None:
        """Declare ``prefix`` on the innermost open element.

        With ``check`` enabled a prefix that is already visible from the
        innermost frame is rejected, whether it was declared on this element
        or on an ancestor.
        """
        if not self._frames:
            raise InvalidStateError("can't declare a namespace outside an element")
        prefix = prefix or ""
        if check and self.is_in_scope(prefix):
            raise InvalidArgumentError(
                f'The namespace prefix "{prefix}" is already in scope.'
            )
        self._frames[-1].add(prefix)

    def is_in_scope(self, prefix: str | None) -> bool:
        prefix = prefix or ""
        return any(prefix in frame for frame in reversed(self._frames))

    def reference(self, prefix: str) -> None:
        self._pending.append(prefix)

    def verify_pending(self) -> None:
        """Check queued prefixes; the queue is kept when one is out of scope."""
        for prefix in self._pending:
            if not self.is_in_scope(prefix):
                raise InvalidArgumentError(
                    f'The namespace prefix "{prefix}" isn\'t in scope.'
                )
        self._pending.clear()

    def discard_pending(self) -> None:
        self._pending.clear()
