"""Stack of enclosing list containers threaded through the markup walk."""
from __future__ import annotations

from dataclasses import dataclass

from .document_models import ListKind

_TAG_KINDS = {"ol": ListKind.ORDERED, "ul": ListKind.UNORDERED}


@dataclass(frozen=True, slots=True)
class ListContext:
    """Immutable stack of list kinds, innermost last.

    ``push`` returns a new context, so popping is just returning from the
    recursive call that received the pushed value.
    """

    markers: tuple[ListKind, ...] = ()

    def push(self, kind: ListKind) -> ListContext:
        return ListContext(self.markers + (kind,))

    @property
    def depth(self) -> int:
        return max(0, len(self.markers) - 1)

    @property
    def kind(self) -> ListKind:
        """Kind of the innermost list; a bare ``li`` counts as unordered."""

        if not self.markers:
            return ListKind.UNORDERED
        return self.markers[-1]

    @staticmethod
    def kind_for_tag(name: str) -> ListKind | None:
        return _TAG_KINDS.get(name)


EMPTY_LIST_CONTEXT = ListContext()


__all__ = ["EMPTY_LIST_CONTEXT", "ListContext"]
