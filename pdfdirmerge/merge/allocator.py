"""Collision-free object id allocation for a single merge operation."""

from __future__ import annotations

from ..core.model import ObjectId


class IdAllocator:
    """Hands out ``(n, 0)`` ids starting at 1, one per call.

    One allocator spans every source document of a merge and is never reset
    between them.
    """

    __slots__ = ("_last",)

    def __init__(self) -> None:
        self._last = 0

    @property
    def last(self) -> int:
        """The most recently allocated object number, ``0`` before any call."""

        return self._last

    def allocate(self) -> ObjectId:
        self._last += 1
        return ObjectId.of(self._last, 0)

    def __repr__(self) -> str:
        return f"IdAllocator(last={self._last})"


__all__ = ["IdAllocator"]
