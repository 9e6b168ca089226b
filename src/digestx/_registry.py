"""Watch registry — the ordered watch list of a single Scope.

Slots are kept in registration order and a pass walks them oldest to newest.
Watches added during a walk land after the cursor, so the same walk reaches
them. Removal leaves a tombstone (None) in place while any walk is running,
so the cursor never shifts; tombstones are compacted once no walk is active.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from digestx.watch import Watch


class WatchRegistry:
    """Ordered watches, safe to mutate while being iterated."""

    __slots__ = ("_slots", "_live", "_walkers")

    def __init__(self) -> None:
        self._slots: list[Watch | None] = []
        self._live = 0
        # Number of walks in progress. Nested digests walk the same registry.
        self._walkers = 0

    def add(self, watch: Watch) -> None:
        self._slots.append(watch)
        self._live += 1

    def remove(self, watch: Watch) -> bool:
        """Tombstone the watch. Returns False if it was not registered."""
        for index, slot in enumerate(self._slots):
            if slot is watch:
                self._slots[index] = None
                self._live -= 1
                self._compact()
                return True
        return False

    def __len__(self) -> int:
        return self._live

    def __iter__(self) -> Iterator[Watch]:
        """Walk live watches in registration order.

        The length is re-read on every step, so appends made by callbacks
        are visited. Close the iterator when breaking out early.
        """
        self._walkers += 1
        try:
            index = 0
            while index < len(self._slots):
                watch = self._slots[index]
                index += 1
                if watch is not None:
                    yield watch
        finally:
            self._walkers -= 1
            self._compact()

    def _compact(self) -> None:
        if self._walkers == 0 and self._live != len(self._slots):
            self._slots = [slot for slot in self._slots if slot is not None]

    def __repr__(self) -> str:
        return f"WatchRegistry(live={self._live}, slots={len(self._slots)})"
