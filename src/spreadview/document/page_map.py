"""Virtual-to-actual page mapping with synthetic blank slots."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Set

Slot = Optional[int]


class PageMap:
    """Ordered slots mapping virtual page indices onto document pages.

    ``None`` marks a blank slot. Real slots keep their original order and are
    never duplicated; only blanks are ever added or removed.
    """

    def __init__(self, page_count: int) -> None:
        if page_count < 0:
            raise ValueError("page_count cannot be negative")
        self.page_count = page_count
        self._slots: List[Slot] = list(range(page_count))

    @property
    def total_pages(self) -> int:
        return len(self._slots)

    @property
    def slots(self) -> Sequence[Slot]:
        return tuple(self._slots)

    def actual_page(self, virtual_index: int) -> Optional[int]:
        if virtual_index < 0 or virtual_index >= len(self._slots):
            return None
        return self._slots[virtual_index]

    def is_blank(self, virtual_index: int) -> bool:
        in_range = 0 <= virtual_index < len(self._slots)
        return in_range and self._slots[virtual_index] is None

    def insert_blank_at(self, virtual_index: int) -> bool:
        """Insert a blank at ``virtual_index``; out-of-range positions are ignored."""

        if virtual_index < 0 or virtual_index > len(self._slots):
            return False
        self._slots.insert(virtual_index, None)
        return True

    insert_blank_before = insert_blank_at

    def toggle_first_blank(self) -> None:
        if self._slots and self._slots[0] is None:
            del self._slots[0]
        else:
            self._slots.insert(0, None)

    def blank_indices(self) -> Set[int]:
        return {index for index, slot in enumerate(self._slots) if slot is None}

    def reset(self) -> None:
        self._slots = list(range(self.page_count))

    def replay_blanks(self, indices: Iterable[int]) -> None:
        """Rebuild the identity layout, then insert blanks in ascending order."""

        self.reset()
        for index in sorted(set(indices)):
            self.insert_blank_at(index)

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self) -> str:
        return f"PageMap(page_count={self.page_count}, slots={self._slots!r})"


__all__ = ["PageMap", "Slot"]
