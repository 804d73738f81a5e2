"""In-memory checklist and its mutations.

Every mutation here is pure state change; persisting and re-rendering is the
caller's job (see ``wasuremono.controller``).
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Iterator

from wasuremono.models import Item

DELETE_PROMPT = "Delete this item?"
RESET_PROMPT = "Uncheck all items?"

Confirm = Callable[[str], bool]


class ItemStore:
    """Owns the ordered item list."""

    def __init__(self, items: Iterable[Item] = (), clock: Callable[[], float] = time.time) -> None:
        self.items: list[Item] = list(items)
        self._clock = clock

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self.items)

    def ids(self) -> list[int]:
        return [it.id for it in self.items]

    def find(self, item_id: int) -> Item | None:
        for it in self.items:
            if it.id == item_id:
                return it
        return None

    def unchecked_count(self) -> int:
        return sum(1 for it in self.items if not it.checked)

    def is_complete(self) -> bool:
        return bool(self.items) and self.unchecked_count() == 0

    def _fresh_id(self) -> int:
        """Millisecond timestamp, bumped past the current max if it collides."""
        candidate = int(self._clock() * 1000)
        if self.items:
            highest = max(it.id for it in self.items)
            if candidate <= highest:
                candidate = highest + 1
        return candidate

    # ── Mutations ─────────────────────────────────────────────

    def add(self, text: str) -> Item | None:
        trimmed = text.strip()
        if not trimmed:
            return None
        item = Item(id=self._fresh_id(), text=trimmed, checked=False)
        self.items.append(item)
        return item

    def toggle_check(self, item_id: int) -> Item | None:
        item = self.find(item_id)
        if item is None:
            return None
        item.checked = not item.checked
        return item

    def delete(self, item_id: int, confirm: Confirm) -> bool:
        """Remove an item once the user confirms. Unknown ids never prompt."""
        if self.find(item_id) is None:
            return False
        if not confirm(DELETE_PROMPT):
            return False
        self.items = [it for it in self.items if it.id != item_id]
        return True

    def check_all(self) -> None:
        for it in self.items:
            it.checked = True

    def reset_all(self, confirm: Confirm) -> bool:
        if not confirm(RESET_PROMPT):
            return False
        for it in self.items:
            it.checked = False
        return True

    def reorder(self, id_sequence: Iterable[int]) -> None:
        """Sort items by their position in *id_sequence*.

        Ids the store does not hold are ignored. Items missing from the
        sequence keep their relative order and go after the sequenced ones.
        """
        position: dict[int, int] = {}
        for item_id in id_sequence:
            position.setdefault(item_id, len(position))
        tail = len(position)
        # sorted() is stable, so unsequenced items keep their prior order
        self.items = sorted(self.items, key=lambda it: position.get(it.id, tail))
