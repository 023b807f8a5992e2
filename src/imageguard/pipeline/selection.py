"""Live detection results and the user's per-item redaction choices."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from imageguard.types import DetectorConfig, SensitiveItem


class SelectionStore:
    """Holds the current items and their ``selected`` flags.

    Only two events mutate it: a detection run replacing everything, and a
    user toggling a single item. Detector flags are not stored here; they are
    passed to :meth:`active_items` so turning a category off hides its items
    without touching their selection.
    """

    def __init__(self, items: Optional[Iterable[SensitiveItem]] = None) -> None:
        self._items: Dict[str, SensitiveItem] = {}
        if items is not None:
            self.replace_all(items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(list(self._items.values()))

    @property
    def items(self) -> List[SensitiveItem]:
        return list(self._items.values())

    def get(self, item_id: str) -> Optional[SensitiveItem]:
        return self._items.get(item_id)

    def replace_all(self, items: Iterable[SensitiveItem]) -> None:
        self._items = {item.id: item for item in items}

    def clear(self) -> None:
        self._items = {}

    def toggle_item(self, item_id: str) -> bool:
        """Flip one item's selection; unknown ids are ignored.

        A toggle may arrive after a newer detection replaced the item it
        refers to, so a miss is not an error. Returns True if an item changed.
        """
        item = self._items.get(item_id)
        if item is None:
            return False
        item.selected = not item.selected
        return True

    def set_selected(self, item_id: str, selected: bool) -> bool:
        item = self._items.get(item_id)
        if item is None:
            return False
        item.selected = bool(selected)
        return True

    def active_items(self, config: DetectorConfig) -> List[SensitiveItem]:
        """Items that count toward the mask: category enabled and selected."""
        return [
            item
            for item in self._items.values()
            if item.selected and config.allows(item.type)
        ]


__all__ = ["SelectionStore"]
