"""
Item Registry: process-wide mapping of item ids to items.
"""

import threading
import logging
from typing import Dict, List

from .errors import ItemNotFound
from .models import Item

logger = logging.getLogger(__name__)


class ItemRegistry:
    """
    Shared store of auction items.

    One lock guards structural changes: item creation, the id counter and
    enumeration. Bid data is guarded by each item's own ledger lock.
    Items are never removed.
    """

    FIRST_ITEM_ID = 1

    def __init__(self):
        self._items: Dict[int, Item] = {}
        self._next_id = self.FIRST_ITEM_ID
        self._lock = threading.Lock()

    def create(self, name: str) -> Item:
        """
        Register a new item under the next sequential id.

        Args:
            name: Display name (validated by the caller)

        Returns:
            The stored Item
        """
        with self._lock:
            item = Item(id=self._next_id, name=name)
            self._items[item.id] = item
            self._next_id += 1

        logger.info(f"Created item {item.id} ({name!r})")
        return item

    def get(self, item_id: int) -> Item:
        """
        Look up an item.

        Raises:
            ItemNotFound: If item_id is not registered
        """
        # dict reads are atomic; items are never removed
        item = self._items.get(item_id)
        if item is None:
            raise ItemNotFound(item_id)
        return item

    def list(self) -> List[Item]:
        """Copy out the current items (registry order)."""
        with self._lock:
            return list(self._items.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __contains__(self, item_id) -> bool:
        return item_id in self._items
