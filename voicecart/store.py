"""Shopping list and purchase history storage.

The pipeline depends on the ``ListStore`` and ``HistorySource`` protocols,
never on module state. ``InMemoryShoppingList`` implements both behind one
lock so concurrent requests can share a single instance.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from voicecart.data.tables import CATEGORY_MAP, DEFAULT_CATEGORY
from voicecart.models.contracts import ListItem


def normalize_name(name: str) -> str:
    return name.lower().strip()


def categorize(name: str) -> str:
    """Map an item name to a category via the keyword table ("General" if none match)."""
    normalized = normalize_name(name)
    for keyword, category in CATEGORY_MAP.items():
        if keyword in normalized:
            return category
    return DEFAULT_CATEGORY


class ListStore(Protocol):
    def add_or_increment(self, name: str, quantity: int = 1, category: str | None = None) -> ListItem: ...

    def remove(self, name: str) -> ListItem | None: ...

    def search(self, name: str) -> list[ListItem]: ...

    def snapshot(self) -> list[ListItem]: ...

    def clear(self) -> None: ...


class HistorySource(Protocol):
    def running_low(self) -> list[str]: ...


class ShoppingListStore(ListStore, HistorySource, Protocol):
    """A list store that also answers history queries."""


@dataclass
class _HistoryEntry:
    count: int = 0
    last_added: str | None = None


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class InMemoryShoppingList:
    """Thread-safe in-memory list with add-event history.

    Every returned ``ListItem`` is a copy; callers can't mutate stored state.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: list[ListItem] = []
        self._history: dict[str, _HistoryEntry] = {}
        self._next_id = 1

    def add_or_increment(self, name: str, quantity: int = 1, category: str | None = None) -> ListItem:
        if quantity < 1:
            raise ValueError(f"quantity must be positive, got {quantity}")
        normalized = normalize_name(name)
        now = _now_iso()
        with self._lock:
            entry = self._history.setdefault(normalized, _HistoryEntry())
            entry.count += 1
            entry.last_added = now

            for item in self._items:
                if item.name == normalized:
                    item.quantity += quantity
                    return item.model_copy()

            item = ListItem(
                id=self._next_id,
                name=normalized,
                quantity=quantity,
                category=category or categorize(normalized),
                added_at=now,
            )
            self._next_id += 1
            self._items.append(item)
            return item.model_copy()

    def remove(self, name: str) -> ListItem | None:
        normalized = normalize_name(name)
        with self._lock:
            for index, item in enumerate(self._items):
                if item.name == normalized:
                    return self._items.pop(index)
        return None

    def search(self, name: str) -> list[ListItem]:
        """Items whose name contains ``name`` (case-insensitive)."""
        query = normalize_name(name)
        with self._lock:
            return [item.model_copy() for item in self._items if query in item.name]

    def snapshot(self) -> list[ListItem]:
        with self._lock:
            return [item.model_copy() for item in self._items]

    def clear(self) -> None:
        """Empty the active list. Purchase history is kept."""
        with self._lock:
            self._items = []
            self._next_id = 1

    def running_low(self) -> list[str]:
        """Names added at least twice historically that aren't on the list now."""
        with self._lock:
            on_list = {item.name for item in self._items}
            return [
                name
                for name, entry in self._history.items()
                if entry.count >= 2 and name not in on_list
            ]
