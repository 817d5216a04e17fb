"""Deduplicating favourites list."""

from __future__ import annotations

from typing import Any, Mapping, Sequence, TypeVar, Union

from .models import Item, item_field

FavouriteT = TypeVar("FavouriteT", bound=Union[Item, Mapping[str, Any]])


def _contains(favourites: Sequence[Any], item: Any) -> bool:
    item_id = item_field(item, "id")
    return any(item_field(entry, "id") == item_id for entry in favourites)


def add_favourite(favourites: Sequence[FavouriteT], item: FavouriteT) -> list[FavouriteT]:
    """Return a new list with ``item`` appended unless its id is already present."""

    if _contains(favourites, item):
        return list(favourites)
    return [*favourites, item]


def remove_favourite(
    favourites: Sequence[FavouriteT], item: FavouriteT
) -> list[FavouriteT]:
    """Return a new list without the entry sharing ``item``'s id."""

    item_id = item_field(item, "id")
    return [entry for entry in favourites if item_field(entry, "id") != item_id]


class FavouritesStore:
    """Owns the current favourites list and replaces it on every change."""

    def __init__(self, initial: Sequence[Item] = ()):
        self._items: list[Item] = []
        for item in initial:
            self._items = add_favourite(self._items, item)

    @property
    def items(self) -> list[Item]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def contains(self, item: Item) -> bool:
        return _contains(self._items, item)

    def add(self, item: Item) -> list[Item]:
        self._items = add_favourite(self._items, item)
        return self.items

    def remove(self, item: Item) -> list[Item]:
        self._items = remove_favourite(self._items, item)
        return self.items

    def toggle(self, item: Item) -> bool:
        """Add ``item`` if absent, otherwise remove it. Returns the new membership."""

        if self.contains(item):
            self.remove(item)
            return False
        self.add(item)
        return True
