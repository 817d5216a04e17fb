"""Favourites list deduplication."""

from __future__ import annotations

from fakeflix.favourites import FavouritesStore, add_favourite, remove_favourite
from fakeflix.models import Item


def test_add_twice_appends_once() -> None:
    original = [Item(id=1, title="Existing")]
    item = Item(id=2, title="New")

    once = add_favourite(original, item)
    twice = add_favourite(once, item)

    assert len(twice) == len(original) + 1
    assert twice == once
    assert twice[-1] == item


def test_add_matches_on_id_only() -> None:
    favourites = [Item(id=1, title="Old title")]

    result = add_favourite(favourites, Item(id=1, title="New title"))

    assert result == favourites
    assert result[0].title == "Old title"


def test_operations_do_not_mutate_input() -> None:
    favourites = [Item(id=1)]

    added = add_favourite(favourites, Item(id=2))
    removed = remove_favourite(favourites, Item(id=1))

    assert favourites == [Item(id=1)]
    assert added is not favourites
    assert removed == []


def test_remove_absent_id_returns_equal_content() -> None:
    favourites = [Item(id=1), Item(id=2)]

    result = remove_favourite(favourites, Item(id=3))

    assert result == favourites
    assert result is not favourites


def test_remove_is_idempotent() -> None:
    favourites = [Item(id=1), Item(id=2)]
    target = Item(id=1)

    once = remove_favourite(favourites, target)

    assert remove_favourite(once, target) == once == [Item(id=2)]


def test_raw_mappings_are_supported() -> None:
    favourites = add_favourite([], {"id": 10, "name": "Show"})
    favourites = add_favourite(favourites, {"id": 10, "name": "Show again"})

    assert favourites == [{"id": 10, "name": "Show"}]
    assert remove_favourite(favourites, {"id": 10}) == []


def test_store_toggle_and_membership() -> None:
    store = FavouritesStore()
    item = Item(id=5, title="Arrival")

    assert store.toggle(item) is True
    assert store.contains(item)
    assert store.items == [item]

    assert store.toggle(item) is False
    assert not store.contains(item)
    assert len(store) == 0


def test_store_deduplicates_initial_items_and_hands_out_copies() -> None:
    store = FavouritesStore([Item(id=1), Item(id=1), Item(id=2)])

    items = store.items
    items.append(Item(id=3))

    assert [item.id for item in store.items] == [1, 2]
    assert store.add(Item(id=2)) == store.items
    assert store.remove(Item(id=1)) == [Item(id=2)]
