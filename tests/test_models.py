from __future__ import annotations

import pytest

from fakeflix.errors import MalformedResponseError
from fakeflix.models import CatalogPage, Item, ResultEntry


def test_item_ignores_unknown_fields() -> None:
    item = Item.model_validate(
        {
            "id": 550,
            "title": "Fight Club",
            "vote_average": 8.4,
            "genre_ids": [18, 53],
            "adult": False,
        }
    )

    assert item.id == 550
    assert item.genre_ids == (18, 53)
    assert not hasattr(item, "vote_average")


def test_item_requires_id() -> None:
    with pytest.raises(ValueError):
        Item.model_validate({"title": "No identity"})


def test_catalog_page_reads_results_envelope() -> None:
    page = CatalogPage.from_payload(
        {"page": 2, "total_pages": 10, "results": [{"id": 1}, {"id": 2, "name": "B"}]},
        path="/discover/tv",
    )

    assert page.page == 2
    assert [item.id for item in page.results] == [1, 2]


@pytest.mark.parametrize(
    "payload",
    [
        [],
        None,
        {"status_message": "Invalid API key"},
        {"results": "nope"},
        {"results": [{"title": "missing id"}]},
    ],
)
def test_catalog_page_rejects_other_shapes(payload: object) -> None:
    with pytest.raises(MalformedResponseError) as excinfo:
        CatalogPage.from_payload(payload, path="/trending/all/week")

    assert excinfo.value.path == "/trending/all/week"


def test_result_entry_defaults_to_loading() -> None:
    entry = ResultEntry()

    assert entry.loading is True
    assert entry.error is False
    assert entry.data == ()
    assert entry.ready is False


def test_unused_fields_with_odd_values_do_not_break_a_page() -> None:
    page = CatalogPage.from_payload(
        {
            "results": [
                {"id": 1, "genre_ids": None, "media_type": None, "release_date": 2024},
                {"id": 2, "genre_ids": [16, "x", None, 35]},
                {"id": 3, "first_air_date": ["not", "a", "date"]},
            ]
        },
        path="/trending/all/week",
    )

    assert [item.genre_ids for item in page.results] == [(), (16, 35), ()]
