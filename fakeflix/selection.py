"""Pure helpers for choosing and presenting catalog items."""

from __future__ import annotations

import random
from typing import Any, Iterable, Mapping, Protocol, Sequence, TypeVar

from .categories import GENRES
from .models import Item, item_field

T = TypeVar("T")

TITLE_FIELDS = ("title", "name", "original_name")


class SupportsRandrange(Protocol):
    def randrange(self, stop: int) -> int:
        ...


def pick_random(items: Sequence[T], rng: SupportsRandrange | None = None) -> T | None:
    """Return a uniformly chosen element of ``items`` or ``None`` when empty.

    The index is drawn from ``[0, len(items))``. An out-of-range index from a
    custom ``rng`` wraps around, so ``-1`` selects the last element.
    """

    if not items:
        return None
    chooser = rng if rng is not None else random
    index = chooser.randrange(len(items))
    return items[index % len(items)]


def resolve_title(item: Item | Mapping[str, Any]) -> str | None:
    """Return the first non-empty of ``title``, ``name`` and ``original_name``."""

    for field_name in TITLE_FIELDS:
        value = item_field(item, field_name)
        if value:
            return value
    return None


def truncate(text: str | None, max_length: int, *, ellipsis: str = "…") -> str | None:
    """Shorten ``text`` to ``max_length - 1`` characters plus ``ellipsis``.

    Text no longer than ``max_length`` is returned unchanged. For
    ``max_length`` of 0 or 1 a longer text collapses to the ellipsis alone.
    """

    if max_length < 0:
        raise ValueError("max_length must not be negative")
    if text is None or len(text) <= max_length:
        return text
    return text[: max(max_length - 1, 0)] + ellipsis


def build_image_url(path: str | None, base_url: str, fallback: str | None = None) -> str | None:
    """Join a TMDB image path onto ``base_url``; missing paths yield ``fallback``."""

    if not path:
        return fallback
    if path.startswith("http"):
        return path
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def year_only(value: str | None) -> str | None:
    if not value or len(value) < 4:
        return None
    return value[:4]


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def convert_genres(
    genre_ids: Iterable[int],
    genres: Mapping[int, str] = GENRES,
    *,
    limit: int = 3,
) -> list[str]:
    """Map the first ``limit`` genre ids to names, skipping unknown ids."""

    names: list[str] = []
    for index, genre_id in enumerate(genre_ids):
        if index >= limit:
            break
        name = genres.get(genre_id)
        if name:
            names.append(name)
    return names
