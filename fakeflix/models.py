"""Pydantic models describing catalog payloads and per-category state."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import MalformedResponseError


class Item(BaseModel):
    """A media record as returned by TMDB list endpoints.

    Only ``id`` is required. Fields the catalog does not interpret are
    ignored rather than rejected.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int | str
    title: str | None = None
    name: str | None = None
    original_name: str | None = None
    overview: str | None = None
    backdrop_path: str | None = None
    genre_ids: tuple[int, ...] = ()

    @field_validator("genre_ids", mode="before")
    @classmethod
    def _lenient_genre_ids(cls, value: object) -> tuple[int, ...]:
        """Keep integer ids only; anything else is treated as no genres."""

        if not isinstance(value, (list, tuple)):
            return ()
        return tuple(
            entry for entry in value if isinstance(entry, int) and not isinstance(entry, bool)
        )


class CatalogPage(BaseModel):
    """The ``results`` envelope shared by TMDB list, discover and search endpoints."""

    model_config = ConfigDict(extra="ignore")

    results: list[Item]
    page: int | None = None
    total_pages: int | None = None
    total_results: int | None = None

    @classmethod
    def from_payload(cls, payload: Any, *, path: str) -> "CatalogPage":
        """Validate a decoded JSON body, raising ``MalformedResponseError`` on shape errors."""

        if not isinstance(payload, dict):
            raise MalformedResponseError(
                path, f"expected a JSON object, got {type(payload).__name__}"
            )
        if not isinstance(payload.get("results"), list):
            raise MalformedResponseError(path, "missing 'results' list")
        try:
            return cls.model_validate(payload)
        except ValidationError as exc:
            raise MalformedResponseError(
                path, f"invalid items ({exc.error_count()} errors)"
            ) from exc


class ResultEntry(BaseModel):
    """Loading/error/data triple tracked for one selector key."""

    model_config = ConfigDict(frozen=True)

    loading: bool = True
    error: bool = False
    data: tuple[Item, ...] = ()
    url: str | None = None
    is_page: bool = False
    request_id: int = 0

    @property
    def ready(self) -> bool:
        return not self.loading and not self.error


class RowDescriptor(BaseModel):
    """Lightweight projection of a category for row rendering."""

    model_config = ConfigDict(frozen=True)

    id: int | str
    title: str
    genre: str
    selector_key: str
    is_large: bool = False


def item_field(item: Item | Mapping[str, Any], name: str) -> Any:
    """Read ``name`` from a model or a raw decoded mapping."""

    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)
