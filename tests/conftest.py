"""Pytest configuration and test helpers."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest


# Ensure the package is importable when running tests without an editable
# install. ``fakeflix`` sits at the project root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


from fakeflix.categories import CategoryDescriptor, CategoryRegistry


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO tests to run on asyncio without requiring trio."""

    return "asyncio"


class FakeClient:
    """In-memory stand-in for the TMDB client.

    ``handler`` maps a requested path to a payload or raises. Requests whose
    ``page`` parameter has an entry in ``gates`` wait for that event first.
    """

    def __init__(
        self,
        handler: Callable[[str], Any] | None = None,
        gates: dict[str, asyncio.Event] | None = None,
    ):
        self.paths: list[str] = []
        self._handler = handler or (lambda path: {"results": [{"id": path}]})
        self._gates = gates or {}

    async def get(self, path: str) -> Any:
        self.paths.append(path)
        gate = self._gates.get(httpx.URL(path).params.get("page", ""))
        if gate is not None:
            await gate.wait()
        return self._handler(path)


def page_payload(path: str) -> dict[str, Any]:
    """Return two items whose ids encode the requested page."""

    page = httpx.URL(path).params.get("page", "1")
    return {
        "page": int(page),
        "results": [
            {"id": f"p{page}-a", "title": f"Page {page} A"},
            {"id": f"p{page}-b", "name": f"Page {page} B"},
        ],
    }


@pytest.fixture
def registry() -> CategoryRegistry:
    return CategoryRegistry(
        domains={
            "movies": (
                CategoryDescriptor(1, "Action", "action", "/discover/movie?with_genres=28", "movies.action", is_large=True),
                CategoryDescriptor(2, "Comedy", "comedy", "/discover/movie?with_genres=35", "movies.comedy"),
                CategoryDescriptor(3, "Horror", "horror", "/discover/movie?with_genres=27", "movies.horror"),
            ),
            "series": (
                CategoryDescriptor(1, "Crime", "crime", "/discover/tv?with_genres=80", "series.crime"),
            ),
        },
        aliases={"browse": "movies", "tvseries": "series"},
        search_template="/search/multi?language=en-US",
    )
