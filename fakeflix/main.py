"""Wiring for the catalog core: logging, HTTP client and shared state."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator

import httpx

from .categories import CategoryRegistry, build_default_registry
from .config import Settings, get_settings
from .favourites import FavouritesStore
from .models import Item
from .selection import build_image_url, truncate
from .services.orchestrator import RetrievalOrchestrator
from .services.results import ResultCache
from .services.tmdb import TMDBClient

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Catalog:
    """Everything a presentation layer needs to drive the catalog."""

    settings: Settings
    registry: CategoryRegistry
    client: TMDBClient
    results: ResultCache
    orchestrator: RetrievalOrchestrator
    favourites: FavouritesStore

    def backdrop_url(self, item: Item) -> str | None:
        return build_image_url(
            item.backdrop_path,
            str(self.settings.image_base_url),
            str(self.settings.fallback_image_url),
        )

    def describe(self, item: Item, max_length: int = 150) -> str | None:
        """Return the item's overview shortened for banner display."""

        return truncate(item.overview, max_length, ellipsis=self.settings.ellipsis)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level)


@asynccontextmanager
async def open_catalog(
    settings: Settings | None = None,
    *,
    registry: CategoryRegistry | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[Catalog]:
    """Yield a ready catalog; outstanding fetches are cancelled on exit."""

    settings = settings or get_settings()
    configure_logging(settings)
    async with httpx.AsyncClient(
        base_url=str(settings.tmdb_api_url),
        timeout=httpx.Timeout(settings.request_timeout_seconds, connect=10.0),
        transport=transport,
    ) as http_client:
        client = TMDBClient(settings, http_client)
        results = ResultCache(discard_stale=settings.discard_stale_results)
        orchestrator = RetrievalOrchestrator(
            registry if registry is not None else build_default_registry(settings),
            client,
            results,
        )
        logger.info("%s catalog ready against %s", settings.app_name, settings.tmdb_api_url)
        try:
            yield Catalog(
                settings=settings,
                registry=orchestrator.registry,
                client=client,
                results=results,
                orchestrator=orchestrator,
                favourites=FavouritesStore(),
            )
        finally:
            await orchestrator.aclose()
