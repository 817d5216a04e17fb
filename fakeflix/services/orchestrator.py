"""Dispatch category fetches and expose their results."""

from __future__ import annotations

import asyncio
import logging

import httpx

from ..categories import SEARCH_SELECTOR_KEY, CategoryDescriptor, CategoryRegistry
from ..models import Item, RowDescriptor
from ..selection import SupportsRandrange, pick_random
from .results import FetchAction, PendingResult, ResultCache, load_results
from .tmdb import JSONGetter

logger = logging.getLogger(__name__)


def paginate(url_template: str, page: int) -> str:
    """Return ``url_template`` with its ``page`` query parameter set."""

    return str(httpx.URL(url_template).copy_set_param("page", page))


class RetrievalOrchestrator:
    """Resolve categories through the registry and fetch them in the background.

    Every dispatch runs as its own task; results land in the shared
    :class:`ResultCache` under the descriptor's selector key. Callers never
    wait on a fetch, and one category failing does not affect the others.
    """

    def __init__(
        self,
        registry: CategoryRegistry,
        client: JSONGetter,
        results: ResultCache,
    ):
        self._registry = registry
        self._client = client
        self._results = results
        self._jobs: set[asyncio.Task[None]] = set()

    @property
    def registry(self) -> CategoryRegistry:
        return self._registry

    @property
    def results(self) -> ResultCache:
        return self._results

    @property
    def in_flight(self) -> int:
        return len(self._jobs)

    def retrieve_category(
        self, domain: str, genre: str, page: int
    ) -> CategoryDescriptor:
        """Fetch one page of a category; a new page replaces the previous one."""

        if isinstance(page, bool) or not isinstance(page, int) or page < 1:
            raise ValueError(f"page must be a positive integer, got {page!r}")
        descriptor = self._registry.lookup(domain, genre)
        url = paginate(descriptor.url_template, page)
        self._dispatch(descriptor.fetch_action, descriptor.selector_key, url)
        return descriptor

    def retrieve_all(self, domain: str) -> list[RowDescriptor]:
        """Fetch the first page of every category in ``domain``."""

        rows: list[RowDescriptor] = []
        for descriptor in self._registry.list_all(domain):
            self._dispatch(
                descriptor.fetch_action,
                descriptor.selector_key,
                descriptor.url_template,
                is_page=True,
            )
            rows.append(
                RowDescriptor(
                    id=descriptor.id,
                    title=descriptor.title,
                    genre=descriptor.genre,
                    selector_key=descriptor.selector_key,
                    is_large=descriptor.is_large,
                )
            )
        return rows

    def search(self, query: str, page: int = 1) -> PendingResult:
        """Fetch search matches into the ``search`` selector key.

        A blank query settles the key with an empty result without a request.
        """

        normalized = (query or "").strip()
        if not normalized:
            pending = self._results.begin(SEARCH_SELECTOR_KEY)
            pending.resolve(())
            return pending
        url = str(
            httpx.URL(self._registry.search_template)
            .copy_set_param("query", normalized)
            .copy_set_param("page", page)
        )
        return self._dispatch(load_results, SEARCH_SELECTOR_KEY, url)

    def featured(
        self, selector_key: str, rng: SupportsRandrange | None = None
    ) -> Item | None:
        """Pick a random item from a settled, successful result set."""

        entry = self._results.get(selector_key)
        if entry is None or not entry.ready:
            return None
        return pick_random(entry.data, rng)

    async def wait_idle(self) -> None:
        """Wait until every dispatched fetch has settled."""

        while self._jobs:
            await asyncio.gather(*tuple(self._jobs), return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel outstanding fetches."""

        jobs = tuple(self._jobs)
        for job in jobs:
            job.cancel()
        if jobs:
            await asyncio.gather(*jobs, return_exceptions=True)

    def _dispatch(
        self,
        action: FetchAction,
        selector_key: str,
        url: str,
        *,
        is_page: bool = False,
    ) -> PendingResult:
        asyncio.get_running_loop()
        pending = self._results.begin(selector_key, url=url, is_page=is_page)
        logger.debug(
            "Dispatching %s for %s (request %s)", url, selector_key, pending.request_id
        )

        async def _runner() -> None:
            try:
                await action(self._client, url, pending)
            except Exception:
                logger.exception("Background fetch for %s failed", selector_key)
                pending.fail()

        task = asyncio.create_task(_runner())
        self._jobs.add(task)
        task.add_done_callback(self._jobs.discard)
        return pending
