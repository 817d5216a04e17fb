"""Per-category result tracking for asynchronous fetches."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Awaitable, Callable, Iterable, Iterator

from ..errors import MalformedResponseError, NetworkError
from ..models import CatalogPage, Item, ResultEntry

if TYPE_CHECKING:
    from .tmdb import JSONGetter

logger = logging.getLogger(__name__)


class PendingResult:
    """Write handle for one dispatched fetch.

    Every dispatch receives its own request number. Settling a handle more
    than once is a no-op.
    """

    __slots__ = ("_cache", "selector_key", "request_id", "_settled")

    def __init__(self, cache: "ResultCache", selector_key: str, request_id: int):
        self._cache = cache
        self.selector_key = selector_key
        self.request_id = request_id
        self._settled = False

    @property
    def settled(self) -> bool:
        return self._settled

    def resolve(self, items: Iterable[Item]) -> bool:
        """Store ``items`` as the key's data. Returns ``False`` when discarded."""

        if self._settled:
            return False
        self._settled = True
        return self._cache._write(
            self.selector_key,
            self.request_id,
            loading=False,
            error=False,
            data=tuple(items),
        )

    def fail(self) -> bool:
        """Mark the key as failed. Returns ``False`` when discarded."""

        if self._settled:
            return False
        self._settled = True
        return self._cache._write(
            self.selector_key, self.request_id, loading=False, error=True, data=()
        )


FetchAction = Callable[["JSONGetter", str, PendingResult], Awaitable[None]]


class ResultCache:
    """Holds the loading/error/data triple for every selector key.

    All mutations are synchronous, so on a single event loop each write is
    atomic with respect to other dispatches. When ``discard_stale`` is set a
    resolution is only accepted from the most recent dispatch for its key;
    otherwise the last fetch to resolve wins.
    """

    def __init__(self, *, discard_stale: bool = True):
        self._discard_stale = discard_stale
        self._entries: dict[str, ResultEntry] = {}
        self._latest: dict[str, int] = {}

    @property
    def discard_stale(self) -> bool:
        return self._discard_stale

    def __contains__(self, selector_key: object) -> bool:
        return selector_key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, selector_key: str) -> ResultEntry | None:
        return self._entries.get(selector_key)

    def snapshot(self) -> dict[str, ResultEntry]:
        return dict(self._entries)

    def latest_request(self, selector_key: str) -> int:
        return self._latest.get(selector_key, 0)

    def begin(
        self, selector_key: str, *, url: str | None = None, is_page: bool = False
    ) -> PendingResult:
        """Register a new dispatch for ``selector_key`` and flag it as loading.

        Data from an earlier resolution stays visible until this dispatch
        settles.
        """

        request_id = self._latest.get(selector_key, 0) + 1
        self._latest[selector_key] = request_id
        previous = self._entries.get(selector_key)
        self._entries[selector_key] = ResultEntry(
            loading=True,
            error=False,
            data=previous.data if previous and not previous.error else (),
            url=url,
            is_page=is_page,
            request_id=request_id,
        )
        return PendingResult(self, selector_key, request_id)

    def clear(self, selector_key: str) -> None:
        self._entries.pop(selector_key, None)

    def _write(
        self,
        selector_key: str,
        request_id: int,
        *,
        loading: bool,
        error: bool,
        data: tuple[Item, ...],
    ) -> bool:
        latest = self._latest.get(selector_key, 0)
        if self._discard_stale and request_id != latest:
            logger.debug(
                "Discarding stale result %s for %s (latest is %s)",
                request_id,
                selector_key,
                latest,
            )
            return False
        current = self._entries.get(selector_key)
        self._entries[selector_key] = ResultEntry(
            loading=loading,
            error=error,
            data=data,
            url=current.url if current else None,
            is_page=current.is_page if current else False,
            request_id=request_id,
        )
        return True


async def load_results(client: "JSONGetter", url: str, pending: PendingResult) -> None:
    """Fetch ``url`` and settle ``pending`` with its items or a failure."""

    try:
        payload = await client.get(url)
        page = CatalogPage.from_payload(payload, path=url)
    except (NetworkError, MalformedResponseError) as exc:
        logger.warning("Fetching %s failed: %s", pending.selector_key, exc)
        pending.fail()
        return
    pending.resolve(page.results)
