"""HTTP access to The Movie Database (TMDB)."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx

from ..config import Settings
from ..errors import NetworkError

logger = logging.getLogger(__name__)


class JSONGetter(Protocol):
    """Anything that can GET a path and return the decoded JSON body."""

    async def get(self, path: str) -> Any:
        ...


class TMDBClient:
    """Thin wrapper around the TMDB v3 HTTP API.

    Paths are relative to ``Settings.tmdb_api_url``; the API key is added as
    a query parameter on every request.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient):
        if not settings.tmdb_api_key:
            raise ValueError("TMDB API key is required when initialising TMDBClient")
        self._settings = settings
        self._client = http_client

    async def get(self, path: str) -> Any:
        """Return the decoded JSON body for ``path`` or raise ``NetworkError``."""

        params = {"api_key": self._settings.tmdb_api_key}
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as exc:
            raise NetworkError(path, f"{exc.__class__.__name__}: {exc}") from exc

        if response.status_code >= 400:
            logger.debug("TMDB returned %s for %s", response.status_code, path)
            raise NetworkError(
                path, f"HTTP {response.status_code}", status_code=response.status_code
            )
        try:
            return response.json()
        except ValueError as exc:
            raise NetworkError(
                path, "response body is not valid JSON", status_code=response.status_code
            ) from exc
