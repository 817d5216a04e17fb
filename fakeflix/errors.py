"""Exceptions raised by the catalog core."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for every catalog failure."""


class NotFoundError(CatalogError, LookupError):
    """Raised when a domain or genre is not registered."""

    def __init__(self, domain: str, genre: str | None = None):
        self.domain = domain
        self.genre = genre
        if genre is None:
            message = f"Unknown content domain: {domain!r}"
        else:
            message = f"No category with genre {genre!r} in domain {domain!r}"
        super().__init__(message)


class NetworkError(CatalogError):
    """The HTTP collaborator could not produce a JSON body."""

    def __init__(self, path: str, message: str, *, status_code: int | None = None):
        self.path = path
        self.status_code = status_code
        super().__init__(f"{path}: {message}")


class MalformedResponseError(CatalogError):
    """A response body did not carry a usable ``results`` list."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")
