"""Static category tables and the registry that resolves them."""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterable, Mapping
from urllib.parse import urlencode

from .errors import NotFoundError
from .services.results import FetchAction, load_results

if TYPE_CHECKING:
    from .config import Settings

SEARCH_SELECTOR_KEY = "search"

GENRES: Mapping[int, str] = MappingProxyType(
    {
        28: "Action",
        12: "Adventure",
        16: "Animation",
        35: "Comedy",
        80: "Crime",
        99: "Documentary",
        18: "Drama",
        10751: "Family",
        14: "Fantasy",
        36: "History",
        27: "Horror",
        10402: "Music",
        9648: "Mystery",
        10749: "Romance",
        878: "Science Fiction",
        10770: "TV Movie",
        53: "Thriller",
        10752: "War",
        37: "Western",
        10759: "Action & Adventure",
        10762: "Kids",
        10763: "News",
        10764: "Reality",
        10765: "Sci-Fi & Fantasy",
        10766: "Soap",
        10767: "Talk",
        10768: "War & Politics",
    }
)


@dataclass(frozen=True)
class CategoryDescriptor:
    """Describes one fetchable category row within a domain."""

    id: int | str
    title: str
    genre: str
    url_template: str
    selector_key: str
    fetch_action: FetchAction = field(default=load_results, compare=False, repr=False)
    is_large: bool = False


@dataclass(frozen=True)
class CategoryRegistry:
    """Immutable mapping from content domains to their category descriptors.

    ``aliases`` maps alternative domain names (for example ``browse``) onto a
    registered domain. Genres and ids must be unique within a domain.
    """

    domains: Mapping[str, tuple[CategoryDescriptor, ...]]
    aliases: Mapping[str, str] = field(default_factory=dict)
    search_template: str = "/search/multi"

    def __post_init__(self) -> None:
        domains: dict[str, tuple[CategoryDescriptor, ...]] = {}
        for domain, descriptors in self.domains.items():
            entries = tuple(descriptors)
            _ensure_unique(domain, "genre", (entry.genre for entry in entries))
            _ensure_unique(domain, "id", (entry.id for entry in entries))
            domains[domain] = entries
        for alias, target in self.aliases.items():
            if target not in domains:
                raise ValueError(f"Alias {alias!r} points at unknown domain {target!r}")
        object.__setattr__(self, "domains", MappingProxyType(domains))
        object.__setattr__(self, "aliases", MappingProxyType(dict(self.aliases)))

    @property
    def domain_names(self) -> tuple[str, ...]:
        return tuple(self.domains)

    def resolve_domain(self, domain: str) -> str:
        """Return the canonical domain name, following aliases."""

        canonical = self.aliases.get(domain, domain)
        if canonical not in self.domains:
            raise NotFoundError(domain)
        return canonical

    def list_all(self, domain: str) -> tuple[CategoryDescriptor, ...]:
        """Return every descriptor of ``domain`` in registry order."""

        return self.domains[self.resolve_domain(domain)]

    def lookup(self, domain: str, genre: str) -> CategoryDescriptor:
        """Return the single descriptor of ``domain`` whose genre matches."""

        for descriptor in self.list_all(domain):
            if descriptor.genre == genre:
                return descriptor
        raise NotFoundError(domain, genre)


def _ensure_unique(domain: str, label: str, values: Iterable[object]) -> None:
    seen: set[object] = set()
    for value in values:
        if value in seen:
            raise ValueError(f"Duplicate {label} {value!r} in domain {domain!r}")
        seen.add(value)


def one_month_ago(today: date | None = None) -> str:
    """Return the ISO date one calendar month before ``today``.

    The day is clamped to the length of the previous month, so 31 March maps
    to the last day of February.
    """

    if today is None:
        today = datetime.now(timezone.utc).date()
    if today.month == 1:
        year, month = today.year - 1, 12
    else:
        year, month = today.year, today.month - 1
    day = min(today.day, calendar.monthrange(year, month)[1])
    return date(year, month, day).isoformat()


def _endpoint(path: str, **params: object) -> str:
    return f"{path}?{urlencode(params)}"


def build_default_registry(
    settings: "Settings | None" = None, *, today: date | None = None
) -> CategoryRegistry:
    """Return the registry of movie, series and popular rows shown by the viewer."""

    language = settings.tmdb_language if settings else "en-US"
    region = settings.tmdb_region if settings else "US"
    popular = "popularity.desc"

    def discover_movies(genre_id: int) -> str:
        return _endpoint(
            "/discover/movie", with_genres=genre_id, sort_by=popular, language=language
        )

    def discover_series(**filters: object) -> str:
        return _endpoint("/discover/tv", **filters, sort_by=popular, language=language)

    trending_movies = _endpoint("/trending/movie/week", sort_by=popular, language=language)
    top_rated = _endpoint("/movie/top_rated", sort_by=popular, region=region)

    movies = (
        CategoryDescriptor(1, "Trending Now", "trending", trending_movies, "movies.trending", is_large=True),
        CategoryDescriptor(2, "Upcoming", "upcoming", _endpoint("/movie/upcoming", language=language), "movies.upcoming"),
        CategoryDescriptor(3, "Top Rated", "toprated", top_rated, "movies.toprated"),
        CategoryDescriptor(4, "Action", "action", discover_movies(28), "movies.action"),
        CategoryDescriptor(5, "Adventure", "adventure", discover_movies(12), "movies.adventure"),
        CategoryDescriptor(6, "Comedy", "comedy", discover_movies(35), "movies.comedy"),
        CategoryDescriptor(7, "Horror", "horror", discover_movies(27), "movies.horror"),
        CategoryDescriptor(8, "Romance", "romance", discover_movies(10749), "movies.romance"),
        CategoryDescriptor(9, "War", "war", discover_movies(10752), "movies.war"),
        CategoryDescriptor(10, "Animation", "animation", discover_movies(16), "movies.animation"),
    )
    series = (
        CategoryDescriptor(1, "Trending Now", "trending", _endpoint("/trending/tv/week", sort_by=popular, language=language), "series.trending"),
        CategoryDescriptor(2, "Netflix Originals", "netflix", discover_series(with_networks=213), "series.netflix", is_large=True),
        CategoryDescriptor(3, "Action & Adventure", "actionadventure", discover_series(with_genres=10759), "series.actionadventure"),
        CategoryDescriptor(4, "Animation", "animation", discover_series(with_genres=16), "series.animation"),
        CategoryDescriptor(5, "Comedy", "comedy", discover_series(with_genres=35), "series.comedy"),
        CategoryDescriptor(6, "Crime", "crime", discover_series(with_genres=80), "series.crime"),
        CategoryDescriptor(7, "Documentary", "documentary", discover_series(with_genres=99), "series.documentary"),
        CategoryDescriptor(8, "Family", "family", discover_series(with_genres=10751), "series.family"),
        CategoryDescriptor(9, "Kids", "kids", discover_series(with_genres=10762), "series.kids"),
        CategoryDescriptor(10, "Sci-Fi & Fantasy", "scifi", discover_series(with_genres=10765), "series.scifi"),
    )
    latest = _endpoint(
        "/discover/movie",
        **{"primary_release_date.gte": one_month_ago(today)},
        sort_by=popular,
        language=language,
    )
    popular_rows = (
        CategoryDescriptor(1, "Trending Now", "trending", _endpoint("/trending/all/week", sort_by=popular, language=language), "popular.trending", is_large=True),
        CategoryDescriptor(2, "New Releases", "latest", latest, "popular.latest"),
        CategoryDescriptor(3, "Popular Movies", "movies", _endpoint("/discover/movie", sort_by=popular, language=language), "popular.movies"),
        CategoryDescriptor(4, "Popular Series", "series", discover_series(), "popular.series"),
        CategoryDescriptor(5, "Top Rated", "toprated", top_rated, "popular.toprated"),
    )
    return CategoryRegistry(
        domains={"movies": movies, "series": series, "popular": popular_rows},
        aliases={"browse": "movies", "tvseries": "series"},
        search_template=_endpoint("/search/multi", language=language),
    )
