"""
Catalog entities.

Canonical records produced by the catalog facades from the primary provider
and its enrichment sources. Records are built once and never mutated.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ShowKind(str, Enum):
    """Kind of show."""

    MOVIE = "movie"
    SERIES = "series"


class ShowStatus(str, Enum):
    """Lifecycle status of a show."""

    AIRING = "airing"
    ENDED = "ended"
    UPCOMING = "upcoming"
    CANCELED = "canceled"


class FeedCategory(str, Enum):
    """Optional category used by the host to style a feed collection."""

    HOT = "hot"
    NEW = "new"


@dataclass(frozen=True)
class ShowEntry:
    """
    Minimal listing record returned by search and archive listings.

    Attributes:
        kind: movie or series
        id: Composite identifier ("<provider id>-<slug>")
        title: Display title
        poster_url: Poster image URL
        year: Release year
        language: ISO 639-1 language code
    """

    kind: ShowKind
    id: str
    title: str
    poster_url: Optional[str] = None
    year: Optional[int] = None
    language: Optional[str] = None


@dataclass(frozen=True)
class Season:
    """
    Season of a show.

    Attributes:
        number: Ordinal (zero-based for derived seasons)
        name: Display name ("1-100" for derived seasons)
    """

    number: int
    name: str


@dataclass(frozen=True)
class Show:
    """
    Full detail record of a show.

    Attributes:
        id: Composite identifier
        kind: movie or series
        title: Display title
        overview: Plot summary
        genres: Tuple of genre names
        duration: Runtime in seconds (per episode for series)
        release_date: ISO date (YYYY-MM-DD)
        seasons: Seasons, None for movies
        poster_url: Poster image URL
        clean_poster_url: Poster without text overlay, when a source provides one
        backdrop_url: Backdrop image URL
        logo_url: Title logo URL
        rating: Finite score, 0 when unknown
        status: Lifecycle status
        related_shows: Suggested shows
        franchise_shows: Shows of the same franchise
        language: ISO 639-1 language code
    """

    id: str
    kind: ShowKind
    title: str
    overview: Optional[str] = None
    genres: tuple[str, ...] = ()
    duration: int = 0
    release_date: Optional[str] = None
    seasons: Optional[tuple[Season, ...]] = None
    poster_url: Optional[str] = None
    clean_poster_url: Optional[str] = None
    backdrop_url: Optional[str] = None
    logo_url: Optional[str] = None
    rating: float = 0.0
    status: Optional[ShowStatus] = None
    related_shows: Optional[tuple[ShowEntry, ...]] = None
    franchise_shows: Optional[tuple[ShowEntry, ...]] = None
    language: Optional[str] = None


@dataclass(frozen=True)
class Episode:
    """
    Individual episode of a show.

    Attributes:
        id: Composite episode identifier (show id + provider episode id)
        number: Episode number, reconciliation key across sources
        title: Episode title
        overview: Episode description
        thumbnail_url: Still image URL
        duration: Runtime in seconds
        is_filler: Filler flag, None when no source knows
    """

    id: str
    number: int
    title: Optional[str] = None
    overview: Optional[str] = None
    thumbnail_url: Optional[str] = None
    duration: Optional[int] = None
    is_filler: Optional[bool] = None


@dataclass(frozen=True)
class VideoAsset:
    """Playable URL and the headers required to request it."""

    url: str
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class FeedCollection:
    """Named and ordered list of shows, generated offline."""

    id: str
    name: str
    shows: tuple[ShowEntry, ...] = ()
    category: Optional[FeedCategory] = None
