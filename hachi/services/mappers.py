"""
Conversion des enregistrements fournisseurs en entites du catalogue.

Fonctions pures, sans I/O: les facades et les generateurs hors ligne
s'appuient dessus pour construire ShowEntry, Show et Episode.
"""

from datetime import date
from typing import Optional

from hachi.core.entities import Episode, Season, Show, ShowEntry, ShowKind, ShowStatus
from hachi.core.ports.providers import (
    AnimeRecord,
    ImageRecord,
    TitleEpisodeRecord,
    TitleRecord,
    TranslationRecord,
)
from hachi.core.value_objects import EpisodeIdStyle, format_episode_id, format_show_id
from hachi.services.reconciler import normalize_rating
from hachi.utils.constants import (
    ANIME_SEASON_MONTHS,
    ANIME_STATUS_MAPPING,
    TITLE_STATUS_MAPPING,
)
from hachi.utils.helpers import detect_title_language, parse_year, sanitize_title

TITLE_LANGUAGE = "it"


# ---------------------------------------------------------------------------
# Anime
# ---------------------------------------------------------------------------


def map_anime_status(status: Optional[str]) -> Optional[ShowStatus]:
    if not status:
        return None
    return ANIME_STATUS_MAPPING.get(status.lower())


def anime_kind(record: AnimeRecord) -> ShowKind:
    return ShowKind.MOVIE if record.type == "Movie" else ShowKind.SERIES


def anime_release_date(year: Optional[int], season: Optional[str]) -> Optional[str]:
    """Premier jour de la saison de diffusion (janvier si saison inconnue)."""
    if not year or year < 1:
        return None
    month = ANIME_SEASON_MONTHS.get(season or "", 1)
    return date(year, month, 1).isoformat()


def map_anime_entry(record: AnimeRecord) -> ShowEntry:
    return ShowEntry(
        kind=anime_kind(record),
        id=format_show_id(record.id, record.slug),
        title=sanitize_title(record.title),
        poster_url=record.poster_url or None,
        year=record.year,
        language=detect_title_language(record.title),
    )


def parse_anime_episode_number(raw_number: str) -> Optional[int]:
    """Numero d'episode; pour une plage ("135-136") le premier numero."""
    head = raw_number.split("-", 1)[0].strip()
    return int(head) if head.isdigit() else None


# ---------------------------------------------------------------------------
# Films et series
# ---------------------------------------------------------------------------


def find_image_url(images: tuple[ImageRecord, ...], image_type: str) -> Optional[str]:
    """URL de la premiere image du type demande."""
    return next((image.url for image in images if image.type == image_type), None)


def find_translation(
    record: TitleRecord, key: str, locale: str
) -> Optional[TranslationRecord]:
    """Traduction d'un champ du titre dans la langue demandee."""
    return next(
        (t for t in record.translations if t.key == key and t.locale == locale), None
    )


def map_title_status(status: Optional[str]) -> Optional[ShowStatus]:
    if not status:
        return None
    return TITLE_STATUS_MAPPING.get(status.lower())


def title_kind(record: TitleRecord) -> ShowKind:
    return ShowKind.MOVIE if record.type == "movie" else ShowKind.SERIES


def map_title_entry(record: TitleRecord) -> ShowEntry:
    date_string = record.last_air_date
    if not date_string:
        translation = find_translation(
            record, "release_date", TITLE_LANGUAGE
        ) or find_translation(record, "last_air_date", TITLE_LANGUAGE)
        date_string = translation.value if translation else None

    return ShowEntry(
        kind=title_kind(record),
        id=format_show_id(record.id, record.slug),
        title=record.name,
        poster_url=find_image_url(record.images, "poster"),
        year=parse_year(date_string),
        language=TITLE_LANGUAGE,
    )


def title_backdrop_url(record: TitleRecord) -> Optional[str]:
    return (
        find_image_url(record.images, "background")
        or find_image_url(record.images, "cover_mobile")
        or find_image_url(record.images, "cover")
    )


def map_title_show(show_id: str, record: TitleRecord) -> Show:
    """Fiche construite uniquement a partir du fournisseur principal."""
    kind = title_kind(record)
    seasons = None
    if kind == ShowKind.SERIES:
        seasons = tuple(
            Season(number=season.number, name=season.name or f"Stagione {season.number}")
            for season in record.seasons
        )

    return Show(
        id=show_id,
        kind=kind,
        title=record.name,
        overview=record.plot,
        genres=record.genres,
        duration=(record.runtime or 0) * 60,
        release_date=record.release_date,
        seasons=seasons,
        poster_url=find_image_url(record.images, "poster"),
        backdrop_url=title_backdrop_url(record),
        logo_url=find_image_url(record.images, "logo"),
        rating=normalize_rating(record.score),
        status=map_title_status(record.status),
        related_shows=tuple(map_title_entry(related) for related in record.related),
        language=TITLE_LANGUAGE,
    )


def map_title_episode(show_id: str, episode: TitleEpisodeRecord) -> Episode:
    return Episode(
        id=format_episode_id(show_id, episode.id, EpisodeIdStyle.QUERY),
        number=episode.number,
        title=episode.name,
        overview=episode.plot,
        duration=(episode.duration or 0) * 60,
        thumbnail_url=find_image_url(episode.images, "cover"),
    )
