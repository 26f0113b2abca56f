"""
Facade du catalogue anime.

Le fournisseur principal AnimeUnity possede les identifiants et les
episodes. Les fiches sont enrichies par:
- Jikan (MyAnimeList) : jaquette grand format, note
- AniList : banniere, jaquette sans texte, vignettes d'episodes
- Kitsu : image de couverture
- Jikan encore pour les titres et fillers d'episodes

Les saisons n'existent chez aucun fournisseur: elles sont derivees du
nombre d'episodes par tranches fixes.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Optional

from loguru import logger

from hachi.core.entities import (
    Episode,
    FeedCollection,
    Show,
    ShowEntry,
    ShowKind,
    VideoAsset,
)
from hachi.core.errors import NotFoundError
from hachi.core.ports.catalog import IAssetStore, ICatalog
from hachi.core.ports.documents import IPlaylistResolver
from hachi.core.ports.providers import (
    AnimeRecord,
    IAniListProvider,
    IAnimeProvider,
    IJikanProvider,
    IKitsuProvider,
)
from hachi.core.value_objects import format_episode_id, parse_episode_id, parse_show_id
from hachi.services.catalogs.base import build_video_headers, call_primary, resolve_video_url
from hachi.services.mappers import (
    anime_kind,
    anime_release_date,
    map_anime_entry,
    map_anime_status,
    parse_anime_episode_number,
)
from hachi.services.reconciler import (
    FieldPrecedence,
    fetch_enrichment,
    first_non_empty,
    normalize_rating,
    reconcile,
)
from hachi.services.seasons import partition_seasons, season_offset
from hachi.utils.constants import EPISODES_PER_SEASON
from hachi.utils.helpers import detect_title_language, sanitize_title, to_float

# Taille des pages d'episodes Jikan
JIKAN_EPISODES_PAGE_SIZE = 100


@dataclass
class EpisodeMetadata:
    """Enrichissement des episodes indexe par numero."""

    titles: dict[int, str] = field(default_factory=dict)
    fillers: dict[int, bool] = field(default_factory=dict)
    thumbnails: dict[int, str] = field(default_factory=dict)


class AnimeCatalog(ICatalog):
    """
    Catalogue anime (AnimeUnity).

    Attributes:
        COLLECTIONS_ASSET: Nom de l'asset des collections precalculees
        TRENDING_ASSET: Nom de l'asset des tendances precalculees
    """

    COLLECTIONS_ASSET = "au_feed_cache_collections"
    TRENDING_ASSET = "au_feed_cache_trending_shows"

    def __init__(
        self,
        provider: IAnimeProvider,
        jikan: IJikanProvider,
        anilist: IAniListProvider,
        kitsu: IKitsuProvider,
        resolver: IPlaylistResolver,
        asset_store: IAssetStore,
        user_agent: Optional[str] = None,
        episodes_per_season: int = EPISODES_PER_SEASON,
        artwork_precedence: FieldPrecedence = FieldPrecedence.ENRICHMENT_FIRST,
        rating_precedence: FieldPrecedence = FieldPrecedence.ENRICHMENT_FIRST,
    ) -> None:
        self._provider = provider
        self._jikan = jikan
        self._anilist = anilist
        self._kitsu = kitsu
        self._resolver = resolver
        self._asset_store = asset_store
        self._user_agent = user_agent
        self._episodes_per_season = episodes_per_season
        self._artwork_precedence = artwork_precedence
        self._rating_precedence = rating_precedence

    async def _fetch_record(self, show_id: str) -> AnimeRecord:
        numeric_id = parse_show_id(show_id)
        return await call_primary(self._provider.source, self._provider.get_show(numeric_id))

    async def search_shows(self, query: str) -> list[ShowEntry]:
        records = await call_primary(self._provider.source, self._provider.search(query))
        return [map_anime_entry(record) for record in records]

    async def get_show(self, show_id: str) -> Show:
        record = await self._fetch_record(show_id)

        jikan, anilist, kitsu = await asyncio.gather(
            fetch_enrichment("jikan", record.mal_id, lambda: self._jikan.get_show(record.mal_id)),
            fetch_enrichment(
                "anilist", record.anilist_id, lambda: self._anilist.get_show(record.anilist_id)
            ),
            fetch_enrichment(
                "kitsu", record.mal_id, lambda: self._kitsu.get_show_by_mal_id(record.mal_id)
            ),
        )

        poster_url = reconcile(
            [record.poster_url],
            [jikan.pick(lambda s: s.poster_url)],
            self._artwork_precedence,
        )
        backdrop_url = reconcile(
            [record.cover_url],
            [kitsu.pick(lambda s: s.cover_url), anilist.pick(lambda s: s.banner_url)],
            self._artwork_precedence,
        )
        rating = reconcile(
            [to_float(record.score)],
            [jikan.pick(lambda s: s.score)],
            self._rating_precedence,
        )

        kind = anime_kind(record)
        seasons = None
        if kind == ShowKind.SERIES:
            seasons = tuple(partition_seasons(record.episodes_count, self._episodes_per_season))

        return Show(
            id=show_id,
            kind=kind,
            title=sanitize_title(record.title),
            overview=first_non_empty([record.plot]),
            genres=record.genres,
            duration=record.episodes_length * 60,
            release_date=anime_release_date(record.year, record.season),
            seasons=seasons,
            poster_url=poster_url,
            clean_poster_url=first_non_empty([anilist.pick(lambda s: s.cover_url)]),
            backdrop_url=backdrop_url,
            rating=normalize_rating(rating),
            status=map_anime_status(record.status),
            related_shows=tuple(map_anime_entry(r) for r in record.suggested),
            franchise_shows=tuple(map_anime_entry(r) for r in record.related),
            language=detect_title_language(record.title),
        )

    async def _fetch_episode_metadata(
        self, record: AnimeRecord, start: int, limit: int
    ) -> EpisodeMetadata:
        metadata = EpisodeMetadata()

        if record.mal_id:
            first_page = (start - 1) // JIKAN_EPISODES_PAGE_SIZE + 1
            last_page = (start + limit - 2) // JIKAN_EPISODES_PAGE_SIZE + 1
            for page in range(first_page, last_page + 1):
                result = await fetch_enrichment(
                    "jikan",
                    record.mal_id,
                    lambda page=page: self._jikan.get_episodes(record.mal_id, page),
                )
                for episode in result.unwrap_or([]):
                    if episode.title:
                        metadata.titles[episode.number] = episode.title
                    if episode.filler is not None:
                        metadata.fillers[episode.number] = episode.filler

        thumbnails = await fetch_enrichment(
            "anilist", record.anilist_id, lambda: self._anilist.get_episodes(record.anilist_id)
        )
        for episode in thumbnails.unwrap_or([]):
            if episode.thumbnail_url:
                metadata.thumbnails[episode.number] = episode.thumbnail_url

        return metadata

    async def get_episodes(self, show_id: str, season_number: int) -> list[Episode]:
        numeric_id = parse_show_id(show_id)
        start, limit = season_offset(season_number, self._episodes_per_season)

        record = await self._fetch_record(show_id)
        records = await call_primary(
            self._provider.source, self._provider.get_episodes(numeric_id, start, limit)
        )
        if not records:
            return []

        metadata = await self._fetch_episode_metadata(record, start, limit)

        episodes = []
        for index, episode in enumerate(records):
            number = parse_anime_episode_number(episode.number)
            if number is None:
                number = start + index
            episodes.append(
                Episode(
                    id=format_episode_id(show_id, episode.id),
                    number=number,
                    title=metadata.titles.get(number),
                    thumbnail_url=metadata.thumbnails.get(number),
                    is_filler=metadata.fillers.get(number, False),
                )
            )
        return episodes

    async def _resolve_media_id(self, media_id: str) -> int:
        show_id, episode_id = parse_episode_id(media_id)
        if episode_id is not None:
            return episode_id

        # Film ou serie entiere: le premier episode porte le media lisible
        numeric_id = parse_show_id(show_id)
        episodes = await call_primary(
            self._provider.source, self._provider.get_episodes(numeric_id, 1, 1)
        )
        if not episodes:
            raise NotFoundError(f"Aucun media lisible pour {media_id}")
        return episodes[0].id

    async def get_video_assets(self, media_id: str) -> list[VideoAsset]:
        episode_id = await self._resolve_media_id(media_id)
        video_url = await call_primary(
            self._provider.source, self._provider.get_video_url(episode_id)
        )
        playlist_url = await resolve_video_url(self._resolver, video_url)
        logger.debug("Video resolue", media_id=media_id, playlist=playlist_url)
        return [
            VideoAsset(url=playlist_url, headers=build_video_headers(video_url, self._user_agent))
        ]

    async def get_feed_collections(self) -> list[FeedCollection]:
        return self._asset_store.read_collections(self.COLLECTIONS_ASSET)

    async def get_trending_shows(self) -> list[Show]:
        return self._asset_store.read_shows(self.TRENDING_ASSET)
