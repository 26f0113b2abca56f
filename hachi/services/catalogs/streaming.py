"""
Facade du catalogue films/series.

Le fournisseur principal StreamingCommunity possede les identifiants, les
saisons et les episodes. Les illustrations sont enrichies par TMDB (jaquette,
fond, logo) et, quand TMDB ne fournit pas de jaquette, par IMDb.
"""

from dataclasses import replace
from typing import Optional

from loguru import logger

from hachi.core.entities import Episode, FeedCollection, Show, ShowEntry, VideoAsset
from hachi.core.ports.catalog import IAssetStore, ICatalog
from hachi.core.ports.documents import IPlaylistResolver
from hachi.core.ports.providers import IIMDbProvider, IMDbShow, ITitleProvider, ITMDBProvider
from hachi.core.value_objects import parse_episode_id, parse_show_id
from hachi.services.catalogs.base import build_video_headers, call_primary, resolve_video_url
from hachi.services.mappers import map_title_entry, map_title_episode, map_title_show
from hachi.services.reconciler import (
    EnrichmentResult,
    FieldPrecedence,
    fetch_enrichment,
    normalize_rating,
    reconcile,
)
from hachi.utils.helpers import to_float


class StreamingCatalog(ICatalog):
    """
    Catalogue films/series (StreamingCommunity).

    Attributes:
        COLLECTIONS_ASSET: Nom de l'asset des collections precalculees
        TRENDING_ASSET: Nom de l'asset des tendances precalculees
    """

    COLLECTIONS_ASSET = "sc_feed_cache_collections"
    TRENDING_ASSET = "sc_feed_cache_trending_shows"

    def __init__(
        self,
        provider: ITitleProvider,
        tmdb: ITMDBProvider,
        imdb: IIMDbProvider,
        resolver: IPlaylistResolver,
        asset_store: IAssetStore,
        user_agent: Optional[str] = None,
        artwork_precedence: FieldPrecedence = FieldPrecedence.ENRICHMENT_FIRST,
        rating_precedence: FieldPrecedence = FieldPrecedence.PRIMARY_FIRST,
    ) -> None:
        self._provider = provider
        self._tmdb = tmdb
        self._imdb = imdb
        self._resolver = resolver
        self._asset_store = asset_store
        self._user_agent = user_agent
        self._artwork_precedence = artwork_precedence
        self._rating_precedence = rating_precedence

    async def search_shows(self, query: str) -> list[ShowEntry]:
        records = await call_primary(self._provider.source, self._provider.search(query))
        return [map_title_entry(record) for record in records]

    async def get_show(self, show_id: str) -> Show:
        parse_show_id(show_id)
        record = await call_primary(self._provider.source, self._provider.get_show(show_id))
        show = map_title_show(show_id, record)

        tmdb = await fetch_enrichment(
            "tmdb", record.tmdb_id, lambda: self._tmdb.get_show(record.type, record.tmdb_id)
        )

        # IMDb ne sert qu'a combler une jaquette que TMDB n'a pas fournie
        imdb: EnrichmentResult[IMDbShow] = EnrichmentResult(source="imdb")
        if not tmdb.pick(lambda s: s.poster_url):
            imdb = await fetch_enrichment(
                "imdb", record.imdb_id, lambda: self._imdb.get_show(record.imdb_id)
            )

        rating = reconcile(
            [to_float(record.score)],
            [imdb.pick(lambda s: s.rating)],
            self._rating_precedence,
        )

        return replace(
            show,
            poster_url=reconcile(
                [show.poster_url],
                [tmdb.pick(lambda s: s.poster_url), imdb.pick(lambda s: s.image_url)],
                self._artwork_precedence,
            ),
            backdrop_url=reconcile(
                [show.backdrop_url],
                [tmdb.pick(lambda s: s.backdrop_url)],
                self._artwork_precedence,
            ),
            logo_url=reconcile(
                [show.logo_url],
                [tmdb.pick(lambda s: s.logo_url)],
                self._artwork_precedence,
            ),
            rating=normalize_rating(rating),
        )

    async def get_episodes(self, show_id: str, season_number: int) -> list[Episode]:
        parse_show_id(show_id)
        records = await call_primary(
            self._provider.source, self._provider.get_episodes(show_id, season_number)
        )
        return [map_title_episode(show_id, record) for record in records]

    async def get_video_assets(self, media_id: str) -> list[VideoAsset]:
        parse_episode_id(media_id)
        video_url = await call_primary(
            self._provider.source, self._provider.get_video_source(media_id)
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
