"""
Generation hors ligne des collections et des tendances.

Chaque collection nommee correspond a un parcours de l'archive du
fournisseur principal. Un parcours en echec fait echouer sa collection
seulement: l'erreur est journalisee et la generation continue avec la
suivante. Les resultats sont ecrits dans le stockage d'assets, relu en
lecture seule par les facades.
"""

import asyncio
from dataclasses import dataclass, field, replace
from typing import Generic, Optional, TypeVar

from loguru import logger

from hachi.core.entities import FeedCategory, FeedCollection, Show
from hachi.core.errors import CatalogError
from hachi.core.ports.catalog import IAssetStore
from hachi.core.ports.providers import (
    AnimeArchiveQuery,
    AnimeRecord,
    IAnimeProvider,
    ITitleProvider,
    ITMDBProvider,
    TitleArchiveQuery,
    TitleRecord,
)
from hachi.core.value_objects import format_show_id
from hachi.services.archive_crawler import DEFAULT_MAX_PAGES, ArchiveCrawler
from hachi.services.catalogs.anime import AnimeCatalog
from hachi.services.catalogs.base import call_primary
from hachi.services.catalogs.streaming import StreamingCatalog
from hachi.services.mappers import map_anime_entry, map_title_entry, map_title_show
from hachi.services.reconciler import fetch_enrichment, first_non_empty
from hachi.utils.constants import SC_GENRES
from hachi.utils.helpers import slugify

Q = TypeVar("Q")


@dataclass(frozen=True)
class CollectionRequest(Generic[Q]):
    """
    Demande de collection.

    Attributes:
        name: Nom affiche de la collection
        query: Filtres de l'archive du fournisseur
        category: Categorie optionnelle (hot, new)
        max_pages: Budget de pages du parcours
        max_items: Nombre maximum de series retenues
    """

    name: str
    query: Q
    category: Optional[FeedCategory] = None
    max_pages: int = DEFAULT_MAX_PAGES
    max_items: Optional[int] = None


# ---------------------------------------------------------------------------
# Demandes predefinies
# ---------------------------------------------------------------------------

ANIME_COLLECTION_REQUESTS: tuple[CollectionRequest[AnimeArchiveQuery], ...] = (
    CollectionRequest("Gli anime più visti", AnimeArchiveQuery(order_by="views", dubbed=False)),
    CollectionRequest(
        "Gli anime doppiati più visti", AnimeArchiveQuery(order_by="views", dubbed=True)
    ),
    CollectionRequest(
        "Anime del momento",
        AnimeArchiveQuery(order_by="popularity", dubbed=False),
        category=FeedCategory.HOT,
    ),
    CollectionRequest("I film anime più apprezzati", AnimeArchiveQuery(type="Movie", dubbed=False)),
    CollectionRequest(
        "I film anime doppiati più apprezzati", AnimeArchiveQuery(type="Movie", dubbed=True)
    ),
    CollectionRequest("Le serie anime più amate", AnimeArchiveQuery(type="TV", dubbed=False)),
    CollectionRequest("Le serie anime doppiate più amate", AnimeArchiveQuery(type="TV", dubbed=True)),
)


def _genre_request(name: str, *genres: str, **kwargs) -> CollectionRequest[TitleArchiveQuery]:
    query = TitleArchiveQuery(genres=tuple(SC_GENRES[genre] for genre in genres), **kwargs)
    return CollectionRequest(name, query)


def _new_series_request(name: str, service: str) -> CollectionRequest[TitleArchiveQuery]:
    return CollectionRequest(
        name,
        TitleArchiveQuery(type="tv", service=service, sorting="last_air_date"),
        category=FeedCategory.NEW,
        max_pages=1,
    )


TITLE_COLLECTION_REQUESTS: tuple[CollectionRequest[TitleArchiveQuery], ...] = (
    _genre_request("Azione", "action"),
    _genre_request("Crimine", "crime"),
    _genre_request("Documentari", "documentary"),
    _genre_request("Dramma", "drama"),
    _genre_request("Famiglia", "family"),
    _genre_request("Fantasy", "fantasy"),
    _genre_request("Guerra", "war"),
    _genre_request("Horror", "horror"),
    _genre_request("Drammi Coreani", "korean_drama"),
    _genre_request("Mistero", "mystery"),
    _genre_request("Fantascienza", "science_fiction"),
    _genre_request("Thriller", "thriller"),
    _genre_request("Animazione", "animation"),
    _genre_request("Commedia", "comedy"),
    _genre_request("Azione e Avventura", "action_adventure"),
    _genre_request("Musical", "musical"),
    _genre_request("Romantico", "romantic"),
    _genre_request(
        "Animazione esilarante", "animation", "comedy", type="tv", minimum_views="75k"
    ),
    _new_series_request("Novità Netflix", "netflix"),
    _new_series_request("Novità Disney+", "disney"),
    _new_series_request("Novità Prime Video", "prime"),
    _new_series_request("Novità Apple TV+", "apple"),
    _new_series_request("Novità Now TV", "now"),
    CollectionRequest("I migliori film degli anni 90", TitleArchiveQuery(type="movie", year=1990)),
    CollectionRequest("I migliori film degli anni 80", TitleArchiveQuery(type="movie", year=1980)),
    CollectionRequest("I migliori film degli anni 70", TitleArchiveQuery(type="movie", year=1970)),
    CollectionRequest("I migliori film degli anni 60", TitleArchiveQuery(type="movie", year=1960)),
    CollectionRequest(
        "Serie da record",
        TitleArchiveQuery(type="tv", minimum_views="1M"),
        category=FeedCategory.HOT,
    ),
    CollectionRequest(
        "Film da record",
        TitleArchiveQuery(type="movie", minimum_views="500k"),
        category=FeedCategory.HOT,
    ),
)


# ---------------------------------------------------------------------------
# Generateurs
# ---------------------------------------------------------------------------


@dataclass
class GenerationReport:
    """Collections produites et noms des collections en echec."""

    collections: list[FeedCollection] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


class AnimeFeedGenerator:
    """Collections du catalogue anime (archive AnimeUnity)."""

    def __init__(
        self,
        provider: IAnimeProvider,
        crawler: ArchiveCrawler[AnimeRecord],
        asset_store: IAssetStore,
    ) -> None:
        self._provider = provider
        self._crawler = crawler
        self._asset_store = asset_store

    async def build_collection(
        self, request: CollectionRequest[AnimeArchiveQuery]
    ) -> FeedCollection:
        """
        Raises:
            ArchiveCrawlError: Si une page de l'archive echoue
        """
        dubbed = request.query.dubbed
        records = await self._crawler.crawl(
            lambda page: self._provider.get_archive_page(page, request.query),
            max_pages=request.max_pages,
            max_items=request.max_items,
            post_filter=None if dubbed is None else (lambda record: record.dubbed == dubbed),
        )
        logger.info("Collection generee: {} ({} series)", request.name, len(records))
        return FeedCollection(
            id=f"au-{slugify(request.name)}",
            name=request.name,
            category=request.category,
            shows=tuple(map_anime_entry(record) for record in records),
        )

    async def build_collections(
        self,
        requests: tuple[CollectionRequest[AnimeArchiveQuery], ...] = ANIME_COLLECTION_REQUESTS,
    ) -> GenerationReport:
        report = GenerationReport()
        for request in requests:
            try:
                report.collections.append(await self.build_collection(request))
            except CatalogError as exc:
                logger.error("Collection {} abandonnee: {}", request.name, exc)
                report.failed.append(request.name)
        return report

    async def generate(self) -> GenerationReport:
        report = await self.build_collections()
        self._asset_store.write_collections(AnimeCatalog.COLLECTIONS_ASSET, report.collections)
        return report


class StreamingFeedGenerator:
    """
    Collections et tendances du catalogue films/series.

    Attributes:
        TRENDING_QUERY: Filtres de l'archive pour les tendances
        TRENDING_LIMIT: Nombre de titres examines pour les tendances
    """

    TRENDING_QUERY = TitleArchiveQuery(sorting="last_air_date", minimum_views="100k")
    TRENDING_LIMIT = 10

    def __init__(
        self,
        provider: ITitleProvider,
        tmdb: ITMDBProvider,
        crawler: ArchiveCrawler[TitleRecord],
        asset_store: IAssetStore,
    ) -> None:
        self._provider = provider
        self._tmdb = tmdb
        self._crawler = crawler
        self._asset_store = asset_store

    async def build_collection(
        self, request: CollectionRequest[TitleArchiveQuery]
    ) -> FeedCollection:
        """
        Raises:
            ArchiveCrawlError: Si une page de l'archive echoue
        """
        records = await self._crawler.crawl(
            lambda page: self._provider.get_archive_page(page, request.query),
            max_pages=request.max_pages,
            max_items=request.max_items,
        )
        logger.info("Collection generee: {} ({} titres)", request.name, len(records))
        return FeedCollection(
            id=f"hachi-sc-{request.query.type or 'all'}-{slugify(request.name)}",
            name=request.name,
            category=request.category,
            shows=tuple(map_title_entry(record) for record in records),
        )

    async def build_collections(
        self,
        requests: tuple[CollectionRequest[TitleArchiveQuery], ...] = TITLE_COLLECTION_REQUESTS,
    ) -> GenerationReport:
        report = GenerationReport()
        for request in requests:
            try:
                report.collections.append(await self.build_collection(request))
            except CatalogError as exc:
                logger.error("Collection {} abandonnee: {}", request.name, exc)
                report.failed.append(request.name)
        return report

    async def _build_trending_show(self, record: TitleRecord) -> Optional[Show]:
        show_id = format_show_id(record.id, record.slug)
        try:
            detail = await call_primary(self._provider.source, self._provider.get_show(show_id))
        except CatalogError as exc:
            logger.warning("Tendance {} ignoree: {}", show_id, exc)
            return None
        if not detail.tmdb_id:
            return None

        posters, logos = await asyncio.gather(
            fetch_enrichment(
                "tmdb",
                detail.tmdb_id,
                lambda: self._tmdb.get_images(detail.type, detail.tmdb_id, "posters", "xx"),
            ),
            fetch_enrichment(
                "tmdb",
                detail.tmdb_id,
                lambda: self._tmdb.get_images(detail.type, detail.tmdb_id, "logos", "en"),
            ),
        )
        poster_urls = posters.unwrap_or([])
        if not poster_urls:
            return None

        show = map_title_show(show_id, detail)
        logo_urls = logos.unwrap_or([])
        return replace(
            show,
            poster_url=poster_urls[0],
            logo_url=first_non_empty([logo_urls[0] if logo_urls else None, show.logo_url]),
            related_shows=None,
        )

    async def build_trending_shows(self) -> list[Show]:
        """
        Titres recents et populaires avec une jaquette sans texte.

        Raises:
            ArchiveCrawlError: Si la page de l'archive echoue
        """
        records = await self._crawler.crawl(
            lambda page: self._provider.get_archive_page(page, self.TRENDING_QUERY),
            max_pages=1,
            max_items=self.TRENDING_LIMIT,
        )
        trending = []
        for record in records:
            show = await self._build_trending_show(record)
            if show is not None:
                trending.append(show)
        logger.info("Tendances generees: {} titres", len(trending))
        return trending

    async def generate(self) -> GenerationReport:
        report = await self.build_collections()
        self._asset_store.write_collections(StreamingCatalog.COLLECTIONS_ASSET, report.collections)
        return report

    async def generate_trending(self) -> list[Show]:
        trending = await self.build_trending_shows()
        self._asset_store.write_shows(StreamingCatalog.TRENDING_ASSET, trending)
        return trending
