"""
Container d'injection de dependances via dependency-injector.

Assemble les clients des fournisseurs, le resolveur de manifestes, le
stockage d'assets et les deux catalogues a partir de Settings.
"""

from dependency_injector import containers, providers

from .adapters.api.cache import APICache
from .adapters.html import HTMLFetcher
from .adapters.providers import (
    AniListClient,
    AnimeUnityClient,
    IMDbScraper,
    JikanClient,
    KitsuClient,
    StreamingCommunityClient,
    TMDBScraper,
)
from .adapters.storage import JsonAssetStore
from .adapters.vixcloud import VixcloudResolver
from .config import Settings
from .services.archive_crawler import ArchiveCrawler
from .services.catalogs import AnimeCatalog, StreamingCatalog
from .services.feed_generator import AnimeFeedGenerator, StreamingFeedGenerator


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        catalog = container.anime_catalog()
        show = await catalog.get_show("42-my-show")
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Cache disque partage par les sources d'enrichissement
    api_cache = providers.Singleton(
        APICache,
        cache_dir=config.provided.cache_dir,
    )

    # Telechargement des pages HTML (TMDB, IMDb, lecteur Vixcloud)
    html_fetcher = providers.Singleton(
        HTMLFetcher,
        user_agent=config.provided.user_agent,
        timeout=config.provided.http_timeout,
    )
    playlist_resolver = providers.Singleton(VixcloudResolver, fetcher=html_fetcher)

    asset_store = providers.Singleton(JsonAssetStore, assets_dir=config.provided.assets_dir)

    # Fournisseurs principaux
    animeunity_client = providers.Singleton(
        AnimeUnityClient,
        base_url=config.provided.animeunity_url,
        user_agent=config.provided.user_agent,
        timeout=config.provided.http_timeout,
    )
    streamingcommunity_client = providers.Singleton(
        StreamingCommunityClient,
        base_url=config.provided.streamingcommunity_url,
        user_agent=config.provided.user_agent,
        timeout=config.provided.http_timeout,
    )

    # Sources d'enrichissement
    jikan_client = providers.Singleton(
        JikanClient,
        cache=api_cache,
        base_url=config.provided.jikan_url,
        timeout=config.provided.http_timeout,
    )
    anilist_client = providers.Singleton(
        AniListClient,
        cache=api_cache,
        endpoint=config.provided.anilist_url,
        timeout=config.provided.http_timeout,
    )
    kitsu_client = providers.Singleton(
        KitsuClient,
        cache=api_cache,
        base_url=config.provided.kitsu_url,
        timeout=config.provided.http_timeout,
    )
    tmdb_scraper = providers.Singleton(
        TMDBScraper,
        fetcher=html_fetcher,
        cache=api_cache,
        base_url=config.provided.tmdb_url,
    )
    imdb_scraper = providers.Singleton(
        IMDbScraper,
        fetcher=html_fetcher,
        cache=api_cache,
        base_url=config.provided.imdb_url,
    )

    # Catalogues
    anime_catalog = providers.Singleton(
        AnimeCatalog,
        provider=animeunity_client,
        jikan=jikan_client,
        anilist=anilist_client,
        kitsu=kitsu_client,
        resolver=playlist_resolver,
        asset_store=asset_store,
        user_agent=config.provided.user_agent,
        episodes_per_season=config.provided.episodes_per_season,
        artwork_precedence=config.provided.artwork_precedence,
        rating_precedence=config.provided.anime_rating_precedence,
    )
    streaming_catalog = providers.Singleton(
        StreamingCatalog,
        provider=streamingcommunity_client,
        tmdb=tmdb_scraper,
        imdb=imdb_scraper,
        resolver=playlist_resolver,
        asset_store=asset_store,
        user_agent=config.provided.user_agent,
        artwork_precedence=config.provided.artwork_precedence,
        rating_precedence=config.provided.streaming_rating_precedence,
    )

    # Generation hors ligne - Factory: un crawler (et son delai) par generation
    anime_feed_generator = providers.Factory(
        AnimeFeedGenerator,
        provider=animeunity_client,
        crawler=providers.Factory(
            ArchiveCrawler, source="animeunity", delay_range=config.provided.crawl_delay_range
        ),
        asset_store=asset_store,
    )
    streaming_feed_generator = providers.Factory(
        StreamingFeedGenerator,
        provider=streamingcommunity_client,
        tmdb=tmdb_scraper,
        crawler=providers.Factory(
            ArchiveCrawler,
            source="streamingcommunity",
            delay_range=config.provided.crawl_delay_range,
        ),
        asset_store=asset_store,
    )
