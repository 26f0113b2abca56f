"""
Fixtures pytest partagees pour les tests Hachi.

Ce module contient les fixtures communes utilisees dans les tests:
- Mocks des ports (fournisseurs, resolveur, stockage d'assets)
- Enregistrements fournisseurs de reference
- Settings de test avec chemins temporaires
"""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from hachi.config import Settings
from hachi.core.ports.catalog import IAssetStore
from hachi.core.ports.documents import IPlaylistResolver
from hachi.core.ports.providers import (
    AnimeEpisodeRecord,
    AnimeRecord,
    IAniListProvider,
    IAnimeProvider,
    IIMDbProvider,
    IJikanProvider,
    IKitsuProvider,
    ImageRecord,
    ITitleProvider,
    ITMDBProvider,
    TitleRecord,
    TitleSeasonRecord,
)


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings de test isolees dans tmp_path."""
    return Settings(
        assets_dir=tmp_path / "assets",
        cache_dir=tmp_path / "cache",
        log_file=tmp_path / "test.log",
        crawl_delay_min=0.0,
        crawl_delay_max=0.0,
    )


# ---------------------------------------------------------------------------
# Catalogue anime
# ---------------------------------------------------------------------------


@pytest.fixture
def anime_record() -> AnimeRecord:
    """Serie AnimeUnity de 220 episodes avec IDs MAL et AniList."""
    return AnimeRecord(
        id=42,
        slug="my-show",
        title="My Show",
        type="TV",
        poster_url="https://img.animeunity.so/my-show.jpg",
        cover_url=None,
        plot="Une histoire.",
        score="8.25",
        year=2019,
        season="Primavera",
        status="Terminato",
        genres=("Azione", "Avventura"),
        episodes_count=220,
        episodes_length=24,
        mal_id=1001,
        anilist_id=2002,
    )


@pytest.fixture
def mock_anime_provider(anime_record: AnimeRecord) -> AsyncMock:
    mock = AsyncMock(spec=IAnimeProvider)
    mock.source = "animeunity"
    mock.get_show.return_value = anime_record
    mock.search.return_value = [anime_record]
    mock.get_episodes.return_value = [
        AnimeEpisodeRecord(id=5001, number="1"),
        AnimeEpisodeRecord(id=5002, number="2"),
    ]
    mock.get_video_url.return_value = "https://vixcloud.co/embed/777?token=x"
    return mock


@pytest.fixture
def mock_jikan() -> AsyncMock:
    """Jikan sans donnees par defaut."""
    mock = AsyncMock(spec=IJikanProvider)
    mock.get_show.return_value = None
    mock.get_episodes.return_value = []
    return mock


@pytest.fixture
def mock_anilist() -> AsyncMock:
    mock = AsyncMock(spec=IAniListProvider)
    mock.get_show.return_value = None
    mock.get_episodes.return_value = []
    return mock


@pytest.fixture
def mock_kitsu() -> AsyncMock:
    mock = AsyncMock(spec=IKitsuProvider)
    mock.get_show_by_mal_id.return_value = None
    return mock


# ---------------------------------------------------------------------------
# Catalogue films/series
# ---------------------------------------------------------------------------


@pytest.fixture
def title_record() -> TitleRecord:
    """Serie StreamingCommunity avec deux saisons et des IDs TMDB/IMDb."""
    return TitleRecord(
        id=93405,
        slug="squid-game",
        name="Squid Game",
        type="tv",
        plot="Sfide mortali.",
        score="7.9",
        runtime=55,
        release_date="2021-09-17",
        last_air_date="2024-12-26",
        status="Returning Series",
        genres=("Drama",),
        images=(
            ImageRecord(type="poster", url="https://cdn.streamingunity.to/images/p.webp"),
            ImageRecord(type="cover", url="https://cdn.streamingunity.to/images/c.webp"),
        ),
        seasons=(TitleSeasonRecord(number=1), TitleSeasonRecord(number=2, name="Finale")),
        tmdb_id=93405,
        imdb_id="tt10919420",
    )


@pytest.fixture
def mock_title_provider(title_record: TitleRecord) -> AsyncMock:
    mock = AsyncMock(spec=ITitleProvider)
    mock.source = "streamingcommunity"
    mock.get_show.return_value = title_record
    mock.search.return_value = [title_record]
    mock.get_episodes.return_value = []
    mock.get_video_source.return_value = "https://vixcloud.co/embed/888?b=1"
    return mock


@pytest.fixture
def mock_tmdb() -> AsyncMock:
    mock = AsyncMock(spec=ITMDBProvider)
    mock.get_show.return_value = None
    mock.get_images.return_value = []
    return mock


@pytest.fixture
def mock_imdb() -> AsyncMock:
    mock = AsyncMock(spec=IIMDbProvider)
    mock.get_show.return_value = None
    return mock


# ---------------------------------------------------------------------------
# Ports communs
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_resolver() -> AsyncMock:
    mock = AsyncMock(spec=IPlaylistResolver)
    mock.resolve.return_value = "https://vixcloud.co/playlist/777?token=x"
    return mock


@pytest.fixture
def mock_asset_store() -> MagicMock:
    mock = MagicMock(spec=IAssetStore)
    mock.read_collections.return_value = []
    mock.read_shows.return_value = []
    return mock
