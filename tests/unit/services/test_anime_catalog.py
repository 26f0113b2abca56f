"""
Tests unitaires pour AnimeCatalog.

Les ports (AnimeUnity, Jikan, AniList, Kitsu, resolveur) sont des AsyncMock.
Verifie la reconciliation des champs, la degradation sur echec
d'enrichissement, les saisons derivees, les episodes et les flux video.
"""

from dataclasses import replace
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from hachi.core.entities import FeedCollection, Season, ShowKind, ShowStatus
from hachi.core.errors import (
    InvalidIdentifierError,
    ManifestNotFoundError,
    NotFoundError,
    UpstreamFailure,
)
from hachi.core.ports.providers import (
    AnimeEpisodeRecord,
    AnimeRecord,
    AniListEpisode,
    AniListShow,
    JikanEpisode,
    JikanShow,
    KitsuShow,
)
from hachi.services.catalogs import AnimeCatalog
from hachi.services.reconciler import FieldPrecedence


@pytest.fixture
def catalog(
    mock_anime_provider: AsyncMock,
    mock_jikan: AsyncMock,
    mock_anilist: AsyncMock,
    mock_kitsu: AsyncMock,
    mock_resolver: AsyncMock,
    mock_asset_store: MagicMock,
) -> AnimeCatalog:
    return AnimeCatalog(
        provider=mock_anime_provider,
        jikan=mock_jikan,
        anilist=mock_anilist,
        kitsu=mock_kitsu,
        resolver=mock_resolver,
        asset_store=mock_asset_store,
        user_agent="HachiTest/1.0",
    )


class TestSearch:
    @pytest.mark.asyncio
    async def test_search_maps_entries(self, catalog: AnimeCatalog) -> None:
        entries = await catalog.search_shows("my show")

        assert len(entries) == 1
        assert entries[0].id == "42-my-show"
        assert entries[0].kind == ShowKind.SERIES
        assert entries[0].year == 2019
        assert entries[0].language == "ja"

    @pytest.mark.asyncio
    async def test_search_failure_is_upstream_failure(
        self, catalog: AnimeCatalog, mock_anime_provider: AsyncMock
    ) -> None:
        mock_anime_provider.search.side_effect = httpx.ConnectError("refused")
        with pytest.raises(UpstreamFailure) as exc_info:
            await catalog.search_shows("x")
        assert exc_info.value.source == "animeunity"


class TestGetShow:
    @pytest.mark.asyncio
    async def test_enrichment_poster_fills_missing_primary(
        self,
        catalog: AnimeCatalog,
        mock_anime_provider: AsyncMock,
        mock_jikan: AsyncMock,
        anime_record: AnimeRecord,
    ) -> None:
        """Jaquette absente chez le principal, fournie par l'enrichissement; note absente partout."""
        mock_anime_provider.get_show.return_value = replace(
            anime_record, poster_url=None, score=None
        )
        mock_jikan.get_show.return_value = JikanShow(poster_url="https://x/img.jpg", score=None)

        show = await catalog.get_show("42-my-show")

        assert show.id == "42-my-show"
        assert show.poster_url == "https://x/img.jpg"
        assert show.rating == 0.0
        mock_anime_provider.get_show.assert_awaited_once_with(42)

    @pytest.mark.asyncio
    async def test_primary_fields(self, catalog: AnimeCatalog) -> None:
        show = await catalog.get_show("42-my-show")

        assert show.title == "My Show"
        assert show.kind == ShowKind.SERIES
        assert show.release_date == "2019-04-01"
        assert show.status == ShowStatus.ENDED
        assert show.duration == 24 * 60
        assert show.rating == 8.25
        assert show.poster_url == "https://img.animeunity.so/my-show.jpg"
        assert show.genres == ("Azione", "Avventura")

    @pytest.mark.asyncio
    async def test_derived_seasons(self, catalog: AnimeCatalog) -> None:
        show = await catalog.get_show("42-my-show")
        assert show.seasons == (Season(0, "1-100"), Season(1, "101-200"), Season(2, "201-220"))

    @pytest.mark.asyncio
    async def test_movie_has_no_seasons(
        self, catalog: AnimeCatalog, mock_anime_provider: AsyncMock, anime_record: AnimeRecord
    ) -> None:
        mock_anime_provider.get_show.return_value = replace(
            anime_record, type="Movie", episodes_count=1
        )
        show = await catalog.get_show("42-my-show")
        assert show.kind == ShowKind.MOVIE
        assert show.seasons is None

    @pytest.mark.asyncio
    async def test_enrichment_artwork_wins_by_default(
        self,
        catalog: AnimeCatalog,
        mock_jikan: AsyncMock,
        mock_anilist: AsyncMock,
        mock_kitsu: AsyncMock,
    ) -> None:
        mock_jikan.get_show.return_value = JikanShow(poster_url="https://mal/large.jpg", score=9.1)
        mock_anilist.get_show.return_value = AniListShow(
            banner_url="https://anilist/banner.jpg", cover_url="https://anilist/cover.jpg"
        )
        mock_kitsu.get_show_by_mal_id.return_value = KitsuShow(cover_url="https://kitsu/cover.jpg")

        show = await catalog.get_show("42-my-show")

        assert show.poster_url == "https://mal/large.jpg"
        assert show.backdrop_url == "https://kitsu/cover.jpg"
        assert show.clean_poster_url == "https://anilist/cover.jpg"
        assert show.rating == 9.1

    @pytest.mark.asyncio
    async def test_primary_first_artwork(
        self,
        mock_anime_provider: AsyncMock,
        mock_jikan: AsyncMock,
        mock_anilist: AsyncMock,
        mock_kitsu: AsyncMock,
        mock_resolver: AsyncMock,
        mock_asset_store: MagicMock,
    ) -> None:
        catalog = AnimeCatalog(
            provider=mock_anime_provider,
            jikan=mock_jikan,
            anilist=mock_anilist,
            kitsu=mock_kitsu,
            resolver=mock_resolver,
            asset_store=mock_asset_store,
            artwork_precedence=FieldPrecedence.PRIMARY_FIRST,
        )
        mock_jikan.get_show.return_value = JikanShow(poster_url="https://mal/large.jpg")

        show = await catalog.get_show("42-my-show")

        assert show.poster_url == "https://img.animeunity.so/my-show.jpg"

    @pytest.mark.asyncio
    async def test_jikan_rating_wins_over_primary_score(
        self,
        catalog: AnimeCatalog,
        mock_anime_provider: AsyncMock,
        mock_jikan: AsyncMock,
        anime_record: AnimeRecord,
    ) -> None:
        """La note MAL remplace la note AnimeUnity, meme renseignee."""
        mock_anime_provider.get_show.return_value = replace(anime_record, score="0")
        mock_jikan.get_show.return_value = JikanShow(score=8.7)

        show = await catalog.get_show("42-my-show")

        assert show.rating == 8.7

    @pytest.mark.asyncio
    async def test_primary_first_rating(
        self,
        mock_anime_provider: AsyncMock,
        mock_jikan: AsyncMock,
        mock_anilist: AsyncMock,
        mock_kitsu: AsyncMock,
        mock_resolver: AsyncMock,
        mock_asset_store: MagicMock,
    ) -> None:
        catalog = AnimeCatalog(
            provider=mock_anime_provider,
            jikan=mock_jikan,
            anilist=mock_anilist,
            kitsu=mock_kitsu,
            resolver=mock_resolver,
            asset_store=mock_asset_store,
            rating_precedence=FieldPrecedence.PRIMARY_FIRST,
        )
        mock_jikan.get_show.return_value = JikanShow(score=8.7)

        show = await catalog.get_show("42-my-show")

        assert show.rating == 8.25

    @pytest.mark.asyncio
    async def test_enrichment_failure_degrades_field(
        self,
        catalog: AnimeCatalog,
        mock_anilist: AsyncMock,
        mock_kitsu: AsyncMock,
    ) -> None:
        """Kitsu en echec: le fond retombe sur la banniere AniList."""
        mock_kitsu.get_show_by_mal_id.side_effect = httpx.ReadTimeout("timeout")
        mock_anilist.get_show.return_value = AniListShow(banner_url="https://anilist/banner.jpg")

        show = await catalog.get_show("42-my-show")

        assert show.backdrop_url == "https://anilist/banner.jpg"

    @pytest.mark.asyncio
    async def test_all_enrichments_failing_keeps_primary(
        self,
        catalog: AnimeCatalog,
        mock_jikan: AsyncMock,
        mock_anilist: AsyncMock,
        mock_kitsu: AsyncMock,
    ) -> None:
        mock_jikan.get_show.side_effect = RuntimeError("jikan down")
        mock_anilist.get_show.side_effect = NotFoundError("no media")
        mock_kitsu.get_show_by_mal_id.side_effect = httpx.ConnectError("refused")

        show = await catalog.get_show("42-my-show")

        assert show.poster_url == "https://img.animeunity.so/my-show.jpg"
        assert show.backdrop_url is None
        assert show.rating == 8.25

    @pytest.mark.asyncio
    async def test_missing_external_ids_skip_enrichment(
        self,
        catalog: AnimeCatalog,
        mock_anime_provider: AsyncMock,
        mock_jikan: AsyncMock,
        mock_anilist: AsyncMock,
        mock_kitsu: AsyncMock,
        anime_record: AnimeRecord,
    ) -> None:
        mock_anime_provider.get_show.return_value = replace(
            anime_record, mal_id=None, anilist_id=None
        )

        await catalog.get_show("42-my-show")

        mock_jikan.get_show.assert_not_awaited()
        mock_anilist.get_show.assert_not_awaited()
        mock_kitsu.get_show_by_mal_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_zero_mal_id_skips_jikan_and_kitsu(
        self,
        catalog: AnimeCatalog,
        mock_anime_provider: AsyncMock,
        mock_jikan: AsyncMock,
        mock_kitsu: AsyncMock,
        anime_record: AnimeRecord,
    ) -> None:
        mock_anime_provider.get_show.return_value = replace(anime_record, mal_id=0)

        await catalog.get_show("42-my-show")

        mock_jikan.get_show.assert_not_awaited()
        mock_kitsu.get_show_by_mal_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_related_and_franchise(
        self, catalog: AnimeCatalog, mock_anime_provider: AsyncMock, anime_record: AnimeRecord
    ) -> None:
        mock_anime_provider.get_show.return_value = replace(
            anime_record,
            related=(AnimeRecord(id=43, slug="movie", title="Movie", type="Movie"),),
            suggested=(AnimeRecord(id=50, slug="other-ita", title="Other (ITA)"),),
        )

        show = await catalog.get_show("42-my-show")

        assert [e.id for e in show.franchise_shows] == ["43-movie"]
        assert show.franchise_shows[0].kind == ShowKind.MOVIE
        assert [e.id for e in show.related_shows] == ["50-other-ita"]
        assert show.related_shows[0].title == "Other"
        assert show.related_shows[0].language == "it"

    @pytest.mark.asyncio
    async def test_invalid_identifier(
        self, catalog: AnimeCatalog, mock_anime_provider: AsyncMock
    ) -> None:
        with pytest.raises(InvalidIdentifierError):
            await catalog.get_show("my-show")
        mock_anime_provider.get_show.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_primary_not_found_propagates(
        self, catalog: AnimeCatalog, mock_anime_provider: AsyncMock
    ) -> None:
        mock_anime_provider.get_show.side_effect = NotFoundError("Anime 42 introuvable")
        with pytest.raises(NotFoundError):
            await catalog.get_show("42-my-show")

    @pytest.mark.asyncio
    async def test_primary_failure_is_fatal(
        self, catalog: AnimeCatalog, mock_anime_provider: AsyncMock
    ) -> None:
        mock_anime_provider.get_show.side_effect = httpx.ConnectError("refused")
        with pytest.raises(UpstreamFailure):
            await catalog.get_show("42-my-show")


class TestGetEpisodes:
    @pytest.mark.asyncio
    async def test_second_season_offset_and_enrichment(
        self,
        catalog: AnimeCatalog,
        mock_anime_provider: AsyncMock,
        mock_jikan: AsyncMock,
        mock_anilist: AsyncMock,
    ) -> None:
        mock_anime_provider.get_episodes.return_value = [
            AnimeEpisodeRecord(id=5101, number="101"),
            AnimeEpisodeRecord(id=5102, number="102"),
        ]
        mock_jikan.get_episodes.return_value = [
            JikanEpisode(number=101, title="Title 101", filler=True)
        ]
        mock_anilist.get_episodes.return_value = [
            AniListEpisode(number=102, thumbnail_url="https://anilist/102.jpg")
        ]

        episodes = await catalog.get_episodes("42-my-show", 1)

        mock_anime_provider.get_episodes.assert_awaited_once_with(42, 101, 100)
        mock_jikan.get_episodes.assert_awaited_once_with(1001, 2)

        assert [e.id for e in episodes] == ["42-my-show/5101", "42-my-show/5102"]
        assert [e.number for e in episodes] == [101, 102]
        assert episodes[0].title == "Title 101"
        assert episodes[0].is_filler is True
        assert episodes[0].thumbnail_url is None
        # Numero absent de l'enrichissement: valeurs par defaut
        assert episodes[1].title is None
        assert episodes[1].is_filler is False
        assert episodes[1].thumbnail_url == "https://anilist/102.jpg"

    @pytest.mark.asyncio
    async def test_empty_season(
        self, catalog: AnimeCatalog, mock_anime_provider: AsyncMock, mock_jikan: AsyncMock
    ) -> None:
        mock_anime_provider.get_episodes.return_value = []

        assert await catalog.get_episodes("42-my-show", 5) == []
        mock_jikan.get_episodes.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_enrichment_failure_keeps_episodes(
        self,
        catalog: AnimeCatalog,
        mock_jikan: AsyncMock,
        mock_anilist: AsyncMock,
    ) -> None:
        mock_jikan.get_episodes.side_effect = RuntimeError("429")
        mock_anilist.get_episodes.side_effect = RuntimeError("down")

        episodes = await catalog.get_episodes("42-my-show", 0)

        assert [e.number for e in episodes] == [1, 2]
        assert all(e.title is None for e in episodes)

    @pytest.mark.asyncio
    async def test_unparseable_number_uses_position(
        self, catalog: AnimeCatalog, mock_anime_provider: AsyncMock
    ) -> None:
        mock_anime_provider.get_episodes.return_value = [
            AnimeEpisodeRecord(id=1, number="1"),
            AnimeEpisodeRecord(id=2, number="Speciale"),
            AnimeEpisodeRecord(id=3, number="3-4"),
        ]

        episodes = await catalog.get_episodes("42-my-show", 0)

        assert [e.number for e in episodes] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_negative_season(self, catalog: AnimeCatalog) -> None:
        with pytest.raises(ValueError):
            await catalog.get_episodes("42-my-show", -1)


class TestGetVideoAssets:
    @pytest.mark.asyncio
    async def test_episode_id(
        self,
        catalog: AnimeCatalog,
        mock_anime_provider: AsyncMock,
        mock_resolver: AsyncMock,
    ) -> None:
        assets = await catalog.get_video_assets("42-my-show/5001")

        mock_anime_provider.get_video_url.assert_awaited_once_with(5001)
        mock_resolver.resolve.assert_awaited_once_with("https://vixcloud.co/embed/777?token=x")
        assert len(assets) == 1
        assert assets[0].url == "https://vixcloud.co/playlist/777?token=x"
        assert assets[0].headers == {
            "Referer": "https://vixcloud.co/embed/777?token=x",
            "User-Agent": "HachiTest/1.0",
        }

    @pytest.mark.asyncio
    async def test_bare_show_id_uses_first_episode(
        self, catalog: AnimeCatalog, mock_anime_provider: AsyncMock
    ) -> None:
        """Un film (ID de serie seul) est lu via son premier episode."""
        await catalog.get_video_assets("42-my-show")

        mock_anime_provider.get_episodes.assert_awaited_once_with(42, 1, 1)
        mock_anime_provider.get_video_url.assert_awaited_once_with(5001)

    @pytest.mark.asyncio
    async def test_bare_show_id_without_episodes(
        self, catalog: AnimeCatalog, mock_anime_provider: AsyncMock
    ) -> None:
        mock_anime_provider.get_episodes.return_value = []
        with pytest.raises(NotFoundError):
            await catalog.get_video_assets("42-my-show")

    @pytest.mark.asyncio
    async def test_direct_media_url_skips_resolver(
        self,
        catalog: AnimeCatalog,
        mock_anime_provider: AsyncMock,
        mock_resolver: AsyncMock,
    ) -> None:
        mock_anime_provider.get_video_url.return_value = "https://cdn.example/ep1.mp4"

        assets = await catalog.get_video_assets("42-my-show/5001")

        assert assets[0].url == "https://cdn.example/ep1.mp4"
        mock_resolver.resolve.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_manifest_failure_is_fatal(
        self, catalog: AnimeCatalog, mock_resolver: AsyncMock
    ) -> None:
        mock_resolver.resolve.side_effect = ManifestNotFoundError("no params")
        with pytest.raises(ManifestNotFoundError):
            await catalog.get_video_assets("42-my-show/5001")

    @pytest.mark.asyncio
    async def test_player_download_failure(
        self, catalog: AnimeCatalog, mock_resolver: AsyncMock
    ) -> None:
        mock_resolver.resolve.side_effect = httpx.ConnectError("refused")
        with pytest.raises(UpstreamFailure) as exc_info:
            await catalog.get_video_assets("42-my-show/5001")
        assert exc_info.value.source == "vixcloud"


class TestFeed:
    @pytest.mark.asyncio
    async def test_reads_precomputed_collections(
        self, catalog: AnimeCatalog, mock_asset_store: MagicMock
    ) -> None:
        collection = FeedCollection(id="au-x", name="X")
        mock_asset_store.read_collections.return_value = [collection]

        assert await catalog.get_feed_collections() == [collection]
        mock_asset_store.read_collections.assert_called_once_with("au_feed_cache_collections")

    @pytest.mark.asyncio
    async def test_reads_precomputed_trending(
        self, catalog: AnimeCatalog, mock_asset_store: MagicMock
    ) -> None:
        assert await catalog.get_trending_shows() == []
        mock_asset_store.read_shows.assert_called_once_with("au_feed_cache_trending_shows")
