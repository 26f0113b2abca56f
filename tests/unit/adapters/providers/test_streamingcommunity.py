"""
Tests unitaires pour StreamingCommunityClient.

Ces tests verifient:
- Lecture de la version Inertia depuis la page d'accueil (une seule fois)
- Conversion des titres, saisons, episodes et images CDN
- Parametres de l'archive et de l'iframe du lecteur
"""

import httpx
import pytest
import respx

from hachi.adapters.providers.streamingcommunity import StreamingCommunityClient
from hachi.core.errors import InvalidIdentifierError, NotFoundError
from hachi.core.ports.providers import ImageRecord, TitleArchiveQuery
from tests.fixtures.streamingcommunity_responses import (
    SC_ARCHIVE_RESPONSE,
    SC_HOME_PAGE,
    SC_IFRAME_PAGE,
    SC_SEASON_PAGE,
    SC_TITLE,
    SC_TITLE_PAGE,
)

BASE_URL = "https://streamingunity.to"
CDN_URL = "https://cdn.streamingunity.to/images"


@pytest.fixture
def client() -> StreamingCommunityClient:
    return StreamingCommunityClient(base_url=BASE_URL)


class TestParseTitle:
    def test_images_use_cdn(self, client: StreamingCommunityClient) -> None:
        record = client.parse_title(SC_TITLE)

        assert record.images == (
            ImageRecord(type="poster", url=f"{CDN_URL}/poster.webp"),
            ImageRecord(type="background", url=f"{CDN_URL}/background.webp"),
        )

    def test_fields(self, client: StreamingCommunityClient) -> None:
        record = client.parse_title(SC_TITLE)

        assert record.id == 93405
        assert record.type == "tv"
        assert record.runtime == 55
        assert record.genres == ("Drama",)
        assert [s.number for s in record.seasons] == [1, 2]
        assert record.seasons[1].name == "Stagione finale"
        assert record.tmdb_id == 93405
        assert record.imdb_id == "tt10919420"

    def test_related_one_level_only(self, client: StreamingCommunityClient) -> None:
        data = {**SC_TITLE, "related": [{**SC_TITLE, "id": 2, "related": [SC_TITLE]}]}
        record = client.parse_title(data)
        assert record.related[0].id == 2
        assert record.related[0].related == ()


class TestStreamingCommunityClient:
    @pytest.mark.asyncio
    @respx.mock
    async def test_search(self, client: StreamingCommunityClient) -> None:
        route = respx.get(f"{BASE_URL}/api/search").mock(
            return_value=httpx.Response(200, json={"data": [SC_TITLE]})
        )

        records = await client.search("squid")

        params = route.calls.last.request.url.params
        assert params["q"] == "squid"
        assert params["lang"] == "it"
        assert [r.slug for r in records] == ["squid-game"]

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_show_uses_inertia(self, client: StreamingCommunityClient) -> None:
        home = respx.get(f"{BASE_URL}/it").mock(return_value=httpx.Response(200, text=SC_HOME_PAGE))
        title = respx.get(f"{BASE_URL}/it/titles/93405-squid-game").mock(
            return_value=httpx.Response(200, json=SC_TITLE_PAGE)
        )

        record = await client.get_show("93405-squid-game")
        await client.get_show("93405-squid-game")

        assert home.call_count == 1
        request = title.calls.last.request
        assert request.headers["X-Inertia"] == "true"
        assert request.headers["X-Inertia-Version"] == "abc123"
        assert record.name == "Squid Game"
        assert [r.slug for r in record.related] == ["alice"]

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_show_not_found(self, client: StreamingCommunityClient) -> None:
        respx.get(f"{BASE_URL}/it").mock(return_value=httpx.Response(200, text=SC_HOME_PAGE))
        respx.get(f"{BASE_URL}/it/titles/1-missing").mock(return_value=httpx.Response(404))

        with pytest.raises(NotFoundError):
            await client.get_show("1-missing")

    @pytest.mark.asyncio
    async def test_get_show_invalid_id(self, client: StreamingCommunityClient) -> None:
        with pytest.raises(InvalidIdentifierError):
            await client.get_show("squid-game")

    @pytest.mark.asyncio
    @respx.mock
    async def test_missing_inertia_version(self, client: StreamingCommunityClient) -> None:
        respx.get(f"{BASE_URL}/it").mock(return_value=httpx.Response(200, text="<html></html>"))

        with pytest.raises(NotFoundError):
            await client.get_show("93405-squid-game")

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_episodes(self, client: StreamingCommunityClient) -> None:
        respx.get(f"{BASE_URL}/it").mock(return_value=httpx.Response(200, text=SC_HOME_PAGE))
        respx.get(f"{BASE_URL}/it/titles/93405-squid-game/season-1").mock(
            return_value=httpx.Response(200, json=SC_SEASON_PAGE)
        )

        episodes = await client.get_episodes("93405-squid-game", 1)

        assert [e.id for e in episodes] == [7001, 7002]
        assert episodes[0].duration == 60
        assert episodes[0].images == (ImageRecord(type="cover", url=f"{CDN_URL}/ep1.webp"),)
        assert episodes[1].duration is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_video_source_of_episode(self, client: StreamingCommunityClient) -> None:
        route = respx.get(f"{BASE_URL}/it/iframe/93405").mock(
            return_value=httpx.Response(200, text=SC_IFRAME_PAGE)
        )

        source = await client.get_video_source("93405-squid-game?episode_id=7001")

        params = route.calls.last.request.url.params
        assert params["episode_id"] == "7001"
        assert params["next_episode"] == "1"
        assert source == "https://vixcloud.co/embed/888?token=t&b=1"

    @pytest.mark.asyncio
    @respx.mock
    async def test_video_source_of_movie(self, client: StreamingCommunityClient) -> None:
        route = respx.get(f"{BASE_URL}/it/iframe/12").mock(
            return_value=httpx.Response(200, text=SC_IFRAME_PAGE)
        )

        await client.get_video_source("12-film")

        assert "episode_id" not in route.calls.last.request.url.params

    @pytest.mark.asyncio
    @respx.mock
    async def test_video_source_without_iframe(self, client: StreamingCommunityClient) -> None:
        respx.get(f"{BASE_URL}/it/iframe/12").mock(
            return_value=httpx.Response(200, text="<html></html>")
        )

        with pytest.raises(NotFoundError):
            await client.get_video_source("12-film")

    @pytest.mark.asyncio
    @respx.mock
    async def test_archive_page_params(self, client: StreamingCommunityClient) -> None:
        route = respx.get(f"{BASE_URL}/api/archive").mock(
            return_value=httpx.Response(200, json=SC_ARCHIVE_RESPONSE)
        )
        query = TitleArchiveQuery(
            type="tv", genres=(16, 35), service="netflix", minimum_views="75k"
        )

        records = await client.get_archive_page(2, query)

        params = route.calls.last.request.url.params
        assert params["offset"] == "60"
        assert params["sort"] == "score"
        assert params["type"] == "tv"
        assert params.get_list("genre[]") == ["16", "35"]
        assert params["service"] == "netflix"
        assert params["views"] == "75k"
        assert "year" not in params
        assert [r.id for r in records] == [1, 2]
