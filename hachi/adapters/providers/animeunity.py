"""
Client AnimeUnity, fournisseur principal du catalogue anime.

Implemente IAnimeProvider. Les reponses brutes sont converties en
AnimeRecord / AnimeEpisodeRecord des la reception.

Usage:
    client = AnimeUnityClient()
    shows = await client.search("one piece")
    show = await client.get_show(12)
    episodes = await client.get_episodes(12, start=1, limit=100)
    await client.close()
"""

from typing import Any, Optional

import httpx

from hachi.adapters.api.retry import request_with_retry
from hachi.core.errors import NotFoundError
from hachi.core.ports.providers import (
    AnimeArchiveQuery,
    AnimeEpisodeRecord,
    AnimeRecord,
    IAnimeProvider,
)
from hachi.utils.helpers import to_int

# Libelles de tri attendus par /archivio/get-animes
_ARCHIVE_ORDERS = {
    "views": "Più Visti",
    "popularity": "Popolarità",
}


def parse_anime_record(data: dict[str, Any], depth: int = 0) -> AnimeRecord:
    """
    Convertit un anime brut AnimeUnity en AnimeRecord.

    Les listes related/suggested ne sont lues qu'au premier niveau.
    """
    title = data.get("title_eng") or data.get("title") or data.get("title_it") or ""
    related: tuple[AnimeRecord, ...] = ()
    suggested: tuple[AnimeRecord, ...] = ()
    if depth == 0:
        related = tuple(
            parse_anime_record(item, depth + 1) for item in data.get("related") or []
        )
        suggested = tuple(
            parse_anime_record(item, depth + 1) for item in data.get("suggested") or []
        )

    return AnimeRecord(
        id=int(data["id"]),
        slug=data.get("slug") or "",
        title=title,
        type=data.get("type") or "TV",
        poster_url=data.get("imageurl"),
        cover_url=data.get("imageurl_cover"),
        plot=data.get("plot"),
        score=data.get("score"),
        year=to_int(data.get("date")),
        season=data.get("season"),
        status=data.get("status"),
        genres=tuple(
            genre["name"] for genre in data.get("genres") or [] if genre.get("name")
        ),
        episodes_count=to_int(data.get("episodes_count")) or 0,
        episodes_length=to_int(data.get("episodes_length")) or 0,
        dubbed=to_int(data.get("dub")) == 1,
        mal_id=to_int(data.get("mal_id")),
        anilist_id=to_int(data.get("anilist_id")),
        related=related,
        suggested=suggested,
    )


class AnimeUnityClient(IAnimeProvider):
    """
    Client HTTP AnimeUnity.

    Attributes:
        ARCHIVE_PAGE_SIZE: Nombre d'anime par page d'archive
    """

    ARCHIVE_PAGE_SIZE = 30

    def __init__(
        self,
        base_url: str = "https://www.animeunity.so",
        user_agent: Optional[str] = None,
        timeout: float = 30.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._user_agent = user_agent
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            headers = {
                "Accept": "application/json",
                "Referer": f"{self._base_url}/",
                "X-Requested-With": "XMLHttpRequest",
            }
            if self._user_agent:
                headers["User-Agent"] = self._user_agent
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                timeout=self._timeout,
                follow_redirects=True,
            )
        return self._client

    @property
    def source(self) -> str:
        return "animeunity"

    async def search(self, query: str) -> list[AnimeRecord]:
        client = self._get_client()
        response = await request_with_retry(
            client, "POST", "/livesearch", data={"title": query}
        )
        return [parse_anime_record(item) for item in response.json().get("records", [])]

    async def get_show(self, show_id: int) -> AnimeRecord:
        client = self._get_client()
        try:
            response = await request_with_retry(client, "GET", f"/info_api/{show_id}/")
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise NotFoundError(f"Anime {show_id} introuvable") from e
            raise
        return parse_anime_record(response.json())

    async def get_episodes(
        self, show_id: int, start: int, limit: int
    ) -> list[AnimeEpisodeRecord]:
        client = self._get_client()
        response = await request_with_retry(
            client,
            "GET",
            f"/info_api/{show_id}/1",
            params={"start_range": start, "end_range": start + limit - 1},
        )
        return [
            AnimeEpisodeRecord(id=int(item["id"]), number=str(item.get("number") or ""))
            for item in response.json().get("episodes", [])
        ]

    async def get_video_url(self, episode_id: int) -> str:
        client = self._get_client()
        response = await request_with_retry(client, "GET", f"/embed-url/{episode_id}")
        url = response.text.strip()
        if not url:
            raise NotFoundError(f"Aucun lecteur pour l'episode {episode_id}")
        return url

    async def get_archive_page(
        self, page: int, query: AnimeArchiveQuery
    ) -> list[AnimeRecord]:
        client = self._get_client()
        payload = {
            "title": False,
            "type": query.type or False,
            "year": False,
            "order": _ARCHIVE_ORDERS.get(query.order_by or "", False),
            "status": False,
            "genres": False,
            "offset": (page - 1) * self.ARCHIVE_PAGE_SIZE,
            "dubbed": False,
            "season": False,
        }
        response = await request_with_retry(
            client, "POST", "/archivio/get-animes", json=payload
        )
        return [parse_anime_record(item) for item in response.json().get("records", [])]

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
