"""
Client AniList (API GraphQL).

Fournit la banniere, la jaquette sans texte et les vignettes des episodes
diffuses en streaming. AniList ne numerote pas ses streamingEpisodes: le
numero est lu dans le titre ("Episode 12 - ...").
"""

import re
from typing import Any, Optional

import httpx

from hachi.adapters.api.cache import APICache
from hachi.adapters.api.retry import request_with_retry
from hachi.core.errors import NotFoundError
from hachi.core.ports.providers import AniListEpisode, AniListShow, IAniListProvider

_MEDIA_QUERY = """
query ($id: Int) {
  Media(id: $id, type: ANIME) {
    id
    bannerImage
    coverImage { extraLarge }
    streamingEpisodes { title thumbnail }
  }
}
"""

_EPISODE_NUMBER_PATTERN = re.compile(r"\b(?:Episode|Ep\.?)\s*(\d+)", re.IGNORECASE)


def parse_episode_number(title: Optional[str]) -> Optional[int]:
    """Extrait le numero d'episode d'un titre AniList."""
    if not title:
        return None
    match = _EPISODE_NUMBER_PATTERN.search(title)
    return int(match.group(1)) if match else None


class AniListClient(IAniListProvider):
    """Client GraphQL AniList avec cache-first."""

    def __init__(
        self,
        cache: APICache,
        endpoint: str = "https://graphql.anilist.co",
        timeout: float = 30.0,
    ) -> None:
        self._cache = cache
        self._endpoint = endpoint
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={
                    "Accept": "application/json",
                    "Content-Type": "application/json",
                },
                timeout=self._timeout,
            )
        return self._client

    @property
    def source(self) -> str:
        return "anilist"

    async def _fetch_media(self, anilist_id: int) -> dict[str, Any]:
        cache_key = f"anilist:media:{anilist_id}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        client = self._get_client()
        try:
            response = await request_with_retry(
                client,
                "POST",
                self._endpoint,
                json={"query": _MEDIA_QUERY, "variables": {"id": anilist_id}},
            )
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise NotFoundError(f"Media AniList {anilist_id} introuvable") from e
            raise
        media = (response.json().get("data") or {}).get("Media")
        if not media:
            raise NotFoundError(f"Media AniList {anilist_id} introuvable")

        await self._cache.set_details(cache_key, media)
        return media

    async def get_show(self, anilist_id: int) -> AniListShow:
        media = await self._fetch_media(anilist_id)
        return AniListShow(
            banner_url=media.get("bannerImage"),
            cover_url=(media.get("coverImage") or {}).get("extraLarge"),
        )

    async def get_episodes(self, anilist_id: int) -> list[AniListEpisode]:
        media = await self._fetch_media(anilist_id)
        episodes = []
        for item in media.get("streamingEpisodes") or []:
            number = parse_episode_number(item.get("title"))
            if number is None:
                continue
            episodes.append(
                AniListEpisode(number=number, thumbnail_url=item.get("thumbnail"))
            )
        return episodes

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
