"""
Client Jikan (API non officielle MyAnimeList).

Fournit la jaquette grand format, la note et les titres/fillers d'episodes.
Jikan limite a 3 requetes par seconde: les reponses sont cachees et les 429
relances par request_with_retry.
"""

from typing import Optional

import httpx

from hachi.adapters.api.cache import APICache
from hachi.adapters.api.retry import request_with_retry
from hachi.core.ports.providers import IJikanProvider, JikanEpisode, JikanShow
from hachi.utils.helpers import to_float, to_int


class JikanClient(IJikanProvider):
    """Client Jikan v4 avec cache-first."""

    def __init__(
        self,
        cache: APICache,
        base_url: str = "https://api.jikan.moe/v4",
        timeout: float = 30.0,
    ) -> None:
        self._cache = cache
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
        return self._client

    @property
    def source(self) -> str:
        return "jikan"

    async def get_show(self, mal_id: int) -> JikanShow:
        cache_key = f"jikan:show:{mal_id}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        client = self._get_client()
        response = await request_with_retry(client, "GET", f"/anime/{mal_id}")
        data = response.json().get("data") or {}

        images = (data.get("images") or {}).get("jpg") or {}
        show = JikanShow(
            poster_url=images.get("large_image_url"),
            score=to_float(data.get("score")),
        )
        await self._cache.set_details(cache_key, show)
        return show

    async def get_episodes(self, mal_id: int, page: int = 1) -> list[JikanEpisode]:
        """
        Recupere une page d'episodes (100 par page cote Jikan).

        Un titre absent est remplace par "Episode <numero>".
        """
        cache_key = f"jikan:episodes:{mal_id}:{page}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        client = self._get_client()
        response = await request_with_retry(
            client, "GET", f"/anime/{mal_id}/episodes", params={"page": page}
        )

        episodes = []
        for item in response.json().get("data") or []:
            number = to_int(item.get("mal_id"))
            if number is None:
                continue
            filler = item.get("filler")
            episodes.append(
                JikanEpisode(
                    number=number,
                    title=item.get("title") or f"Episode {number}",
                    filler=filler if isinstance(filler, bool) else None,
                )
            )

        await self._cache.set_search(cache_key, episodes)
        return episodes

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
