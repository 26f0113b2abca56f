"""
Client Kitsu (API JSON:API).

Kitsu est interroge par ID MyAnimeList via ses mappings pour recuperer
l'image de couverture originale.
"""

from typing import Optional

import httpx

from hachi.adapters.api.cache import APICache
from hachi.adapters.api.retry import request_with_retry
from hachi.core.errors import NotFoundError
from hachi.core.ports.providers import IKitsuProvider, KitsuShow


class KitsuClient(IKitsuProvider):
    """Client Kitsu avec cache-first."""

    def __init__(
        self,
        cache: APICache,
        base_url: str = "https://kitsu.io/api/edge",
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
                headers={"Accept": "application/vnd.api+json"},
                timeout=self._timeout,
            )
        return self._client

    @property
    def source(self) -> str:
        return "kitsu"

    async def get_show_by_mal_id(self, mal_id: int) -> KitsuShow:
        cache_key = f"kitsu:mal:{mal_id}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        client = self._get_client()
        response = await request_with_retry(
            client,
            "GET",
            "/mappings",
            params={
                "filter[externalSite]": "myanimelist/anime",
                "filter[externalId]": str(mal_id),
                "include": "item",
            },
        )
        included = response.json().get("included") or []
        anime = next((item for item in included if item.get("type") == "anime"), None)
        if anime is None:
            raise NotFoundError(f"Aucun anime Kitsu pour MAL {mal_id}")

        cover_image = (anime.get("attributes") or {}).get("coverImage") or {}
        show = KitsuShow(cover_url=cover_image.get("original"))
        await self._cache.set_details(cache_key, show)
        return show

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
