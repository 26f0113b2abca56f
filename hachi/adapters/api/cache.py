"""
Cache persistant des reponses des sources d'enrichissement.

Les sources d'enrichissement (Jikan, AniList, Kitsu, TMDB, IMDb) sont
lentes et limitees en debit; leurs reponses normalisees sont conservees
sur disque via diskcache.

TTL par defaut:
- Listes (SEARCH_TTL): 24 heures - listes d'episodes, images
- Details (DETAILS_TTL): 7 jours - illustrations et notes d'une fiche
"""

import asyncio
from functools import partial
from pathlib import Path
from typing import Any, Optional, Union

from diskcache import Cache


class APICache:
    """
    Cache asynchrone avec TTL.

    Les operations diskcache sont bloquantes et executees dans l'executor
    par defaut de la boucle.

    Example:
        cache = APICache(cache_dir=".cache/hachi")
        await cache.set_details("jikan:show:21", show)
        show = await cache.get("jikan:show:21")
    """

    SEARCH_TTL = 24 * 60 * 60
    DETAILS_TTL = 7 * 24 * 60 * 60

    def __init__(self, cache_dir: Union[str, Path] = ".cache/hachi") -> None:
        self._cache = Cache(cache_dir)

    async def get(self, key: str) -> Optional[Any]:
        """Retourne la valeur stockee, ou None si absente ou expiree."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.get, key)

    async def set(self, key: str, value: Any, ttl: int) -> None:
        """Stocke une valeur (picklable) pour ttl secondes."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None, partial(self._cache.set, key, value, expire=ttl)
        )

    async def set_search(self, key: str, value: Any) -> None:
        """Stocke une liste (TTL de 24h)."""
        await self.set(key, value, self.SEARCH_TTL)

    async def set_details(self, key: str, value: Any) -> None:
        """Stocke une fiche (TTL de 7 jours)."""
        await self.set(key, value, self.DETAILS_TTL)

    async def clear(self) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._cache.clear)

    def close(self) -> None:
        self._cache.close()
