"""
Scraper des pages titre IMDb.

Les pages titre embarquent un bloc JSON-LD (schema.org Movie/TVSeries) dans
l'en-tete: image, description et note agregee.
"""

import json

from hachi.adapters.api.cache import APICache
from hachi.core.errors import NotFoundError
from hachi.core.ports.documents import IDocumentFetcher
from hachi.core.ports.providers import IIMDbProvider, IMDbShow
from hachi.utils.helpers import to_float


class IMDbScraper(IIMDbProvider):
    """Lecture du JSON-LD des pages titre IMDb."""

    def __init__(
        self,
        fetcher: IDocumentFetcher,
        cache: APICache,
        base_url: str = "https://www.imdb.com",
    ) -> None:
        self._fetcher = fetcher
        self._cache = cache
        self._base_url = base_url.rstrip("/")

    @property
    def source(self) -> str:
        return "imdb"

    async def get_show(self, imdb_id: str) -> IMDbShow:
        """
        Raises:
            NotFoundError: Si la page ne contient pas de JSON-LD
        """
        cache_key = f"imdb:show:{imdb_id}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        document = await self._fetcher.fetch(f"{self._base_url}/title/{imdb_id}/")
        payload = document.select_text("head script[type='application/ld+json']")
        if not payload:
            raise NotFoundError(f"Donnees IMDb introuvables pour {imdb_id}")

        data = json.loads(payload)
        image = data.get("image")
        rating = (data.get("aggregateRating") or {}).get("ratingValue")

        show = IMDbShow(
            image_url=image if isinstance(image, str) else None,
            description=data.get("description"),
            rating=to_float(rating),
        )
        await self._cache.set_details(cache_key, show)
        return show
