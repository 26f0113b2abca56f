"""
Scraper des pages images de themoviedb.org.

TMDB fournit des illustrations plus riches que le fournisseur principal:
jaquette et fond (balises og:image) et logo PNG (liste des logos). Les
pages sont lues dans la langue du catalogue puis, pour les illustrations
manquantes, dans la langue de repli.

Les URLs sont reecrites vers image.tmdb.org et vers une resolution fixe
par type d'image.
"""

from urllib.parse import urljoin, urlsplit, urlunsplit

from hachi.adapters.api.cache import APICache
from hachi.core.ports.documents import IDocumentFetcher
from hachi.core.ports.providers import ITMDBProvider, TMDBShow
from hachi.utils.constants import (
    TMDB_BACKDROP_RESOLUTION,
    TMDB_LOGO_RESOLUTION,
    TMDB_POSTER_RESOLUTION,
)

_MEDIA_HOST = "https://media.themoviedb.org"
_IMAGE_HOST = "https://image.tmdb.org"
_TMDB_REFERER = "https://google.com"

_IMAGE_RESOLUTIONS = {
    "posters": TMDB_POSTER_RESOLUTION,
    "logos": TMDB_LOGO_RESOLUTION,
}


def sanitize_image_url(url: str) -> str:
    """Remplace l'hote media.themoviedb.org par image.tmdb.org."""
    if url.startswith(_MEDIA_HOST):
        return _IMAGE_HOST + url[len(_MEDIA_HOST):]
    return url


def update_resolution(url: str, resolution: str) -> str:
    """
    Remplace le segment de resolution (avant-dernier segment du chemin).

    Les URLs sans au moins deux segments sont retournees telles quelles.
    """
    parts = urlsplit(url)
    segments = [segment for segment in parts.path.split("/") if segment]
    if len(segments) < 2 or segments[-2] == resolution:
        return url
    segments[-2] = resolution
    return urlunsplit(parts._replace(path="/" + "/".join(segments)))


class TMDBScraper(ITMDBProvider):
    """
    Extraction des illustrations TMDB via le fetcher de documents HTML.

    Attributes:
        PRIMARY_LANGUAGE: Langue du catalogue
        FALLBACK_LANGUAGE: Langue utilisee pour les illustrations manquantes
    """

    PRIMARY_LANGUAGE = "it"
    FALLBACK_LANGUAGE = "en"

    def __init__(
        self,
        fetcher: IDocumentFetcher,
        cache: APICache,
        base_url: str = "https://www.themoviedb.org",
    ) -> None:
        self._fetcher = fetcher
        self._cache = cache
        self._base_url = base_url.rstrip("/")

    @property
    def source(self) -> str:
        return "tmdb"

    async def _extract_show(self, kind: str, tmdb_id: int, language: str) -> TMDBShow:
        url = (
            f"{self._base_url}/{kind}/{tmdb_id}/images/logos"
            f"?language={language}&image_language={language}"
        )
        document = await self._fetcher.fetch(url, referer=_TMDB_REFERER)

        og_images = document.select_all_attr("head meta[property='og:image']", "content")
        logo = document.select_attr("ul.images.logos li a.image[href$='.png' i]", "href")

        return TMDBShow(
            title=document.select_attr("head meta[property='og:title']", "content") or "",
            description=document.select_attr(
                "head meta[property='og:description']", "content"
            )
            or "",
            poster_url=sanitize_image_url(og_images[0]) if len(og_images) > 0 else None,
            backdrop_url=sanitize_image_url(og_images[1]) if len(og_images) > 1 else None,
            logo_url=urljoin(self._base_url + "/", logo) if logo else None,
        )

    async def get_show(self, kind: str, tmdb_id: int) -> TMDBShow:
        cache_key = f"tmdb:show:{kind}:{tmdb_id}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        primary = await self._extract_show(kind, tmdb_id, self.PRIMARY_LANGUAGE)
        poster, backdrop, logo = primary.poster_url, primary.backdrop_url, primary.logo_url

        if not (poster and backdrop and logo):
            fallback = await self._extract_show(kind, tmdb_id, self.FALLBACK_LANGUAGE)
            poster = poster or fallback.poster_url
            backdrop = backdrop or fallback.backdrop_url
            logo = logo or fallback.logo_url

        show = TMDBShow(
            title=primary.title,
            description=primary.description,
            poster_url=update_resolution(poster, TMDB_POSTER_RESOLUTION) if poster else None,
            backdrop_url=(
                update_resolution(backdrop, TMDB_BACKDROP_RESOLUTION) if backdrop else None
            ),
            logo_url=update_resolution(logo, TMDB_LOGO_RESOLUTION) if logo else None,
        )
        await self._cache.set_details(cache_key, show)
        return show

    async def get_images(
        self, kind: str, tmdb_id: int, image_type: str, language: str
    ) -> list[str]:
        """
        Liste les images d'un type ("posters" ou "logos") dans une langue.

        Les images SVG sont ignorees. La langue "xx" designe les images sans texte.
        """
        cache_key = f"tmdb:images:{kind}:{tmdb_id}:{image_type}:{language}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        url = (
            f"{self._base_url}/{kind}/{tmdb_id}/images/{image_type}"
            f"?image_language={language}"
        )
        document = await self._fetcher.fetch(url, referer=_TMDB_REFERER)
        resolution = _IMAGE_RESOLUTIONS.get(image_type, TMDB_POSTER_RESOLUTION)

        images = [
            update_resolution(urljoin(self._base_url + "/", href), resolution)
            for href in document.select_all_attr("ul.images li div.image_content a", "href")
            if not href.endswith(".svg")
        ]
        await self._cache.set_search(cache_key, images)
        return images
