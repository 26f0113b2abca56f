"""
Briques communes aux facades des catalogues.

- call_primary : appel au fournisseur principal, echec converti en UpstreamFailure
- resolve_video_url : resolution de la page du lecteur en URL de playlist
- build_video_headers : headers requis pour lire un VideoAsset
"""

from typing import Awaitable, Optional, TypeVar
from urllib.parse import urlsplit

import httpx

from hachi.adapters.api.retry import RetryableStatusError
from hachi.core.errors import CatalogError, UpstreamFailure
from hachi.core.ports.documents import IPlaylistResolver

T = TypeVar("T")

_DIRECT_MEDIA_EXTENSIONS = (".m3u8", ".mp4", ".mkv", ".webm")


async def call_primary(source: str, call: Awaitable[T]) -> T:
    """
    Attend un appel au fournisseur principal.

    Les erreurs du domaine (NotFoundError...) sont propagees telles quelles;
    les erreurs de transport et de decodage deviennent UpstreamFailure.
    """
    try:
        return await call
    except CatalogError:
        raise
    except (httpx.HTTPError, RetryableStatusError, ValueError, KeyError) as exc:
        raise UpstreamFailure(source, str(exc) or type(exc).__name__) from exc


def is_direct_media_url(url: str) -> bool:
    """Vrai si l'URL designe deja un flux lisible (pas une page de lecteur)."""
    return urlsplit(url).path.lower().endswith(_DIRECT_MEDIA_EXTENSIONS)


async def resolve_video_url(resolver: IPlaylistResolver, video_url: str) -> str:
    """
    URL lisible pour une URL video brute.

    Raises:
        ManifestNotFoundError: Si la page du lecteur ne contient pas de manifeste
        UpstreamFailure: Si la page du lecteur ne peut pas etre telechargee
    """
    if is_direct_media_url(video_url):
        return video_url
    return await call_primary("vixcloud", resolver.resolve(video_url))


def build_video_headers(referer: str, user_agent: Optional[str] = None) -> dict[str, str]:
    headers = {"Referer": referer}
    if user_agent:
        headers["User-Agent"] = user_agent
    return headers
