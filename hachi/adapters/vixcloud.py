"""
Extraction du manifeste de lecture depuis une page de lecteur Vixcloud.

La page du lecteur embarque son etat d'amorcage dans des scripts inline:

    window.video = {...};
    window.streams = [{"name": "Server1", "active": true, "url": "https://..."}];
    window.masterPlaylist = {
        params: {'token': 'abc', 'expires': '1700000000'},
        url: '...',
    };
    window.canPlayFHD = true;

Le format n'est pas documente. Le decodage se fait par expressions
regulieres sur un objet plat a un niveau, pas par un parseur JavaScript:
toute evolution du script cote lecteur peut casser l'extraction. Le tableau
streams est optionnel et retombe sur l'URL de playlist par defaut.
"""

import json
import re
from typing import Optional
from urllib.parse import parse_qs, parse_qsl, urlencode, urlsplit, urlunsplit

from loguru import logger

from hachi.core.errors import MalformedManifestError, ManifestNotFoundError
from hachi.core.ports.documents import IDocumentFetcher, IPlaylistResolver

_PARAMS_BLOCK_PATTERN = re.compile(r"params\s*:\s*\{([^}]*)\}")
_PARAM_PAIR_PATTERN = re.compile(r"'(\w+)'\s*:\s*'([^']+)'")
_STREAMS_PATTERN = re.compile(r"window\.streams\s*=\s*(\[[^\]]+\])")
_CAN_PLAY_FHD_PATTERN = re.compile(r"window\.canPlayFHD\s*=\s*true")


def _stream_id(source_url: str) -> str:
    segments = [segment for segment in urlsplit(source_url).path.split("/") if segment]
    if not segments:
        raise ManifestNotFoundError(f"ID du flux absent de l'URL: {source_url}")
    return segments[-1]


def default_playlist_url(source_url: str) -> str:
    """URL de playlist par defaut: https://<hote>/playlist/<id du flux>."""
    parts = urlsplit(source_url)
    return f"{parts.scheme or 'https'}://{parts.netloc}/playlist/{_stream_id(source_url)}"


def find_active_stream(scripts: str) -> Optional[str]:
    """
    Retourne l'URL du premier flux actif de window.streams.

    Returns:
        L'URL du flux actif, ou None si aucune affectation ou aucun flux actif

    Raises:
        MalformedManifestError: Si le tableau n'est pas un JSON valide
    """
    match = _STREAMS_PATTERN.search(scripts)
    if match is None:
        return None

    try:
        streams = json.loads(match.group(1))
    except json.JSONDecodeError as exc:
        raise MalformedManifestError(f"Tableau streams illisible: {exc}") from exc

    if not isinstance(streams, list):
        raise MalformedManifestError("window.streams n'est pas un tableau")

    for stream in streams:
        if isinstance(stream, dict) and stream.get("active") is True:
            url = stream.get("url")
            if isinstance(url, str) and url:
                return url
    return None


def _playlist_base_url(scripts: str, source_url: str) -> str:
    try:
        active_stream = find_active_stream(scripts)
    except MalformedManifestError as exc:
        logger.debug("Flux actif ignore, URL par defaut utilisee: {}", exc)
        return default_playlist_url(source_url)
    if active_stream and _is_absolute_http_url(active_stream):
        return active_stream
    if active_stream:
        logger.debug("Flux actif non absolu ignore: {}", active_stream)
    return default_playlist_url(source_url)


def _is_absolute_http_url(url: str) -> bool:
    parts = urlsplit(url)
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def _append_query(url: str, pairs: list[tuple[str, str]]) -> str:
    parts = urlsplit(url)
    query = parse_qsl(parts.query, keep_blank_values=True) + pairs
    return urlunsplit(parts._replace(query=urlencode(query)))


def extract_playlist_url(scripts: str, source_url: str) -> str:
    """
    Construit l'URL de playlist signee a partir des scripts du lecteur.

    Transformation pure: aucune requete reseau.

    Args:
        scripts: Contenu concatene des scripts inline du document
        source_url: URL de la page du lecteur

    Returns:
        URL complete, prete pour un client HLS

    Raises:
        ManifestNotFoundError: Si l'ID du flux ou le bloc params est absent
    """
    _stream_id(source_url)

    params_match = _PARAMS_BLOCK_PATTERN.search(scripts)
    if params_match is None:
        raise ManifestNotFoundError(f"Playlist introuvable dans {source_url}")

    pairs = _PARAM_PAIR_PATTERN.findall(params_match.group(1))

    source_query = parse_qs(urlsplit(source_url).query, keep_blank_values=True)
    if source_query.get("b", [None])[0] == "1":
        pairs.append(("b", "1"))
    if "canPlayFHD" in source_query or _CAN_PLAY_FHD_PATTERN.search(scripts):
        pairs.append(("h", "1"))

    return _append_query(_playlist_base_url(scripts, source_url), pairs)


class VixcloudResolver(IPlaylistResolver):
    """Telecharge la page du lecteur puis en extrait l'URL de playlist."""

    def __init__(self, fetcher: IDocumentFetcher) -> None:
        self._fetcher = fetcher

    async def resolve(self, source_url: str) -> str:
        _stream_id(source_url)
        document = await self._fetcher.fetch(source_url)
        playlist_url = extract_playlist_url(document.scripts_text(), source_url)
        logger.debug("Playlist resolue", source=source_url, playlist=playlist_url)
        return playlist_url
