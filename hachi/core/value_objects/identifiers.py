"""
Identifiants composites.

Un identifiant de serie combine l'ID numerique du fournisseur et un slug
lisible: "42-my-show". Les identifiants d'episode ajoutent l'ID episode du
fournisseur, sous forme de chemin ("42-my-show/1234") ou de parametre
("42-my-show?episode_id=1234") selon le catalogue.
"""

import re
from enum import Enum
from typing import Optional

from hachi.core.errors import InvalidIdentifierError

_SHOW_ID_PATTERN = re.compile(r"^(\d+)(?:-|$)")
_QUERY_EPISODE_PATTERN = re.compile(r"^(?P<show>[^?]+)\?episode_id=(?P<episode>\d+)$")


class EpisodeIdStyle(str, Enum):
    """Forme de l'identifiant d'episode."""

    PATH = "path"
    QUERY = "query"


def format_show_id(provider_id: int, slug: str) -> str:
    """Construit l'identifiant composite d'une serie."""
    if slug:
        return f"{provider_id}-{slug}"
    return str(provider_id)


def parse_show_id(composite_id: str) -> int:
    """
    Extrait l'ID numerique fournisseur d'un identifiant composite.

    Accepte aussi un identifiant d'episode: seule la partie serie est lue.

    Raises:
        InvalidIdentifierError: Si l'identifiant ne commence pas par un entier positif
    """
    show_part = composite_id.split("/", 1)[0].split("?", 1)[0]
    match = _SHOW_ID_PATTERN.match(show_part.strip())
    if match is None:
        raise InvalidIdentifierError(composite_id)
    provider_id = int(match.group(1))
    if provider_id <= 0:
        raise InvalidIdentifierError(composite_id)
    return provider_id


def format_episode_id(
    show_id: str, episode_id: int, style: EpisodeIdStyle = EpisodeIdStyle.PATH
) -> str:
    """Construit l'identifiant composite d'un episode."""
    if style == EpisodeIdStyle.QUERY:
        return f"{show_id}?episode_id={episode_id}"
    return f"{show_id}/{episode_id}"


def parse_episode_id(composite_id: str) -> tuple[str, Optional[int]]:
    """
    Decoupe un identifiant en (identifiant serie, ID episode).

    L'ID episode vaut None quand l'identifiant designe une serie entiere.

    Raises:
        InvalidIdentifierError: Si la partie serie ou la partie episode est invalide
    """
    query_match = _QUERY_EPISODE_PATTERN.match(composite_id)
    if query_match:
        show_id = query_match.group("show")
        parse_show_id(show_id)
        return show_id, int(query_match.group("episode"))

    if "?" in composite_id:
        raise InvalidIdentifierError(composite_id)

    show_id, _, episode_part = composite_id.partition("/")
    parse_show_id(show_id)
    if not episode_part:
        return show_id, None
    if not episode_part.isdigit():
        raise InvalidIdentifierError(composite_id)
    return show_id, int(episode_part)
