"""
Objets valeur du domaine.

Exports :
- format_show_id / parse_show_id : identifiant composite d'une serie
- format_episode_id / parse_episode_id : identifiant composite d'un episode
- EpisodeIdStyle : forme de l'identifiant d'episode selon le catalogue
"""

from hachi.core.value_objects.identifiers import (
    EpisodeIdStyle,
    format_episode_id,
    format_show_id,
    parse_episode_id,
    parse_show_id,
)

__all__ = [
    "EpisodeIdStyle",
    "format_episode_id",
    "format_show_id",
    "parse_episode_id",
    "parse_show_id",
]
