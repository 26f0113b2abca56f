"""
Utilitaires et constantes pour Hachi.

Ce module contient les constantes et fonctions utilitaires partagees.
"""

from hachi.utils.constants import (
    ANIME_SEASON_MONTHS,
    EPISODES_PER_SEASON,
    SC_GENRES,
)

__all__ = [
    "ANIME_SEASON_MONTHS",
    "EPISODES_PER_SEASON",
    "SC_GENRES",
]
