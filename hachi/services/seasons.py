"""
Partition d'un index d'episodes plat en saisons de taille fixe.

Aucun fournisseur anime ne stocke de saisons: la saison i (0-indexee)
couvre les episodes [i*taille+1, min((i+1)*taille, total)]. Le meme calcul
sert a l'affichage et au decalage de recuperation des episodes.
"""

from hachi.core.entities import Season
from hachi.utils.constants import EPISODES_PER_SEASON


def partition_seasons(total: int, size: int = EPISODES_PER_SEASON) -> list[Season]:
    """
    Saisons derivees du nombre total d'episodes.

    Args:
        total: Nombre total d'episodes (>= 0)
        size: Nombre d'episodes par saison (> 0)

    Returns:
        ceil(total/size) saisons nommees "<debut>-<fin>"; liste vide si total = 0

    Raises:
        ValueError: Si total < 0 ou size <= 0
    """
    if size <= 0:
        raise ValueError(f"Taille de saison invalide: {size}")
    if total < 0:
        raise ValueError(f"Nombre d'episodes invalide: {total}")

    count = -(-total // size)
    seasons = []
    for number in range(count):
        start = number * size + 1
        end = min((number + 1) * size, total)
        seasons.append(Season(number=number, name=f"{start}-{end}"))
    return seasons


def season_offset(season_number: int, size: int = EPISODES_PER_SEASON) -> tuple[int, int]:
    """
    Premier episode (1-indexe) et nombre d'episodes a demander pour une saison.

    Raises:
        ValueError: Si season_number < 0 ou size <= 0
    """
    if size <= 0:
        raise ValueError(f"Taille de saison invalide: {size}")
    if season_number < 0:
        raise ValueError(f"Numero de saison invalide: {season_number}")
    return season_number * size + 1, size
