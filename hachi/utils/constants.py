"""
Constantes globales pour Hachi.

Ce module contient:
- Taille des saisons derivees du catalogue anime
- Mois de debut des saisons de diffusion AnimeUnity
- Correspondance des statuts fournisseurs vers ShowStatus
- IDs de genres de l'archive StreamingCommunity
- Resolutions d'images TMDB
"""

from hachi.core.entities import ShowStatus

# Nombre d'episodes par saison derivee (catalogue anime)
EPISODES_PER_SEASON = 100

# Mois (1-12) de debut de chaque saison de diffusion AnimeUnity
ANIME_SEASON_MONTHS = {
    "Inverno": 1,
    "Primavera": 4,
    "Estate": 7,
    "Autunno": 10,
}

# Statuts AnimeUnity (en minuscules)
ANIME_STATUS_MAPPING = {
    "in corso": ShowStatus.AIRING,
    "terminato": ShowStatus.ENDED,
    "in uscita": ShowStatus.UPCOMING,
    "droppato": ShowStatus.CANCELED,
}

# Statuts TMDB relayes par StreamingCommunity (en minuscules)
TITLE_STATUS_MAPPING = {
    "in production": ShowStatus.UPCOMING,
    "post production": ShowStatus.UPCOMING,
    "planned": ShowStatus.UPCOMING,
    "pilot": ShowStatus.UPCOMING,
    "rumored": ShowStatus.UPCOMING,
    "announced": ShowStatus.UPCOMING,
    "returning series": ShowStatus.AIRING,
    "canceled": ShowStatus.CANCELED,
    "released": ShowStatus.ENDED,
    "ended": ShowStatus.ENDED,
}

# IDs des genres de l'archive StreamingCommunity
SC_GENRES = {
    "action": 4,
    "action_adventure": 13,
    "animation": 19,
    "comedy": 12,
    "crime": 2,
    "documentary": 10,
    "drama": 1,
    "family": 11,
    "fantasy": 9,
    "horror": 16,
    "korean_drama": 26,
    "musical": 22,
    "mystery": 6,
    "romantic": 7,
    "science_fiction": 15,
    "thriller": 5,
    "war": 24,
}

# Resolutions des images TMDB (segment de chemin)
TMDB_POSTER_RESOLUTION = "w780"
TMDB_BACKDROP_RESOLUTION = "w1280"
TMDB_LOGO_RESOLUTION = "w500"
