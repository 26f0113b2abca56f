"""
Clients des fournisseurs amont.

Fournisseurs principaux:
- AnimeUnityClient: catalogue anime (API JSON)
- StreamingCommunityClient: catalogue films/series (API JSON + Inertia)

Sources d'enrichissement:
- JikanClient: MyAnimeList (jaquettes, notes, titres et fillers d'episodes)
- AniListClient: AniList GraphQL (bannieres, vignettes d'episodes)
- KitsuClient: Kitsu (couvertures)
- TMDBScraper: pages images de themoviedb.org (jaquettes, fonds, logos)
- IMDbScraper: JSON-LD des pages titre imdb.com
"""

from hachi.adapters.providers.anilist import AniListClient
from hachi.adapters.providers.animeunity import AnimeUnityClient
from hachi.adapters.providers.imdb import IMDbScraper
from hachi.adapters.providers.jikan import JikanClient
from hachi.adapters.providers.kitsu import KitsuClient
from hachi.adapters.providers.streamingcommunity import StreamingCommunityClient
from hachi.adapters.providers.tmdb import TMDBScraper

__all__ = [
    "AniListClient",
    "AnimeUnityClient",
    "IMDbScraper",
    "JikanClient",
    "KitsuClient",
    "StreamingCommunityClient",
    "TMDBScraper",
]
