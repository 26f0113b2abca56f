"""
Facades publiques des catalogues.

- AnimeCatalog: AnimeUnity enrichi par Jikan, AniList et Kitsu
- StreamingCatalog: StreamingCommunity enrichi par TMDB et IMDb
"""

from hachi.services.catalogs.anime import AnimeCatalog
from hachi.services.catalogs.streaming import StreamingCatalog

__all__ = ["AnimeCatalog", "StreamingCatalog"]
