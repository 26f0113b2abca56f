"""
Interfaces ports de la facade publique du catalogue.

ICatalog est l'ensemble d'operations consomme par l'application hote.
IAssetStore donne acces aux collections et tendances precalculees.
"""

from abc import ABC, abstractmethod

from hachi.core.entities import Episode, FeedCollection, Show, ShowEntry, VideoAsset


class ICatalog(ABC):
    """Operations publiques d'un catalogue."""

    @abstractmethod
    async def search_shows(self, query: str) -> list[ShowEntry]:
        ...

    @abstractmethod
    async def get_show(self, show_id: str) -> Show:
        """
        Raises:
            InvalidIdentifierError: Si l'identifiant est invalide
            UpstreamFailure: Si le fournisseur principal echoue
        """
        ...

    @abstractmethod
    async def get_episodes(self, show_id: str, season_number: int) -> list[Episode]:
        ...

    @abstractmethod
    async def get_video_assets(self, media_id: str) -> list[VideoAsset]:
        """
        Raises:
            NotFoundError: Si aucun media lisible n'est trouve
            ManifestNotFoundError: Si le lecteur ne contient pas de manifeste
        """
        ...

    @abstractmethod
    async def get_feed_collections(self) -> list[FeedCollection]:
        ...

    @abstractmethod
    async def get_trending_shows(self) -> list[Show]:
        ...


class IAssetStore(ABC):
    """Stockage des assets precalcules (lecture au service, ecriture hors ligne)."""

    @abstractmethod
    def read_collections(self, name: str) -> list[FeedCollection]:
        ...

    @abstractmethod
    def read_shows(self, name: str) -> list[Show]:
        ...

    @abstractmethod
    def write_collections(self, name: str, collections: list[FeedCollection]) -> None:
        ...

    @abstractmethod
    def write_shows(self, name: str, shows: list[Show]) -> None:
        ...
