"""
Interfaces ports pour la recuperation de documents HTML.

Le fetcher retourne un document interrogeable par selecteurs CSS; le
resolveur de playlist transforme l'URL d'une page de lecteur embarque en
URL de manifeste.
"""

from abc import ABC, abstractmethod
from typing import Optional


class IParsedDocument(ABC):
    """Document HTML interrogeable par selecteurs CSS."""

    @property
    @abstractmethod
    def url(self) -> str:
        """URL finale du document."""
        ...

    @abstractmethod
    def select_text(self, selector: str) -> Optional[str]:
        """Texte du premier element correspondant, ou None."""
        ...

    @abstractmethod
    def select_attr(self, selector: str, attribute: str) -> Optional[str]:
        """Attribut du premier element correspondant, ou None."""
        ...

    @abstractmethod
    def select_all_attr(self, selector: str, attribute: str) -> list[str]:
        """Attribut de tous les elements correspondants (valeurs absentes ignorees)."""
        ...

    @abstractmethod
    def scripts_text(self) -> str:
        """Contenu concatene de toutes les balises script."""
        ...


class IDocumentFetcher(ABC):
    """Recuperation d'un document HTML."""

    @abstractmethod
    async def fetch(self, url: str, referer: Optional[str] = None) -> IParsedDocument:
        """
        Telecharge et parse un document HTML.

        Raises:
            httpx.HTTPStatusError: Sur une reponse non-2xx
            httpx.TransportError: Sur une erreur reseau
        """
        ...


class IPlaylistResolver(ABC):
    """Resolution d'une page de lecteur embarque en URL de playlist."""

    @abstractmethod
    async def resolve(self, source_url: str) -> str:
        """
        Raises:
            ManifestNotFoundError: Si le document ne contient pas de manifeste
        """
        ...
