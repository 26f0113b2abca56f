"""
Taxonomie des erreurs du catalogue.

Les erreurs du fournisseur principal et de l'extraction du manifeste
interrompent l'operation en cours. Les erreurs d'enrichissement sont
recuperees localement et ne remontent jamais jusqu'a l'appelant.
"""

from typing import Optional


class CatalogError(Exception):
    """Erreur de base de toutes les operations du catalogue."""


class NotFoundError(CatalogError):
    """Ressource introuvable chez le fournisseur ou identifiant non resolvable."""


class InvalidIdentifierError(NotFoundError):
    """
    Identifiant composite impossible a convertir en ID numerique fournisseur.

    Attributes:
        identifier: Identifiant composite recu
    """

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Identifiant invalide: {identifier!r}")


class UpstreamFailure(CatalogError):
    """
    Echec du fournisseur principal, fatal pour l'operation.

    Attributes:
        source: Identifiant du fournisseur en echec
    """

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        super().__init__(f"[{source}] {message}")


class ArchiveCrawlError(UpstreamFailure):
    """
    Echec d'une page lors du parcours d'une archive.

    Attributes:
        page: Numero de la page en echec
    """

    def __init__(self, source: str, page: int, message: str) -> None:
        self.page = page
        super().__init__(source, f"page {page}: {message}")


class EnrichmentFailure(CatalogError):
    """
    Echec d'une source d'enrichissement (jamais propage a l'appelant).

    Attributes:
        source: Identifiant de la source d'enrichissement
        cause: Exception d'origine
    """

    def __init__(self, source: str, cause: Optional[BaseException] = None) -> None:
        self.source = source
        self.cause = cause
        super().__init__(f"Enrichissement {source} indisponible: {cause}")


class ManifestNotFoundError(CatalogError):
    """Le document du lecteur ne contient pas de bloc params exploitable."""


class MalformedManifestError(CatalogError):
    """Le tableau streams du lecteur n'est pas un JSON valide."""
