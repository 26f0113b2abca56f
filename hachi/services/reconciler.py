"""
Reconciliation des champs issus de plusieurs sources.

Chaque champ logique (jaquette, fond, logo, note...) est resolu
independamment: les candidats sont ordonnes selon la precedence du champ
puis le premier candidat non vide l'emporte. Une source d'enrichissement
peut donc fournir la jaquette pendant qu'une autre fournit la note.

Les appels aux sources d'enrichissement passent par fetch_enrichment, qui
ne leve jamais: un echec devient un EnrichmentResult en erreur, journalise,
dont la valeur est None pour le reconciliateur.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, Iterable, Optional, Sequence, TypeVar

from loguru import logger

from hachi.core.errors import EnrichmentFailure
from hachi.utils.helpers import to_float

T = TypeVar("T")


class FieldPrecedence(str, Enum):
    """Ordre des candidats d'un champ."""

    PRIMARY_FIRST = "primary"
    ENRICHMENT_FIRST = "enrichment"


def is_empty(value: Any) -> bool:
    """
    Vrai pour None, chaine vide ou blanche, collection vide, flottant non fini.

    Zero et False ne sont pas vides.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, (list, tuple, dict, set, frozenset)):
        return len(value) == 0
    return False


def first_non_empty(candidates: Iterable[Optional[T]], default: Optional[T] = None) -> Optional[T]:
    """Premier candidat non vide, ou default."""
    for candidate in candidates:
        if not is_empty(candidate):
            return candidate
    return default


def reconcile(
    primary: Sequence[Optional[T]],
    enrichment: Sequence[Optional[T]],
    precedence: FieldPrecedence = FieldPrecedence.PRIMARY_FIRST,
    default: Optional[T] = None,
) -> Optional[T]:
    """
    Resout un champ a partir des candidats principaux et d'enrichissement.

    Args:
        primary: Candidats du fournisseur principal, par priorite
        enrichment: Candidats des sources d'enrichissement, par priorite
        precedence: PRIMARY_FIRST (l'enrichissement ne comble que les vides)
            ou ENRICHMENT_FIRST (l'enrichissement l'emporte des qu'il existe)
        default: Valeur si tous les candidats sont vides
    """
    if precedence == FieldPrecedence.ENRICHMENT_FIRST:
        candidates = [*enrichment, *primary]
    else:
        candidates = [*primary, *enrichment]
    return first_non_empty(candidates, default)


def normalize_rating(value: Any) -> float:
    """Note finie: nombres et chaines numeriques, 0.0 sinon."""
    rating = to_float(value)
    return rating if rating is not None else 0.0


@dataclass(frozen=True)
class EnrichmentResult(Generic[T]):
    """
    Resultat d'un appel a une source d'enrichissement.

    Attributes:
        source: Identifiant de la source
        value: Valeur obtenue, None en cas d'echec ou d'absence d'ID externe
        error: Echec rencontre, None en cas de succes
    """

    source: str
    value: Optional[T] = None
    error: Optional[EnrichmentFailure] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, default: Optional[T] = None) -> Optional[T]:
        return self.value if self.value is not None else default

    def pick(self, getter: Callable[[T], Any]) -> Any:
        """Extrait un champ de la valeur, None si la valeur est absente."""
        if self.value is None:
            return None
        return getter(self.value)


def _is_unset_numeric_id(external_id: Any) -> bool:
    # 0 vient des charges utiles "0" converties par to_int
    return isinstance(external_id, int) and not isinstance(external_id, bool) and external_id <= 0


async def fetch_enrichment(
    source: str,
    external_id: Any,
    call: Callable[[], Awaitable[T]],
) -> EnrichmentResult[T]:
    """
    Appelle une source d'enrichissement sans jamais lever.

    Args:
        source: Identifiant de la source (pour les journaux)
        external_id: ID externe porte par l'enregistrement principal;
            si vide ou entier non positif, la source n'est pas appelee
        call: Fabrique de l'appel asynchrone
    """
    if is_empty(external_id) or _is_unset_numeric_id(external_id):
        return EnrichmentResult(source=source)
    try:
        return EnrichmentResult(source=source, value=await call())
    except Exception as exc:
        failure = EnrichmentFailure(source, exc)
        logger.warning("Echec de l'enrichissement {} ({}): {}", source, external_id, exc)
        return EnrichmentResult(source=source, error=failure)
