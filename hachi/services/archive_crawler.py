"""
Parcours pagine des archives des fournisseurs.

Le crawler materialise une liste bornee a partir d'un endpoint pagine:
pages demandees une par une a partir de 1, arret a la premiere page vide
ou a l'epuisement du budget de pages, filtrage client puis troncature.
L'ordre serveur est conserve.

Un delai aleatoire (uniforme, 2 a 3 secondes par defaut) precede chaque
requete sauf la toute premiere de l'instance, y compris entre les parcours
de collections differentes: les sites amont bloquent les rafales.
"""

import asyncio
import random
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from loguru import logger

from hachi.core.errors import ArchiveCrawlError

T = TypeVar("T")

PageFetcher = Callable[[int], Awaitable[list[T]]]

DEFAULT_MAX_PAGES = 2


class ArchiveCrawler(Generic[T]):
    """
    Crawler sequentiel avec delai entre les requetes.

    Attributes:
        source: Identifiant du fournisseur (journaux et erreurs)
        requests_made: Nombre de pages demandees depuis la creation
    """

    def __init__(
        self,
        source: str,
        delay_range: tuple[float, float] = (2.0, 3.0),
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        uniform: Callable[[float, float], float] = random.uniform,
    ) -> None:
        low, high = delay_range
        if low < 0 or high < low:
            raise ValueError(f"Bornes de delai invalides: {delay_range}")
        self.source = source
        self.requests_made = 0
        self._delay_range = delay_range
        self._sleep = sleep
        self._uniform = uniform

    async def _wait_before_request(self) -> None:
        if self.requests_made == 0:
            return
        delay = self._uniform(*self._delay_range)
        logger.debug("Attente de {:.2f} secondes...", delay)
        await self._sleep(delay)

    async def crawl(
        self,
        fetch_page: PageFetcher,
        max_pages: int = DEFAULT_MAX_PAGES,
        max_items: Optional[int] = None,
        post_filter: Optional[Callable[[T], bool]] = None,
    ) -> list[T]:
        """
        Parcourt les pages 1..max_pages et concatene les resultats.

        Args:
            fetch_page: Recupere une page (1-indexee) de l'archive
            max_pages: Budget de pages (entier positif)
            max_items: Nombre maximum d'elements retournes
            post_filter: Filtre applique cote client apres concatenation

        Raises:
            ValueError: Si max_pages ou max_items est invalide
            ArchiveCrawlError: Si une page echoue (aucun resultat partiel)
        """
        if max_pages < 1:
            raise ValueError(f"Budget de pages invalide: {max_pages}")
        if max_items is not None and max_items < 0:
            raise ValueError(f"Nombre maximum d'elements invalide: {max_items}")

        items: list[T] = []
        for page in range(1, max_pages + 1):
            await self._wait_before_request()
            self.requests_made += 1
            try:
                results = await fetch_page(page)
            except Exception as exc:
                raise ArchiveCrawlError(self.source, page, str(exc)) from exc

            logger.debug("Page {} de {}: {} resultats", page, self.source, len(results))
            if not results:
                break
            items.extend(results)

        if post_filter is not None:
            items = [item for item in items if post_filter(item)]
        if max_items is not None:
            items = items[:max_items]
        return items
