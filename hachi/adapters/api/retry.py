"""
Mecanisme de retry avec backoff exponentiel pour les fournisseurs amont.

Les sites de streaming et les API publiques (Jikan en particulier) renvoient
des 429 ou des 5xx transitoires sous charge. Ces reponses sont converties en
RetryableStatusError et relancees avec un delai croissant et du jitter.

Usage:
    @with_retry(max_attempts=5, max_wait=30)
    async def my_call():
        ...

    response = await request_with_retry(client, "GET", "/anime/1")
"""

from typing import Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

RETRYABLE_STATUS_CODES = frozenset({429, 502, 503, 504})


class RetryableStatusError(Exception):
    """
    Reponse HTTP transitoire (429 ou 5xx de passerelle).

    Attributes:
        status_code: Code HTTP recu
        retry_after: Secondes a attendre (header Retry-After), ou None
    """

    def __init__(self, status_code: int, retry_after: Optional[int] = None) -> None:
        self.status_code = status_code
        self.retry_after = retry_after
        super().__init__(f"HTTP {status_code}. Retry after: {retry_after}s")


def with_retry(max_attempts: int = 4, max_wait: int = 30):
    """
    Decorateur relancant sur RetryableStatusError.

    Args:
        max_attempts: Nombre maximum de tentatives (defaut: 4)
        max_wait: Delai maximum entre deux tentatives en secondes (defaut: 30)
    """
    return retry(
        retry=retry_if_exception_type(RetryableStatusError),
        wait=wait_random_exponential(multiplier=1, min=1, max=max_wait),
        stop=stop_after_attempt(max_attempts),
        reraise=True,
    )


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    if value and value.isdigit():
        return int(value)
    return None


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 4,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP avec retry sur les reponses transitoires.

    Les autres erreurs HTTP (404, 403, 500...) sont propagees immediatement
    via httpx.HTTPStatusError.

    Args:
        client: Client httpx async
        method: Methode HTTP
        url: URL (absolue ou relative a base_url)
        max_attempts: Nombre maximum de tentatives
        **kwargs: Arguments passes a client.request()

    Raises:
        RetryableStatusError: Si la reponse reste transitoire apres epuisement
        httpx.HTTPStatusError: Pour les autres erreurs HTTP
    """

    @with_retry(max_attempts=max_attempts)
    async def _do_request() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code in RETRYABLE_STATUS_CODES:
            raise RetryableStatusError(
                response.status_code,
                _parse_retry_after(response.headers.get("Retry-After")),
            )
        response.raise_for_status()
        return response

    return await _do_request()
