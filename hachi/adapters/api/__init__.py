"""
Infrastructure HTTP partagee par les clients des fournisseurs.

- APICache: Cache persistant avec TTL differencies (recherche 24h, details 7j)
- RetryableStatusError: Exception pour les erreurs 429 et 5xx transitoires
- with_retry: Decorateur avec backoff exponentiel
- request_with_retry: Requete httpx avec retry automatique
"""

from hachi.adapters.api.cache import APICache
from hachi.adapters.api.retry import RetryableStatusError, request_with_retry, with_retry

__all__ = [
    "APICache",
    "RetryableStatusError",
    "request_with_retry",
    "with_retry",
]
