"""
Utilitaires partages pour les commandes CLI de Hachi.

Ce module fournit :
- console : instance Rich Console partagee
- CatalogName : choix du catalogue (anime, streaming)
- with_container : decorateur injectant un container et fermant ses clients
"""

from enum import Enum
from functools import wraps

from rich.console import Console

from hachi.container import Container
from hachi.core.ports.catalog import ICatalog

console = Console()


class CatalogName(str, Enum):
    """Catalogue cible d'une commande."""

    ANIME = "anime"
    STREAMING = "streaming"


def get_catalog(container: Container, name: CatalogName) -> ICatalog:
    if name == CatalogName.ANIME:
        return container.anime_catalog()
    return container.streaming_catalog()


async def close_clients(container: Container) -> None:
    """Ferme les clients HTTP et le cache du container."""
    for client in (
        container.animeunity_client(),
        container.streamingcommunity_client(),
        container.jikan_client(),
        container.anilist_client(),
        container.kitsu_client(),
        container.html_fetcher(),
    ):
        await client.close()
    container.api_cache().close()


def with_container():
    """
    Decorateur qui injecte un container en premier argument.

    Les clients HTTP sont fermes a la fin de la commande, meme en cas d'erreur.

    Usage:
        @with_container()
        async def my_command(container, ...):
            catalog = container.anime_catalog()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            try:
                return await func(container, *args, **kwargs)
            finally:
                await close_clients(container)
        return wrapper
    return decorator

