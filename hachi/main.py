"""
Point d'entrée CLI de Hachi.

Configure le logging et monte les commandes de consultation et de
génération des catalogues.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.catalog_commands import episodes, feed, search, show, trending, videos
from .adapters.cli.feed_commands import generate_collections, generate_trending
from .config import Settings
from .container import Container
from .logging_config import configure_logging

app = typer.Typer(
    name="hachi",
    help="Agrégateur de métadonnées pour catalogues anime et films/séries",
)
container = Container()


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Affiche les messages DEBUG sur stderr"),
    ] = False,
) -> None:
    """Hachi - Agrégateur de métadonnées pour catalogues anime et films/séries."""
    configure_logging(container.config(), verbose=verbose)
    logger.info("Démarrage de Hachi", version=__version__)


# Commandes de consultation
app.command()(search)
app.command()(show)
app.command()(episodes)
app.command()(videos)
app.command()(feed)
app.command()(trending)

# Commandes de génération hors ligne
app.command(name="generate-collections")(generate_collections)
app.command(name="generate-trending")(generate_trending)


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration Hachi")
    typer.echo(f"AnimeUnity : {config.animeunity_url}")
    typer.echo(f"StreamingCommunity : {config.streamingcommunity_url}")
    typer.echo(f"Assets : {config.assets_dir}")
    typer.echo(f"Cache : {config.cache_dir}")
    typer.echo(f"Épisodes par saison : {config.episodes_per_season}")
    typer.echo(
        f"Délai de parcours : {config.crawl_delay_min}-{config.crawl_delay_max} s"
    )
    typer.echo(f"Précédence illustrations : {config.artwork_precedence.value}")
    typer.echo(f"Précédence notes anime : {config.anime_rating_precedence.value}")
    typer.echo(
        f"Précédence notes films/séries : {config.streaming_rating_precedence.value}"
    )
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"Hachi v{__version__}")


def main() -> None:
    """Point d'entrée de l'application."""
    app()


if __name__ == "__main__":
    main()
