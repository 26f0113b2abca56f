"""
Configuration du logging via loguru.

Deux sorties:
- stderr, colorée et courte, pour suivre une génération en cours sans
  gêner les tableaux Rich écrits sur stdout
- fichier JSON avec rotation: tous les niveaux, y compris les échecs
  d'enrichissement (WARNING) et les délais de crawl (DEBUG)
"""

import sys

from loguru import logger

from hachi.config import Settings

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan> | "
    "<level>{message}</level>"
)

# Les messages des fournisseurs doivent rester lisibles en ligne de commande
VERBOSE_CONSOLE_LEVEL = "DEBUG"


def configure_logging(settings: Settings, verbose: bool = False) -> None:
    """
    Remplace les handlers loguru par ceux de l'application.

    Args:
        settings: log_level, log_file, log_rotation_size et log_retention_count
        verbose: Affiche aussi les messages DEBUG sur stderr
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level=VERBOSE_CONSOLE_LEVEL if verbose else settings.log_level,
        format=CONSOLE_FORMAT,
        colorize=True,
    )

    settings.log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        settings.log_file,
        level="DEBUG",
        serialize=True,
        rotation=settings.log_rotation_size,
        retention=settings.log_retention_count,
        compression="zip",
        enqueue=True,
    )

    logger.debug(
        "Logging configuré",
        log_file=str(settings.log_file),
        console_level=VERBOSE_CONSOLE_LEVEL if verbose else settings.log_level,
    )
