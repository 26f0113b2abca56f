"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le
préfixe HACHI_, et peut optionnellement être fournie via un fichier .env.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hachi.services.reconciler import FieldPrecedence

# Trouver le fichier .env à la racine du projet (parent de hachi/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe HACHI_.
    Exemple : HACHI_ARTWORK_PRECEDENCE=primary

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="HACHI_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # User-Agent de l'application hôte, propagé aux requêtes et aux VideoAsset
    user_agent: Optional[str] = Field(default=None)
    http_timeout: float = Field(default=30.0, gt=0)

    # URLs des fournisseurs
    animeunity_url: str = Field(default="https://www.animeunity.so")
    streamingcommunity_url: str = Field(default="https://streamingunity.to")
    jikan_url: str = Field(default="https://api.jikan.moe/v4")
    anilist_url: str = Field(default="https://graphql.anilist.co")
    kitsu_url: str = Field(default="https://kitsu.io/api/edge")
    tmdb_url: str = Field(default="https://www.themoviedb.org")
    imdb_url: str = Field(default="https://www.imdb.com")

    # Réconciliation
    artwork_precedence: FieldPrecedence = Field(default=FieldPrecedence.ENRICHMENT_FIRST)
    # Note MAL prioritaire pour les anime, note du fournisseur pour les films/series
    anime_rating_precedence: FieldPrecedence = Field(
        default=FieldPrecedence.ENRICHMENT_FIRST
    )
    streaming_rating_precedence: FieldPrecedence = Field(
        default=FieldPrecedence.PRIMARY_FIRST
    )
    episodes_per_season: int = Field(default=100, ge=1)

    # Parcours des archives (délai aléatoire entre deux requêtes)
    crawl_delay_min: float = Field(default=2.0, ge=0)
    crawl_delay_max: float = Field(default=3.0, ge=0)

    # Assets et cache
    assets_dir: Path = Field(default=Path("assets"))
    cache_dir: Path = Field(default=Path("~/.cache/hachi"))

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/hachi.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("assets_dir", "cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @model_validator(mode="after")
    def check_crawl_delay(self) -> "Settings":
        """Vérifie que les bornes du délai de parcours sont ordonnées."""
        if self.crawl_delay_min > self.crawl_delay_max:
            raise ValueError("crawl_delay_min doit être inférieur ou égal à crawl_delay_max")
        return self

    @property
    def crawl_delay_range(self) -> tuple[float, float]:
        return (self.crawl_delay_min, self.crawl_delay_max)
