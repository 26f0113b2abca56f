"""
Interfaces ports pour les fournisseurs de metadonnees.

Chaque fournisseur amont a son adaptateur qui normalise la forme brute de
ses reponses en un des enregistrements ci-dessous. Aucun JSON brut ne
franchit la frontiere de l'adaptateur.

Fournisseurs principaux (proprietaires des identifiants canoniques) :
- AnimeUnity pour le catalogue anime
- StreamingCommunity pour le catalogue films/series

Fournisseurs d'enrichissement :
- Jikan (MyAnimeList), AniList, Kitsu pour les anime
- TMDB, IMDb pour les films/series
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Union

Score = Union[str, float, int, None]


# ---------------------------------------------------------------------------
# AnimeUnity
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AnimeRecord:
    """
    Anime normalise depuis AnimeUnity.

    Attributs :
        id : ID AnimeUnity
        slug : Slug lisible
        title : Titre (peut contenir le marqueur "(ITA)")
        type : Type brut ("TV", "Movie", "OVA", ...)
        poster_url : URL de la jaquette
        cover_url : URL de la banniere
        plot : Synopsis
        score : Note brute (chaine ou nombre)
        year : Annee de diffusion
        season : Saison de diffusion ("Inverno", "Primavera", "Estate", "Autunno")
        status : Statut brut ("In Corso", "Terminato", ...)
        genres : Noms des genres
        episodes_count : Nombre total d'episodes
        episodes_length : Duree d'un episode en minutes
        dubbed : Version doublee
        mal_id : ID MyAnimeList pour l'enrichissement
        anilist_id : ID AniList pour l'enrichissement
        related : Anime de la meme franchise
        suggested : Anime suggeres
    """

    id: int
    slug: str
    title: str
    type: str = "TV"
    poster_url: Optional[str] = None
    cover_url: Optional[str] = None
    plot: Optional[str] = None
    score: Score = None
    year: Optional[int] = None
    season: Optional[str] = None
    status: Optional[str] = None
    genres: tuple[str, ...] = ()
    episodes_count: int = 0
    episodes_length: int = 0
    dubbed: bool = False
    mal_id: Optional[int] = None
    anilist_id: Optional[int] = None
    related: tuple["AnimeRecord", ...] = ()
    suggested: tuple["AnimeRecord", ...] = ()


@dataclass(frozen=True)
class AnimeEpisodeRecord:
    """Episode AnimeUnity: ID media et numero brut ("12" ou "135-136")."""

    id: int
    number: str


@dataclass(frozen=True)
class AnimeArchiveQuery:
    """
    Filtres de l'archive AnimeUnity.

    Attributs :
        order_by : Tri serveur ("views" ou "popularity")
        type : Type d'anime ("TV", "Movie", ...)
        dubbed : Filtre doublage applique cote client (None = pas de filtre)
    """

    order_by: Optional[str] = None
    type: Optional[str] = None
    dubbed: Optional[bool] = None


# ---------------------------------------------------------------------------
# Enrichissement anime
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class JikanShow:
    """Anime MyAnimeList: jaquette grand format et note."""

    poster_url: Optional[str] = None
    score: Optional[float] = None


@dataclass(frozen=True)
class JikanEpisode:
    """Episode MyAnimeList: numero, titre et indicateur filler."""

    number: int
    title: Optional[str] = None
    filler: Optional[bool] = None


@dataclass(frozen=True)
class AniListShow:
    """Anime AniList: banniere et jaquette sans texte."""

    banner_url: Optional[str] = None
    cover_url: Optional[str] = None


@dataclass(frozen=True)
class AniListEpisode:
    """Episode AniList: numero et vignette."""

    number: int
    thumbnail_url: Optional[str] = None


@dataclass(frozen=True)
class KitsuShow:
    """Anime Kitsu: image de couverture originale."""

    cover_url: Optional[str] = None


# ---------------------------------------------------------------------------
# StreamingCommunity
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ImageRecord:
    """Image d'un titre: type ("poster", "background", "logo", ...) et URL."""

    type: str
    url: str


@dataclass(frozen=True)
class TranslationRecord:
    """Traduction d'un champ d'un titre."""

    key: str
    value: str
    locale: str


@dataclass(frozen=True)
class TitleSeasonRecord:
    """Saison telle que fournie par StreamingCommunity."""

    number: int
    name: Optional[str] = None


@dataclass(frozen=True)
class TitleRecord:
    """
    Titre normalise depuis StreamingCommunity.

    Attributs :
        id : ID StreamingCommunity
        slug : Slug lisible
        name : Titre
        type : "movie" ou "tv"
        plot : Synopsis
        score : Note brute
        runtime : Duree en minutes
        release_date : Date de sortie (YYYY-MM-DD)
        last_air_date : Date de derniere diffusion
        status : Statut brut TMDB ("Returning Series", "Ended", ...)
        genres : Noms des genres
        images : Images par type
        translations : Traductions des champs
        seasons : Saisons du fournisseur
        related : Titres associes
        tmdb_id : ID TMDB pour l'enrichissement
        imdb_id : ID IMDb pour l'enrichissement
    """

    id: int
    slug: str
    name: str
    type: str = "movie"
    plot: Optional[str] = None
    score: Score = None
    runtime: Optional[int] = None
    release_date: Optional[str] = None
    last_air_date: Optional[str] = None
    status: Optional[str] = None
    genres: tuple[str, ...] = ()
    images: tuple[ImageRecord, ...] = ()
    translations: tuple[TranslationRecord, ...] = ()
    seasons: tuple[TitleSeasonRecord, ...] = ()
    related: tuple["TitleRecord", ...] = ()
    tmdb_id: Optional[int] = None
    imdb_id: Optional[str] = None


@dataclass(frozen=True)
class TitleEpisodeRecord:
    """Episode StreamingCommunity (duree en minutes)."""

    id: int
    number: int
    name: Optional[str] = None
    plot: Optional[str] = None
    duration: Optional[int] = None
    images: tuple[ImageRecord, ...] = ()


@dataclass(frozen=True)
class TitleArchiveQuery:
    """
    Filtres de l'archive StreamingCommunity.

    Attributs :
        type : "movie" ou "tv"
        genres : IDs de genres
        year : Annee (ou decennie) de sortie
        service : Service de distribution ("netflix", "disney", ...)
        minimum_views : Seuil de vues ("75k", "1M", ...)
        sorting : Tri serveur ("score", "last_air_date", ...)
    """

    type: Optional[str] = None
    genres: tuple[int, ...] = ()
    year: Optional[int] = None
    service: Optional[str] = None
    minimum_views: Optional[str] = None
    sorting: str = "score"


# ---------------------------------------------------------------------------
# Enrichissement films/series
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TMDBShow:
    """Illustrations TMDB extraites de la page images d'un titre."""

    title: str = ""
    description: str = ""
    poster_url: Optional[str] = None
    backdrop_url: Optional[str] = None
    logo_url: Optional[str] = None


@dataclass(frozen=True)
class IMDbShow:
    """Donnees JSON-LD d'une page titre IMDb."""

    image_url: Optional[str] = None
    description: Optional[str] = None
    rating: Optional[float] = None


# ---------------------------------------------------------------------------
# Interfaces
# ---------------------------------------------------------------------------


class IAnimeProvider(ABC):
    """Fournisseur principal du catalogue anime."""

    @property
    @abstractmethod
    def source(self) -> str:
        """Identifiant de la source (ex: 'animeunity')."""
        ...

    @abstractmethod
    async def search(self, query: str) -> list[AnimeRecord]:
        """Recherche des anime par titre."""
        ...

    @abstractmethod
    async def get_show(self, show_id: int) -> AnimeRecord:
        """
        Recupere la fiche complete d'un anime.

        Raises:
            NotFoundError: Si l'anime n'existe pas
        """
        ...

    @abstractmethod
    async def get_episodes(
        self, show_id: int, start: int, limit: int
    ) -> list[AnimeEpisodeRecord]:
        """Recupere une tranche d'episodes a partir du numero d'index start (1-indexe)."""
        ...

    @abstractmethod
    async def get_video_url(self, episode_id: int) -> str:
        """Retourne l'URL de la page du lecteur embarque pour un episode."""
        ...

    @abstractmethod
    async def get_archive_page(
        self, page: int, query: AnimeArchiveQuery
    ) -> list[AnimeRecord]:
        """Recupere une page (1-indexee) de l'archive."""
        ...


class IJikanProvider(ABC):
    """Source d'enrichissement MyAnimeList."""

    @abstractmethod
    async def get_show(self, mal_id: int) -> JikanShow:
        ...

    @abstractmethod
    async def get_episodes(self, mal_id: int, page: int = 1) -> list[JikanEpisode]:
        ...


class IAniListProvider(ABC):
    """Source d'enrichissement AniList."""

    @abstractmethod
    async def get_show(self, anilist_id: int) -> AniListShow:
        ...

    @abstractmethod
    async def get_episodes(self, anilist_id: int) -> list[AniListEpisode]:
        ...


class IKitsuProvider(ABC):
    """Source d'enrichissement Kitsu."""

    @abstractmethod
    async def get_show_by_mal_id(self, mal_id: int) -> KitsuShow:
        ...


class ITitleProvider(ABC):
    """Fournisseur principal du catalogue films/series."""

    @property
    @abstractmethod
    def source(self) -> str:
        """Identifiant de la source (ex: 'streamingcommunity')."""
        ...

    @abstractmethod
    async def search(self, query: str) -> list[TitleRecord]:
        ...

    @abstractmethod
    async def get_show(self, composite_id: str) -> TitleRecord:
        """
        Recupere la fiche complete d'un titre.

        Raises:
            NotFoundError: Si le titre n'existe pas
        """
        ...

    @abstractmethod
    async def get_episodes(
        self, composite_id: str, season_number: int
    ) -> list[TitleEpisodeRecord]:
        ...

    @abstractmethod
    async def get_video_source(self, composite_id: str) -> str:
        """Retourne l'URL de la page du lecteur pour un film ou un episode."""
        ...

    @abstractmethod
    async def get_archive_page(
        self, page: int, query: TitleArchiveQuery
    ) -> list[TitleRecord]:
        ...


class ITMDBProvider(ABC):
    """Source d'enrichissement TMDB (illustrations)."""

    @abstractmethod
    async def get_show(self, kind: str, tmdb_id: int) -> TMDBShow:
        """kind vaut "movie" ou "tv"."""
        ...

    @abstractmethod
    async def get_images(
        self, kind: str, tmdb_id: int, image_type: str, language: str
    ) -> list[str]:
        """image_type vaut "posters" ou "logos"."""
        ...


class IIMDbProvider(ABC):
    """Source d'enrichissement IMDb."""

    @abstractmethod
    async def get_show(self, imdb_id: str) -> IMDbShow:
        ...
