"""
Client StreamingCommunity, fournisseur principal du catalogue films/series.

Implemente ITitleProvider. Les pages titre sont servies en JSON via le
protocole Inertia (headers X-Inertia) ; la version Inertia est lue une fois
depuis l'attribut data-page de la page d'accueil.

Usage:
    client = StreamingCommunityClient()
    titles = await client.search("squid game")
    title = await client.get_show("93405-squid-game")
    await client.close()
"""

import json
from typing import Any, Optional
from urllib.parse import urlsplit, urlunsplit

import httpx

from hachi.adapters.api.retry import request_with_retry
from hachi.adapters.html import HTMLDocument
from hachi.core.errors import NotFoundError
from hachi.core.ports.providers import (
    ImageRecord,
    ITitleProvider,
    TitleArchiveQuery,
    TitleEpisodeRecord,
    TitleRecord,
    TitleSeasonRecord,
    TranslationRecord,
)
from hachi.core.value_objects import parse_episode_id, parse_show_id
from hachi.utils.helpers import to_int


class StreamingCommunityClient(ITitleProvider):
    """
    Client HTTP StreamingCommunity.

    Attributes:
        ARCHIVE_PAGE_SIZE: Nombre de titres par page d'archive
        LANGUAGE: Langue du catalogue
    """

    ARCHIVE_PAGE_SIZE = 60
    LANGUAGE = "it"

    def __init__(
        self,
        base_url: str = "https://streamingunity.to",
        user_agent: Optional[str] = None,
        timeout: float = 30.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._user_agent = user_agent
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None
        self._inertia_version: Optional[str] = None

        parts = urlsplit(self._base_url)
        self._cdn_url = urlunsplit(parts._replace(netloc=f"cdn.{parts.netloc}"))

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            headers = {"Referer": f"{self._base_url}/"}
            if self._user_agent:
                headers["User-Agent"] = self._user_agent
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                timeout=self._timeout,
                follow_redirects=True,
            )
        return self._client

    @property
    def source(self) -> str:
        return "streamingcommunity"

    # ------------------------------------------------------------------
    # Conversion des reponses brutes
    # ------------------------------------------------------------------

    def _parse_images(self, items: Optional[list[dict[str, Any]]]) -> tuple[ImageRecord, ...]:
        images = []
        for item in items or []:
            filename = item.get("filename")
            if item.get("type") and filename:
                images.append(
                    ImageRecord(type=item["type"], url=f"{self._cdn_url}/images/{filename}")
                )
        return tuple(images)

    def parse_title(self, data: dict[str, Any], depth: int = 0) -> TitleRecord:
        """Convertit un titre brut en TitleRecord (related lu au premier niveau)."""
        return TitleRecord(
            id=int(data["id"]),
            slug=data.get("slug") or "",
            name=data.get("name") or "",
            type=data.get("type") or "movie",
            plot=data.get("plot"),
            score=data.get("score"),
            runtime=to_int(data.get("runtime")),
            release_date=data.get("release_date"),
            last_air_date=data.get("last_air_date"),
            status=data.get("status"),
            genres=tuple(
                genre["name"] for genre in data.get("genres") or [] if genre.get("name")
            ),
            images=self._parse_images(data.get("images")),
            translations=tuple(
                TranslationRecord(
                    key=item.get("key", ""),
                    value=item.get("value") or "",
                    locale=item.get("locale", ""),
                )
                for item in data.get("translations") or []
            ),
            seasons=tuple(
                TitleSeasonRecord(number=int(item["number"]), name=item.get("name"))
                for item in data.get("seasons") or []
                if to_int(item.get("number")) is not None
            ),
            related=tuple(
                self.parse_title(item, depth + 1) for item in data.get("related") or []
            )
            if depth == 0
            else (),
            tmdb_id=to_int(data.get("tmdb_id")),
            imdb_id=data.get("imdb_id") or None,
        )

    def _parse_episode(self, data: dict[str, Any]) -> TitleEpisodeRecord:
        return TitleEpisodeRecord(
            id=int(data["id"]),
            number=to_int(data.get("number")) or 0,
            name=data.get("name"),
            plot=data.get("plot"),
            duration=to_int(data.get("duration")),
            images=self._parse_images(data.get("images")),
        )

    # ------------------------------------------------------------------
    # Inertia
    # ------------------------------------------------------------------

    async def _get_inertia_version(self) -> str:
        if self._inertia_version is None:
            client = self._get_client()
            response = await request_with_retry(client, "GET", f"/{self.LANGUAGE}")
            data_page = HTMLDocument(response.text).select_attr("#app", "data-page")
            if not data_page:
                raise NotFoundError("Version Inertia introuvable")
            self._inertia_version = str(json.loads(data_page).get("version", ""))
        return self._inertia_version

    async def _get_inertia_props(self, path: str) -> dict[str, Any]:
        client = self._get_client()
        version = await self._get_inertia_version()
        try:
            response = await request_with_retry(
                client,
                "GET",
                path,
                headers={"X-Inertia": "true", "X-Inertia-Version": version},
            )
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise NotFoundError(f"Page {path} introuvable") from e
            raise
        return response.json().get("props") or {}

    # ------------------------------------------------------------------
    # ITitleProvider
    # ------------------------------------------------------------------

    async def search(self, query: str) -> list[TitleRecord]:
        client = self._get_client()
        response = await request_with_retry(
            client, "GET", "/api/search", params={"q": query, "lang": self.LANGUAGE}
        )
        return [self.parse_title(item) for item in response.json().get("data", [])]

    async def get_show(self, composite_id: str) -> TitleRecord:
        parse_show_id(composite_id)
        props = await self._get_inertia_props(f"/{self.LANGUAGE}/titles/{composite_id}")
        title = props.get("title")
        if not title:
            raise NotFoundError(f"Titre {composite_id} introuvable")

        # Les titres associes arrivent dans le premier slider de la page
        sliders = props.get("sliders") or []
        if sliders and not title.get("related"):
            title = {**title, "related": sliders[0].get("titles") or []}
        return self.parse_title(title)

    async def get_episodes(
        self, composite_id: str, season_number: int
    ) -> list[TitleEpisodeRecord]:
        props = await self._get_inertia_props(
            f"/{self.LANGUAGE}/titles/{composite_id}/season-{season_number}"
        )
        season = props.get("loadedSeason") or {}
        return [self._parse_episode(item) for item in season.get("episodes") or []]

    async def get_video_source(self, composite_id: str) -> str:
        show_id, episode_id = parse_episode_id(composite_id)
        params: dict[str, Any] = {}
        if episode_id is not None:
            params = {"episode_id": episode_id, "next_episode": "1"}

        client = self._get_client()
        response = await request_with_retry(
            client,
            "GET",
            f"/{self.LANGUAGE}/iframe/{parse_show_id(show_id)}",
            params=params,
        )
        source = HTMLDocument(response.text).select_attr("iframe", "src")
        if not source:
            raise NotFoundError(f"Aucun lecteur pour {composite_id}")
        return source

    async def get_archive_page(
        self, page: int, query: TitleArchiveQuery
    ) -> list[TitleRecord]:
        params: list[tuple[str, Any]] = [
            ("lang", self.LANGUAGE),
            ("offset", (page - 1) * self.ARCHIVE_PAGE_SIZE),
            ("sort", query.sorting),
        ]
        if query.type:
            params.append(("type", query.type))
        params.extend(("genre[]", genre) for genre in query.genres)
        if query.year:
            params.append(("year", query.year))
        if query.service:
            params.append(("service", query.service))
        if query.minimum_views:
            params.append(("views", query.minimum_views))

        client = self._get_client()
        response = await request_with_retry(client, "GET", "/api/archive", params=params)
        return [self.parse_title(item) for item in response.json().get("titles", [])]

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
