"""
Stockage JSON des collections et tendances generees hors ligne.

Les fichiers sont des listes d'enregistrements qui reprennent les champs des
entites (noms snake_case, enums par valeur, tuples en listes). Ils sont
ecrits par les scripts de generation et relus, en lecture seule, au service.

Usage:
    store = JsonAssetStore(Path("assets"))
    store.write_collections("sc_feed_collections", collections)
    collections = store.read_collections("sc_feed_collections")
"""

import json
from dataclasses import asdict
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from hachi.core.entities import (
    FeedCategory,
    FeedCollection,
    Season,
    Show,
    ShowEntry,
    ShowKind,
    ShowStatus,
)
from hachi.core.ports.catalog import IAssetStore


def _json_default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Type non serialisable: {type(value).__name__}")


def _entry_from_dict(data: dict[str, Any]) -> ShowEntry:
    return ShowEntry(
        kind=ShowKind(data["kind"]),
        id=data["id"],
        title=data["title"],
        poster_url=data.get("poster_url"),
        year=data.get("year"),
        language=data.get("language"),
    )


def _entries_from_list(items: Optional[list[dict[str, Any]]]) -> Optional[tuple[ShowEntry, ...]]:
    if items is None:
        return None
    return tuple(_entry_from_dict(item) for item in items)


def collection_from_dict(data: dict[str, Any]) -> FeedCollection:
    category = data.get("category")
    return FeedCollection(
        id=data["id"],
        name=data["name"],
        category=FeedCategory(category) if category else None,
        shows=tuple(_entry_from_dict(item) for item in data.get("shows", [])),
    )


def show_from_dict(data: dict[str, Any]) -> Show:
    seasons = data.get("seasons")
    status = data.get("status")
    return Show(
        id=data["id"],
        kind=ShowKind(data["kind"]),
        title=data["title"],
        overview=data.get("overview"),
        genres=tuple(data.get("genres", [])),
        duration=data.get("duration", 0),
        release_date=data.get("release_date"),
        seasons=(
            tuple(Season(number=s["number"], name=s["name"]) for s in seasons)
            if seasons is not None
            else None
        ),
        poster_url=data.get("poster_url"),
        clean_poster_url=data.get("clean_poster_url"),
        backdrop_url=data.get("backdrop_url"),
        logo_url=data.get("logo_url"),
        rating=float(data.get("rating") or 0.0),
        status=ShowStatus(status) if status else None,
        related_shows=_entries_from_list(data.get("related_shows")),
        franchise_shows=_entries_from_list(data.get("franchise_shows")),
        language=data.get("language"),
    )


class JsonAssetStore(IAssetStore):
    """
    Assets JSON dans un repertoire.

    Un asset absent se lit comme une liste vide.
    """

    def __init__(self, assets_dir: Path) -> None:
        self._assets_dir = assets_dir

    def _path(self, name: str) -> Path:
        return self._assets_dir / f"{name}.json"

    def _read(self, name: str) -> list[dict[str, Any]]:
        path = self._path(name)
        if not path.exists():
            logger.warning("Asset absent: {}", path)
            return []
        with path.open(encoding="utf-8") as f:
            return json.load(f)

    def _write(self, name: str, records: list[Any]) -> None:
        path = self._path(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        # Fichier voisin puis remplacement: l'asset n'est jamais tronque
        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            with temp_path.open("w", encoding="utf-8") as f:
                json.dump(
                    [asdict(record) for record in records],
                    f,
                    indent=2,
                    ensure_ascii=False,
                    default=_json_default,
                )
            temp_path.replace(path)
        except Exception:
            temp_path.unlink(missing_ok=True)
            raise
        logger.info("Asset ecrit", path=str(path), count=len(records))

    def read_collections(self, name: str) -> list[FeedCollection]:
        return [collection_from_dict(item) for item in self._read(name)]

    def read_shows(self, name: str) -> list[Show]:
        return [show_from_dict(item) for item in self._read(name)]

    def write_collections(self, name: str, collections: list[FeedCollection]) -> None:
        self._write(name, collections)

    def write_shows(self, name: str, shows: list[Show]) -> None:
        self._write(name, shows)
