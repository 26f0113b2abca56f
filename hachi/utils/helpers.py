"""
Fonctions utilitaires partagees dans le projet Hachi.

Ce module centralise les conversions de champs bruts des fournisseurs :
- to_int / to_float : conversion tolerante des nombres JSON
- parse_year : annee depuis une date ISO
- sanitize_title / detect_title_language : marqueur "(ITA)" des titres anime
- slugify : identifiant de collection depuis son nom
"""

import math
import re
from datetime import date
from typing import Any, Optional

_ITA_MARKER_PATTERN = re.compile(r"\s*\(ITA\)\s*", re.IGNORECASE)
_WHITESPACE_PATTERN = re.compile(r"\s")


def to_int(value: Any) -> Optional[int]:
    """Convertit un entier JSON (ou chaine numerique) en int, None sinon."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        value = value.strip()
        if value.lstrip("-").isdigit():
            return int(value)
    return None


def to_float(value: Any) -> Optional[float]:
    """Convertit un nombre JSON (ou chaine numerique) en float fini, None sinon."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def parse_year(date_string: Optional[str]) -> Optional[int]:
    """Extrait l'annee d'une date ISO (YYYY-MM-DD ou YYYY)."""
    if not date_string:
        return None
    try:
        return date.fromisoformat(date_string[:10]).year
    except ValueError:
        pass
    year = to_int(date_string[:4])
    return year if year and year > 0 else None


def sanitize_title(title: str) -> str:
    """Retire le marqueur "(ITA)" d'un titre anime."""
    return _ITA_MARKER_PATTERN.sub(" ", title).strip()


def detect_title_language(title: str) -> str:
    """Code langue ISO 639-1 d'un titre anime: "it" si marque "(ITA)", "ja" sinon."""
    return "it" if "(ITA)" in title.upper() else "ja"


def slugify(name: str) -> str:
    """Minuscules, chaque blanc remplace par un tiret."""
    return _WHITESPACE_PATTERN.sub("-", name.lower())
