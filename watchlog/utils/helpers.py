"""
Fonctions utilitaires partagees dans le projet Watchlog.

Ce module centralise les fonctions reutilisees a travers le codebase :
- clean_title : nettoyage des titres provenant des APIs
- slugify : titre normalise pour les URLs
- extract_imdb_id : ID IMDb d'un document de details TMDB
- extract_rating : note IMDb d'une page HTML
- parse_timestamp / parse_date : conversion des dates d'export et d'API
- parse_flag : booleens des exports ("0" / "1")
- search_variants : variantes de recherche (casse, ligatures)
- utcnow : horodatage UTC avec fuseau
"""

import json
import re
import unicodedata
from datetime import date, datetime, timezone
from typing import Any, Optional

from watchlog.utils.constants import EMPTY_SLUG


def strip_invisible_chars(text: str) -> str:
    """
    Retire les caractères Unicode invisibles d'une chaîne.

    Supprime les caractères de contrôle et les marques directionnelles
    qui peuvent provenir des APIs (LRM, RLM, BOM, etc.).
    """
    return "".join(
        char for char in text if unicodedata.category(char) not in ("Cf", "Cc")
    )


def clean_title(title: Optional[str]) -> Optional[str]:
    """Nettoie un titre : retire les caractères invisibles et les espaces superflus."""
    if not title:
        return None
    cleaned = strip_invisible_chars(title).strip()
    return cleaned or None


def normalize_accents(text: str) -> str:
    """
    Supprime les accents d'une chaine.

    Utilise la decomposition NFD puis filtre les caracteres diacritiques (Mn).
    Ex: "Amélie" -> "Amelie"
    """
    normalized = unicodedata.normalize("NFD", text)
    return "".join(char for char in normalized if unicodedata.category(char) != "Mn")


_LIGATURE_MAP = {"œ": "oe", "Œ": "Oe", "æ": "ae", "Æ": "Ae"}
_REVERSE_LIGATURE_MAP = {v.lower(): k.lower() for k, v in _LIGATURE_MAP.items()}


def slugify(title: Optional[str]) -> str:
    """
    Derive le slug d'un titre.

    Minuscules, sans accents ni ligatures, mots separes par des tirets.
    Un titre sans caractere alphanumerique donne "no-slug".
    """
    if not title:
        return EMPTY_SLUG
    text = title
    for lig, expanded in _LIGATURE_MAP.items():
        text = text.replace(lig, expanded)
    text = normalize_accents(text).lower()
    slug = re.sub(r"[^a-z0-9]+", "-", text).strip("-")
    return slug or EMPTY_SLUG


def search_variants(query: str) -> list[str]:
    """
    Génère les variantes de recherche pour gérer les ligatures.

    SQLite LIKE est case-insensitive pour ASCII uniquement.
    Pour les ligatures Unicode (œ, æ), il faut générer toutes
    les combinaisons casse + forme (ligature vs digraphe).
    """
    variants = {query, query.lower(), query.capitalize()}
    # Déplier les ligatures (ex: "œil" → "oeil")
    expanded = query
    for lig, exp in _LIGATURE_MAP.items():
        expanded = expanded.replace(lig, exp)
    variants.update({expanded, expanded.lower(), expanded.capitalize()})
    # Replier les digraphes en ligatures (ex: "oeil" → "œil")
    collapsed = query.lower()
    for exp, lig in _REVERSE_LIGATURE_MAP.items():
        collapsed = collapsed.replace(exp, lig)
    variants.update({collapsed, collapsed.capitalize()})
    return sorted(v for v in variants if v)


def extract_imdb_id(payload: dict[str, Any]) -> Optional[str]:
    """
    Extrait l'ID IMDb d'un document de details TMDB.

    Les series exposent l'ID dans le sous-document external_ids,
    les films directement dans imdb_id.
    """
    external_ids = payload.get("external_ids") or {}
    return external_ids.get("imdb_id") or payload.get("imdb_id") or None


_AGGREGATE_RATING_RE = re.compile(
    r'"aggregateRating"\s*:\s*\{[^{}]*?"ratingValue"\s*:\s*"?(\d+(?:[.,]\d+)?)'
)
_LD_JSON_RE = re.compile(
    r'<script[^>]*type="application/ld\+json"[^>]*>(.*?)</script>', re.DOTALL
)


def extract_rating(html: str) -> Optional[float]:
    """
    Extrait la note d'une page titre IMDb.

    Lit d'abord le bloc JSON-LD (aggregateRating.ratingValue), puis se
    rabat sur une recherche textuelle si le JSON est invalide.

    Returns:
        La note, ou None si la page n'en contient pas
    """
    for block in _LD_JSON_RE.findall(html):
        try:
            data = json.loads(block)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            value = (data.get("aggregateRating") or {}).get("ratingValue")
            if value is not None:
                return float(str(value).replace(",", "."))

    match = _AGGREGATE_RATING_RE.search(html)
    if match:
        return float(match.group(1).replace(",", "."))
    return None


def utcnow() -> datetime:
    """Horodatage courant, avec fuseau UTC."""
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    """Une valeur naive est consideree comme exprimee en UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Convertit une date d'export en datetime UTC (avec fuseau).

    Accepte un timestamp Unix (int, float ou chaine numerique),
    une chaine ISO 8601 ("2017-05-01 20:15:00" ou "2017-05-01T20:15:00Z"),
    une date ou un datetime.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, (int, float)) or (isinstance(value, str) and value.strip().isdigit()):
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    return _as_utc(datetime.fromisoformat(str(value).strip().replace("Z", "+00:00")))


def parse_date(value: Optional[str]) -> Optional[date]:
    """Convertit une date TMDB (YYYY-MM-DD) en date, None si vide ou invalide."""
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def parse_flag(value: Any) -> bool:
    """
    Booleen d'export : bool, entier ou chaine ("0", "1", "true", "false").

    Les exports SQL stockent les booleens en "0"/"1" : bool("0") vaudrait True.
    """
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)
