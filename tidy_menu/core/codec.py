"""Export et import des configurations de menu au format JSON."""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Iterable

from tidy_menu import __version__
from tidy_menu.core import models
from tidy_menu.core.errors import MalformedSyntaxError, MissingFieldsError, ValidationError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("order", "hidden")

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_slug(value: Any) -> str | None:
    """Nettoie un identifiant de menu, ``None`` s'il est inutilisable.

    Les identifiants peuvent contenir ``?`` ou ``=`` (``edit.php?post_type=page``),
    seuls le balisage et les espaces superflus sont retirés.
    """

    if not isinstance(value, str):
        return None
    cleaned = _TAG_RE.sub("", value)
    cleaned = _WHITESPACE_RE.sub(" ", cleaned).strip()
    return cleaned or None


def coerce_sequence(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, dict):
        return list(value.values())
    return [value]


def sanitize_slug_list(values: Iterable[Any]) -> list[str]:
    cleaned: list[str] = []
    seen: set[str] = set()
    for raw in values:
        slug = sanitize_slug(raw)
        if slug is None or slug in seen:
            continue
        cleaned.append(slug)
        seen.add(slug)
    return cleaned


def require_slug_list(value: Any, field: str) -> list[str]:
    """Valide qu'une valeur saisie est une liste puis la nettoie."""

    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise ValidationError(f"Format de données invalide pour '{field}': liste attendue")
    return sanitize_slug_list(value)


def encode(
    config: models.ConfigDocument,
    settings: models.PluginSettings,
    role: str | None = None,
    *,
    version: str = __version__,
) -> models.ExchangeDocument:
    return models.ExchangeDocument(
        version=version,
        settings=models.ExchangeSettings(apply_to=settings.apply_to),
        order=list(config.order),
        hidden=list(config.hidden),
        role=role or None,
    )


def decode(raw: str | bytes) -> models.ExchangeDocument:
    """Lit un document d'échange et garantit sa forme (pas sa validité référentielle)."""

    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedSyntaxError("Le document n'est pas encodé en UTF-8") from exc
    if not isinstance(raw, str) or not raw.strip():
        raise MalformedSyntaxError("Aucune donnée de configuration fournie")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MalformedSyntaxError(f"JSON invalide: {exc.msg}") from exc
    except RecursionError as exc:
        raise MalformedSyntaxError("JSON invalide: imbrication trop profonde") from exc
    if not isinstance(data, dict):
        raise MalformedSyntaxError("Le document doit être un objet JSON")

    missing = [field for field in REQUIRED_FIELDS if field not in data]
    if missing:
        raise MissingFieldsError(missing)

    settings: models.ExchangeSettings | None = None
    raw_settings = data.get("settings")
    if isinstance(raw_settings, dict):
        settings = models.ExchangeSettings(apply_to=raw_settings.get("apply_to", "all"))
    elif raw_settings is not None:
        logger.debug("Ignoring non-object settings in imported document")

    role = sanitize_slug(data.get("role"))
    version = data.get("version")

    return models.ExchangeDocument(
        version=version if isinstance(version, str) else "",
        settings=settings,
        order=sanitize_slug_list(coerce_sequence(data["order"])),
        hidden=sanitize_slug_list(coerce_sequence(data["hidden"])),
        role=role,
    )


__all__ = [
    "coerce_sequence",
    "decode",
    "encode",
    "require_slug_list",
    "sanitize_slug",
    "sanitize_slug_list",
]
