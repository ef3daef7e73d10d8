"""Interface avec l'environnement hôte qui fournit le menu et les rôles."""
from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Iterable, Protocol

from tidy_menu.core import models
from tidy_menu.core.menu_registry import DEFAULT_MENU_ENTRIES, DEFAULT_ROLES, MANAGE_CAPABILITY

logger = logging.getLogger(__name__)

# \s also matches the non-breaking space hosts put before a notification bubble.
_BADGE_RE = re.compile(r"\s?<span[^>]*>.*?</span>", re.IGNORECASE | re.DOTALL)
_BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]*>", re.DOTALL)


def clean_title(raw: str) -> str:
    """Strip markup and notification counters from a menu title.

    ``"Comments <span class="count">5</span>"`` becomes ``"Comments"``.
    """

    if not raw:
        return ""
    title = _BADGE_RE.sub("", raw)
    title = _BR_RE.sub(" ", title)
    title = _TAG_RE.sub("", title)
    return title.strip()


def filter_entries_for_role(
    entries: Iterable[models.MenuEntry],
    role: models.Role | None,
) -> list[models.MenuEntry]:
    """Keep the entries whose required capability is granted to ``role``."""

    if role is None:
        return list(entries)
    return [
        entry
        for entry in entries
        if not entry.required_capability or entry.required_capability in role.permissions
    ]


def unmanageable_titles(entries: Iterable[models.MenuEntry]) -> list[str]:
    titles: list[str] = []
    for entry in entries:
        if entry.slug or entry.is_separator:
            continue
        title = clean_title(entry.title)
        if title:
            titles.append(title)
    return titles


class MenuHost(Protocol):
    def list_menu_entries(self, role_filter: str | None = None) -> list[models.MenuEntry]:
        ...

    def list_unmanageable(self) -> list[str]:
        ...

    def list_roles(self) -> list[models.Role]:
        ...

    def current_viewer(self, request: Any) -> models.Viewer | None:
        ...


class StaticMenuHost:
    """Hôte en mémoire, alimenté par une liste d'entrées et de rôles fixes.

    L'identité du visiteur est lue dans les en-têtes ``X-Viewer-Id`` et
    ``X-Viewer-Roles`` (liste séparée par des virgules). L'authentification reste
    à la charge de l'hôte réel.
    """

    def __init__(self, entries: Iterable[models.MenuEntry], roles: Iterable[models.Role]) -> None:
        self._entries = tuple(entries)
        self._roles = {role.slug: role for role in roles}

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "StaticMenuHost":
        entries = [models.MenuEntry.model_validate(item) for item in payload.get("entries", [])]
        roles = [models.Role.model_validate(item) for item in payload.get("roles", [])]
        return cls(entries, roles)

    @classmethod
    def from_json_file(cls, path: str | Path) -> "StaticMenuHost":
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(payload, dict):
            raise ValueError(f"Description d'hôte invalide: {path}")
        return cls.from_payload(payload)

    @classmethod
    def default(cls) -> "StaticMenuHost":
        return cls.from_payload({"entries": DEFAULT_MENU_ENTRIES, "roles": DEFAULT_ROLES})

    def list_menu_entries(self, role_filter: str | None = None) -> list[models.MenuEntry]:
        cleaned = [
            entry.model_copy(update={"title": clean_title(entry.title)})
            for entry in self._entries
            if entry.slug or entry.title
        ]
        if not role_filter:
            return cleaned
        role = self._roles.get(role_filter)
        if role is None:
            logger.debug("Unknown role filter %s, returning the full menu", role_filter)
        return filter_entries_for_role(cleaned, role)

    def list_unmanageable(self) -> list[str]:
        return unmanageable_titles(self._entries)

    def list_roles(self) -> list[models.Role]:
        return list(self._roles.values())

    def current_viewer(self, request: Any) -> models.Viewer | None:
        raw_id = request.headers.get("X-Viewer-Id")
        if not raw_id:
            return None
        try:
            viewer_id = int(raw_id)
        except ValueError:
            return None
        raw_roles = request.headers.get("X-Viewer-Roles", "")
        held = [slug.strip() for slug in raw_roles.split(",") if slug.strip()]
        can_manage = any(
            MANAGE_CAPABILITY in self._roles[slug].permissions for slug in held if slug in self._roles
        )
        return models.Viewer(id=viewer_id, roles=held, can_manage=can_manage)


__all__ = [
    "MenuHost",
    "StaticMenuHost",
    "clean_title",
    "filter_entries_for_role",
    "unmanageable_titles",
]
