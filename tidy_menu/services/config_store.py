"""Lecture et écriture des documents de configuration par portée."""
from __future__ import annotations

import logging

from tidy_menu.core import models
from tidy_menu.core.codec import coerce_sequence, sanitize_slug_list
from tidy_menu.core.menu_registry import GLOBAL_KEY, OPTION_PREFIX, ROLE_KEY_PREFIX, SETTINGS_KEY, USER_KEY_PREFIX
from tidy_menu.core.scopes import GLOBAL, ROLE, USER, ScopeKey
from tidy_menu.services.option_store import OptionStore

logger = logging.getLogger(__name__)


def key_for_scope(scope: ScopeKey) -> str:
    if scope.kind == GLOBAL:
        return GLOBAL_KEY
    if scope.kind == ROLE:
        return f"{ROLE_KEY_PREFIX}{scope.ident}"
    if scope.kind == USER:
        return f"{USER_KEY_PREFIX}{scope.ident}"
    raise ValueError(f"Portée inconnue: {scope.kind}")


class ConfigStore:
    def __init__(self, store: OptionStore, default_apply_to: str = "all") -> None:
        self._store = store
        self._default_apply_to = default_apply_to

    def load(self, scope: ScopeKey) -> models.ConfigDocument | None:
        """Return the saved document of a scope, ``None`` when nothing is saved."""

        raw = self._store.get(key_for_scope(scope))
        if raw is None:
            return None
        # Corrupted values degrade to an empty list instead of failing the render.
        return models.ConfigDocument(
            order=sanitize_slug_list(coerce_sequence(raw.get("order"))),
            hidden=sanitize_slug_list(coerce_sequence(raw.get("hidden"))),
        )

    def save(self, scope: ScopeKey, config: models.ConfigDocument, updated_by: str | None = None) -> None:
        self._store.set(key_for_scope(scope), config.model_dump(), updated_by)
        logger.info("Saved menu configuration for %s (%d ordered, %d hidden)", scope, len(config.order), len(config.hidden))

    def delete(self, scope: ScopeKey) -> None:
        self._store.delete(key_for_scope(scope))
        logger.info("Deleted menu configuration for %s", scope)

    def load_settings(self) -> models.PluginSettings:
        return models.PluginSettings.from_stored(self._store.get(SETTINGS_KEY), self._default_apply_to)

    def save_settings(self, settings: models.PluginSettings, updated_by: str | None = None) -> None:
        self._store.set(SETTINGS_KEY, settings.model_dump(), updated_by)
        logger.info("Saved menu settings (apply_to=%s)", settings.apply_to)

    def purge(self) -> int:
        removed = self._store.delete_prefix(f"{OPTION_PREFIX}_")
        logger.info("Removed %d menu option(s)", removed)
        return removed


__all__ = ["ConfigStore", "key_for_scope"]
