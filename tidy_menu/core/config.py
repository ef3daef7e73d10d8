"""Configuration statique du moteur de menu."""
from __future__ import annotations

import os
from dataclasses import dataclass

APPLY_TO_CHOICES = {"all", "user", "role"}

_TRUE_VALUES = {"1", "true", "yes", "on", "y", "t"}
_FALSE_VALUES = {"0", "false", "no", "off", "n", "f"}


def _get_env_flag(name: str, default: bool = False) -> bool:
    """Retourne une valeur booléenne à partir d'une variable d'environnement."""

    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return default


def _get_env_choice(name: str, choices: set[str], default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    return normalized if normalized in choices else default


def _get_env_path(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass(frozen=True)
class Settings:
    """Paramètres globaux lus depuis l'environnement."""

    DEFAULT_APPLY_TO: str = "all"
    MENU_DEBUG: bool = False
    HOST_MENU_PATH: str | None = None


def load_settings() -> Settings:
    return Settings(
        DEFAULT_APPLY_TO=_get_env_choice("TIDY_MENU_DEFAULT_APPLY_TO", APPLY_TO_CHOICES, "all"),
        MENU_DEBUG=_get_env_flag("TIDY_MENU_DEBUG", default=False),
        HOST_MENU_PATH=_get_env_path("TIDY_MENU_HOST_FILE"),
    )


settings = load_settings()
