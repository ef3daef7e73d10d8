"""Application FastAPI principale pour Tidy Menu."""
from __future__ import annotations

import logging

from fastapi import FastAPI

from tidy_menu import __version__
from tidy_menu.api import menu
from tidy_menu.core.config import Settings, settings as default_settings
from tidy_menu.core.host import MenuHost, StaticMenuHost
from tidy_menu.core.logging_config import configure_logging
from tidy_menu.services.option_store import OptionStore, SqliteOptionStore

logger = logging.getLogger(__name__)


def _default_host(config: Settings) -> MenuHost:
    if config.HOST_MENU_PATH:
        logger.info("Loading host menu description from %s", config.HOST_MENU_PATH)
        return StaticMenuHost.from_json_file(config.HOST_MENU_PATH)
    return StaticMenuHost.default()


def create_app(
    host: MenuHost | None = None,
    store: OptionStore | None = None,
    config: Settings | None = None,
) -> FastAPI:
    config = config or default_settings
    application = FastAPI(title="Tidy Menu API", version=__version__)
    application.state.host = host or _default_host(config)
    application.state.store = store or SqliteOptionStore()
    application.state.default_apply_to = config.DEFAULT_APPLY_TO

    application.include_router(menu.router, prefix="/menu", tags=["menu"])

    @application.get("/health", tags=["health"])
    async def healthcheck() -> dict[str, str]:
        """Renvoie l'état de santé générique du service."""
        return {"status": "ok"}

    return application


configure_logging(default_settings.MENU_DEBUG)

app = create_app()
