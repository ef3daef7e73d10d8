"""Dépendances FastAPI partagées par les routes du menu."""
from __future__ import annotations

from fastapi import Depends, HTTPException, Request, status

from tidy_menu.core import models
from tidy_menu.core.host import MenuHost
from tidy_menu.core.services import MenuContext
from tidy_menu.services.option_store import OptionStore


def get_host(request: Request) -> MenuHost:
    return request.app.state.host


def get_store(request: Request) -> OptionStore:
    return request.app.state.store


def get_current_viewer(request: Request, host: MenuHost = Depends(get_host)) -> models.Viewer:
    viewer = host.current_viewer(request)
    if viewer is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Utilisateur non identifié")
    return viewer


def get_menu_context(
    request: Request,
    viewer: models.Viewer = Depends(get_current_viewer),
    host: MenuHost = Depends(get_host),
    store: OptionStore = Depends(get_store),
) -> MenuContext:
    return MenuContext(
        store=store,
        host=host,
        viewer=viewer,
        default_apply_to=request.app.state.default_apply_to,
    )


def get_manager_context(ctx: MenuContext = Depends(get_menu_context)) -> MenuContext:
    if not ctx.viewer.can_manage:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Permissions insuffisantes")
    return ctx
