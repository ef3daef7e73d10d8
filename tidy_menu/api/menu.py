"""Routes pour la personnalisation du menu d'administration."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from tidy_menu.api.deps import get_manager_context, get_menu_context
from tidy_menu.core import models, services
from tidy_menu.core.errors import MenuConfigError
from tidy_menu.core.services import MenuContext

router = APIRouter()


def _bad_request(exc: MenuConfigError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.get("", response_model=models.MenuView)
def get_menu(
    show_all: bool = False,
    ctx: MenuContext = Depends(get_menu_context),
) -> models.MenuView:
    return services.render_menu(ctx, show_all=show_all)


@router.get("/editor", response_model=models.EditorState)
def get_editor_state(
    role: str | None = None,
    ctx: MenuContext = Depends(get_manager_context),
) -> models.EditorState:
    return services.build_editor_state(ctx, role=role)


@router.put("/config", response_model=models.OperationResult)
def save_menu_config(
    payload: models.SaveConfigPayload,
    ctx: MenuContext = Depends(get_manager_context),
) -> models.OperationResult:
    try:
        services.save_all(
            ctx,
            payload.order,
            payload.hidden,
            role=payload.role,
            hide_collapse_toggle=payload.hide_collapse_toggle,
        )
    except MenuConfigError as exc:
        raise _bad_request(exc) from exc
    return models.OperationResult(message="Réglages enregistrés.")


@router.delete("/config", response_model=models.OperationResult)
def reset_menu_config(
    role: str | None = None,
    ctx: MenuContext = Depends(get_manager_context),
) -> models.OperationResult:
    try:
        services.reset_scope(ctx, role=role)
    except MenuConfigError as exc:
        raise _bad_request(exc) from exc
    return models.OperationResult(message="Menu réinitialisé.")


@router.get("/settings", response_model=models.PluginSettings)
def get_menu_settings(ctx: MenuContext = Depends(get_manager_context)) -> models.PluginSettings:
    return services.get_settings(ctx)


@router.put("/settings", response_model=models.PluginSettings)
def update_menu_settings(
    payload: models.SettingsPayload,
    ctx: MenuContext = Depends(get_manager_context),
) -> models.PluginSettings:
    try:
        return services.save_settings(ctx, payload.apply_to, payload.hide_collapse_toggle)
    except MenuConfigError as exc:
        raise _bad_request(exc) from exc


@router.get("/export")
def export_menu_config(
    role: str | None = None,
    ctx: MenuContext = Depends(get_manager_context),
) -> dict:
    try:
        document = services.export_scope(ctx, role=role)
    except MenuConfigError as exc:
        raise _bad_request(exc) from exc
    return document.to_payload()


@router.post("/import", response_model=models.OperationResult)
def import_menu_config(
    payload: models.ImportPayload,
    ctx: MenuContext = Depends(get_manager_context),
) -> models.OperationResult:
    try:
        services.import_scope(ctx, payload.config, role=payload.role)
    except MenuConfigError as exc:
        raise _bad_request(exc) from exc
    return models.OperationResult(message="Configuration importée.")
