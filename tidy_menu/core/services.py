"""Opérations exposées à la couche transport : rendu, sauvegarde, import/export."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from tidy_menu.core import codec, models
from tidy_menu.core.config import APPLY_TO_CHOICES
from tidy_menu.core.errors import NoScopeError, ScopeError, ValidationError
from tidy_menu.core.host import MenuHost
from tidy_menu.core.reconciler import find_empty_separators, order_entries, reconcile
from tidy_menu.core.scopes import (
    ScopeKey,
    require_configurable_role,
    resolve_scope,
    select_editable_role,
    standard_role_tabs,
)
from tidy_menu.core.separators import next_separator_slug
from tidy_menu.services.config_store import ConfigStore
from tidy_menu.services.option_store import OptionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MenuContext:
    """Everything an operation needs, passed explicitly on each call."""

    store: OptionStore
    host: MenuHost
    viewer: models.Viewer
    default_apply_to: str = "all"

    @property
    def configs(self) -> ConfigStore:
        return ConfigStore(self.store, self.default_apply_to)

    @property
    def actor(self) -> str:
        return str(self.viewer.id)


def get_settings(ctx: MenuContext) -> models.PluginSettings:
    return ctx.configs.load_settings()


def active_scope(ctx: MenuContext, settings: models.PluginSettings | None = None) -> ScopeKey:
    settings = settings or get_settings(ctx)
    try:
        return resolve_scope(settings, ctx.viewer, ctx.host.list_roles())
    except NoScopeError:
        logger.debug("Viewer %s has no role, using the global menu configuration", ctx.viewer.id)
        return ScopeKey.global_scope()


def load_active_config(
    ctx: MenuContext,
    settings: models.PluginSettings | None = None,
) -> tuple[ScopeKey, models.ConfigDocument | None]:
    """Return the scope applying to the viewer and its saved document.

    A role without a saved document falls back to the global document.
    """

    settings = settings or get_settings(ctx)
    scope = active_scope(ctx, settings)
    config = ctx.configs.load(scope)
    if config is None and scope.kind == "role":
        return ScopeKey.global_scope(), ctx.configs.load(ScopeKey.global_scope())
    return scope, config


def render_menu(ctx: MenuContext, show_all: bool = False) -> models.MenuView:
    settings = get_settings(ctx)
    scope, config = load_active_config(ctx, settings)
    entries = reconcile(ctx.host.list_menu_entries(), config, show_all=show_all)
    return models.MenuView(
        scope=str(scope),
        entries=entries,
        empty_separators=find_empty_separators(entries, show_all=show_all),
        unmanageable=ctx.host.list_unmanageable(),
        has_hidden=bool(config and config.hidden),
        hide_collapse_toggle=settings.hide_collapse_toggle,
    )


def _target_scope(
    ctx: MenuContext,
    settings: models.PluginSettings,
    role: str | None,
    *,
    require_role: bool,
) -> ScopeKey:
    if settings.apply_to == "user":
        return ScopeKey.for_user(ctx.viewer.id)
    if settings.apply_to == "role":
        if role:
            return ScopeKey.for_role(require_configurable_role(role, ctx.host.list_roles()))
        if require_role:
            raise ScopeError("Rôle invalide: (vide)")
    return ScopeKey.global_scope()


def save_all(
    ctx: MenuContext,
    order: list[str] | tuple[str, ...] | None,
    hidden: list[str] | tuple[str, ...] | None,
    role: str | None = None,
    hide_collapse_toggle: bool | None = None,
) -> ScopeKey:
    """Enregistre l'ordre et les éléments masqués de la portée ciblée."""

    config = models.ConfigDocument(
        order=codec.require_slug_list(order, "order"),
        hidden=codec.require_slug_list(hidden, "hidden"),
    )
    settings = get_settings(ctx)
    scope = _target_scope(ctx, settings, role, require_role=True)
    ctx.configs.save(scope, config, ctx.actor)

    if hide_collapse_toggle is not None and hide_collapse_toggle != settings.hide_collapse_toggle:
        ctx.configs.save_settings(
            settings.model_copy(update={"hide_collapse_toggle": hide_collapse_toggle}),
            ctx.actor,
        )
    return scope


def save_settings(ctx: MenuContext, apply_to: str, hide_collapse_toggle: bool = False) -> models.PluginSettings:
    normalized = (apply_to or "").strip().lower()
    if normalized not in APPLY_TO_CHOICES:
        raise ValidationError(f"Valeur 'apply_to' invalide: {apply_to}")
    settings = models.PluginSettings(apply_to=normalized, hide_collapse_toggle=bool(hide_collapse_toggle))
    ctx.configs.save_settings(settings, ctx.actor)
    return settings


def reset_scope(ctx: MenuContext, role: str | None = None) -> ScopeKey:
    """Supprime la personnalisation de la portée ciblée (retour au menu de l'hôte)."""

    scope = _target_scope(ctx, get_settings(ctx), role, require_role=True)
    ctx.configs.delete(scope)
    return scope


def export_scope(ctx: MenuContext, role: str | None = None) -> models.ExchangeDocument:
    settings = get_settings(ctx)
    scope = _target_scope(ctx, settings, role, require_role=False)
    config = ctx.configs.load(scope) or models.ConfigDocument()
    return codec.encode(config, settings, role=scope.ident if scope.kind == "role" else None)


def import_scope(
    ctx: MenuContext,
    document: models.ExchangeDocument | str | bytes,
    role: str | None = None,
) -> ScopeKey:
    if not isinstance(document, models.ExchangeDocument):
        document = codec.decode(document)

    config = models.ConfigDocument(
        order=codec.sanitize_slug_list(document.order),
        hidden=codec.sanitize_slug_list(document.hidden),
    )
    settings = get_settings(ctx)
    scope = _target_scope(ctx, settings, role, require_role=False)
    ctx.configs.save(scope, config, ctx.actor)

    # Role mode never changes the global settings.
    if settings.apply_to != "role" and document.settings is not None:
        if document.settings.apply_to != settings.apply_to:
            ctx.configs.save_settings(
                settings.model_copy(update={"apply_to": document.settings.apply_to}),
                ctx.actor,
            )
    logger.info("Imported menu configuration into %s (version %s)", scope, document.version or "?")
    return scope


def build_editor_state(ctx: MenuContext, role: str | None = None) -> models.EditorState:
    """Assemble what the settings screen needs to edit a scope."""

    settings = get_settings(ctx)
    roles = ctx.host.list_roles()
    active_role: str | None = None
    config: models.ConfigDocument | None = None
    if settings.apply_to == "role":
        active_role = select_editable_role(role, roles)
        if active_role:
            config = ctx.configs.load(ScopeKey.for_role(active_role))
    else:
        config = ctx.configs.load(_target_scope(ctx, settings, None, require_role=False))
    config = config or models.ConfigDocument()

    entries = [entry for entry in ctx.host.list_menu_entries(active_role) if entry.slug]
    items = order_entries(entries, config.order)
    return models.EditorState(
        apply_to=settings.apply_to,
        active_role=active_role,
        role_tabs=standard_role_tabs(roles) if settings.apply_to == "role" else [],
        items=items,
        order=config.order,
        hidden=config.hidden,
        unmanageable=ctx.host.list_unmanageable(),
        next_separator=next_separator_slug([item.slug for item in items] + config.order),
    )


def uninstall(store: OptionStore) -> int:
    """Supprime toutes les options du menu, toutes portées confondues."""

    return ConfigStore(store).purge()


__all__ = [
    "MenuContext",
    "active_scope",
    "build_editor_state",
    "export_scope",
    "get_settings",
    "import_scope",
    "load_active_config",
    "render_menu",
    "reset_scope",
    "save_all",
    "save_settings",
    "uninstall",
]
