"""Résolution de la portée de configuration (globale, utilisateur, rôle)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from tidy_menu.core import models
from tidy_menu.core.errors import NoScopeError, ScopeError
from tidy_menu.core.menu_registry import ADMIN_ACCESS_CAPABILITY, STANDARD_ROLES, SUPER_ADMIN_ROLE

GLOBAL = "global"
USER = "user"
ROLE = "role"


@dataclass(frozen=True)
class ScopeKey:
    kind: str
    ident: str | None = None

    def __str__(self) -> str:
        if self.kind == GLOBAL:
            return GLOBAL
        return f"{self.kind}:{self.ident}"

    @classmethod
    def global_scope(cls) -> "ScopeKey":
        return cls(GLOBAL)

    @classmethod
    def for_user(cls, user_id: int | str) -> "ScopeKey":
        return cls(USER, str(user_id))

    @classmethod
    def for_role(cls, role: str) -> "ScopeKey":
        if not role:
            raise ScopeError("Rôle invalide")
        return cls(ROLE, role)

    @classmethod
    def parse(cls, value: str) -> "ScopeKey":
        if value == GLOBAL:
            return cls.global_scope()
        kind, _, ident = value.partition(":")
        if kind not in {USER, ROLE} or not ident:
            raise ScopeError(f"Portée invalide: {value}")
        return cls(kind, ident)


def _role_index(roles: Iterable[models.Role] | Mapping[str, models.Role]) -> dict[str, models.Role]:
    if isinstance(roles, Mapping):
        return dict(roles)
    return {role.slug: role for role in roles}


def primary_role(
    viewer_roles: Iterable[str],
    roles: Iterable[models.Role] | Mapping[str, models.Role],
) -> str | None:
    """Return the most privileged role of a viewer.

    Several roles are ranked by permission count; equal counts fall back to the
    lexical order of the slugs.
    """

    held = [slug for slug in dict.fromkeys(viewer_roles) if slug]
    if not held:
        return None
    if len(held) == 1:
        return held[0]
    index = _role_index(roles)

    def _rank(slug: str) -> tuple[int, str]:
        role = index.get(slug)
        return (-(role.permission_count if role else 0), slug)

    return sorted(held, key=_rank)[0]


def resolve_scope(
    settings: models.PluginSettings,
    viewer: models.Viewer,
    roles: Iterable[models.Role] | Mapping[str, models.Role] = (),
) -> ScopeKey:
    if settings.apply_to == "user":
        return ScopeKey.for_user(viewer.id)
    if settings.apply_to == "role":
        role = primary_role(viewer.roles, roles)
        if role is None:
            raise NoScopeError(f"Aucun rôle pour l'utilisateur {viewer.id}")
        return ScopeKey.for_role(role)
    return ScopeKey.global_scope()


def configurable_roles(roles: Iterable[models.Role] | Mapping[str, models.Role]) -> list[models.Role]:
    """Roles allowed in the admin area, most privileged first."""

    eligible = [
        role
        for role in _role_index(roles).values()
        if role.slug == SUPER_ADMIN_ROLE or ADMIN_ACCESS_CAPABILITY in role.permissions
    ]
    return sorted(eligible, key=lambda role: (-role.permission_count, role.slug))


def require_configurable_role(
    role: str | None,
    roles: Iterable[models.Role] | Mapping[str, models.Role],
) -> str:
    allowed = {item.slug for item in configurable_roles(roles)}
    if not role or role not in allowed:
        raise ScopeError(f"Rôle invalide: {role or '(vide)'}")
    return role


def standard_role_tabs(roles: Iterable[models.Role] | Mapping[str, models.Role]) -> list[models.RoleTab]:
    index = _role_index(roles)
    tabs: list[models.RoleTab] = []
    for slug, default_name in STANDARD_ROLES.items():
        role = index.get(slug)
        if slug == SUPER_ADMIN_ROLE:
            # Only multisite hosts declare super admins.
            if role is None:
                continue
            can_admin = True
        else:
            can_admin = role is not None and ADMIN_ACCESS_CAPABILITY in role.permissions
        tabs.append(
            models.RoleTab(
                slug=slug,
                name=(role.name if role and role.name else default_name),
                has_users=bool(role and role.user_count > 0),
                can_admin=can_admin,
            )
        )
    return tabs


def select_editable_role(
    requested: str | None,
    roles: Iterable[models.Role] | Mapping[str, models.Role],
) -> str | None:
    """Choose the role whose document the settings editor works on."""

    tabs = standard_role_tabs(roles)
    by_slug = {tab.slug: tab for tab in tabs}
    if requested and requested in by_slug and by_slug[requested].has_users and by_slug[requested].can_admin:
        return requested
    for tab in tabs:
        if tab.has_users and tab.can_admin:
            return tab.slug
    return None


__all__ = [
    "ScopeKey",
    "configurable_roles",
    "primary_role",
    "require_configurable_role",
    "resolve_scope",
    "select_editable_role",
    "standard_role_tabs",
]
