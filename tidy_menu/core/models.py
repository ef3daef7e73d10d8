"""Modèles Pydantic du moteur de menu et de l'API."""
from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tidy_menu.core.config import APPLY_TO_CHOICES

ApplyTo = Literal["all", "user", "role"]


class MenuEntry(BaseModel):
    """Entrée de menu telle que fournie par l'hôte à chaque rendu."""

    model_config = ConfigDict(frozen=True)

    slug: str = ""
    title: str = ""
    icon: str = ""
    required_capability: str = ""
    is_separator: bool = False
    position: int = 0


class ResolvedEntry(MenuEntry):
    hidden: bool = False


class ConfigDocument(BaseModel):
    """Ordre et éléments masqués enregistrés pour une portée."""

    order: list[str] = Field(default_factory=list)
    hidden: list[str] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.order and not self.hidden


class PluginSettings(BaseModel):
    apply_to: ApplyTo = "all"
    hide_collapse_toggle: bool = False

    @classmethod
    def from_stored(cls, raw: dict[str, Any] | None, default_apply_to: str = "all") -> "PluginSettings":
        data = dict(raw or {})
        apply_to = data.get("apply_to", default_apply_to)
        if apply_to not in APPLY_TO_CHOICES:
            apply_to = "all"
        hide_collapse = data.get("hide_collapse_toggle", data.get("hide_collapse_menu", False))
        return cls(apply_to=apply_to, hide_collapse_toggle=bool(hide_collapse))


class Role(BaseModel):
    slug: str = Field(..., min_length=1)
    name: str = ""
    permissions: set[str] = Field(default_factory=set)
    user_count: int = Field(0, ge=0)

    @property
    def permission_count(self) -> int:
        return len(self.permissions)


class RoleTab(BaseModel):
    slug: str
    name: str
    has_users: bool
    can_admin: bool


class Viewer(BaseModel):
    id: int
    roles: list[str] = Field(default_factory=list)
    can_manage: bool = False


class ExchangeSettings(BaseModel):
    apply_to: ApplyTo = "all"

    @field_validator("apply_to", mode="before")
    @classmethod
    def _coerce_apply_to(cls, value: Any) -> str:
        if isinstance(value, str) and value.strip().lower() in APPLY_TO_CHOICES:
            return value.strip().lower()
        return "all"


class ExchangeDocument(BaseModel):
    """Document portable d'export/import d'une configuration."""

    version: str = ""
    settings: ExchangeSettings | None = None
    order: list[str] = Field(default_factory=list)
    hidden: list[str] = Field(default_factory=list)
    role: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class MenuView(BaseModel):
    scope: str
    entries: list[ResolvedEntry]
    empty_separators: list[str] = Field(default_factory=list)
    unmanageable: list[str] = Field(default_factory=list)
    has_hidden: bool = False
    hide_collapse_toggle: bool = False


class EditorState(BaseModel):
    apply_to: ApplyTo
    active_role: str | None = None
    role_tabs: list[RoleTab] = Field(default_factory=list)
    items: list[MenuEntry] = Field(default_factory=list)
    order: list[str] = Field(default_factory=list)
    hidden: list[str] = Field(default_factory=list)
    unmanageable: list[str] = Field(default_factory=list)
    next_separator: str


class SaveConfigPayload(BaseModel):
    order: list[str] = Field(default_factory=list)
    hidden: list[str] = Field(default_factory=list)
    role: str | None = None
    hide_collapse_toggle: bool | None = None


class SettingsPayload(BaseModel):
    apply_to: str
    hide_collapse_toggle: bool = False


class ImportPayload(BaseModel):
    config: str = Field(..., description="Document JSON exporté")
    role: str | None = None


class OperationResult(BaseModel):
    message: str
