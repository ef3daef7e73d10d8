"""Réconciliation de la configuration enregistrée avec le menu de l'hôte.

Les fonctions de ce module sont pures : elles ne modifient jamais la liste
fournie par l'hôte et renvoient de nouvelles listes. Une configuration obsolète
ou corrompue ne lève jamais d'erreur, les références inconnues sont ignorées.
"""
from __future__ import annotations

from typing import Iterable, Sequence

from tidy_menu.core import models
from tidy_menu.core.separators import allocate_separators


def _managed_entries(host_entries: Iterable[models.MenuEntry]) -> list[models.MenuEntry]:
    # Entries without a slug cannot be ordered nor hidden.
    candidates = [entry for entry in host_entries if entry.slug]
    candidates.sort(key=lambda entry: entry.position)
    managed: list[models.MenuEntry] = []
    seen: set[str] = set()
    for entry in candidates:
        if entry.slug in seen:
            continue
        seen.add(entry.slug)
        managed.append(entry)
    return managed


def order_entries(
    host_entries: Iterable[models.MenuEntry],
    order: Sequence[str],
) -> list[models.MenuEntry]:
    """Order host entries following ``order`` then the host positions."""

    entries = list(host_entries)
    managed = _managed_entries(entries)
    # Synthetic positions sit above every host entry, unmanageable ones included.
    managed.extend(allocate_separators(order, entries))

    pool: dict[str, models.MenuEntry] = {entry.slug: entry for entry in managed}
    ordered: list[models.MenuEntry] = []
    for slug in order:
        if not isinstance(slug, str):
            continue
        entry = pool.pop(slug, None)
        if entry is not None:
            ordered.append(entry)

    # dicts keep insertion order, which is the host position order here
    ordered.extend(pool.values())
    return ordered


def reconcile(
    host_entries: Iterable[models.MenuEntry],
    config: models.ConfigDocument | None,
    show_all: bool = False,
) -> list[models.ResolvedEntry]:
    """Produce the final menu list for a render cycle."""

    config = config or models.ConfigDocument()
    hidden = set() if show_all else {slug for slug in config.hidden if isinstance(slug, str)}
    resolved: list[models.ResolvedEntry] = []
    for entry in order_entries(host_entries, config.order):
        is_hidden = not entry.is_separator and entry.slug in hidden
        resolved.append(models.ResolvedEntry(**entry.model_dump(), hidden=is_hidden))
    return resolved


def find_empty_separators(entries: Sequence[models.ResolvedEntry], show_all: bool = False) -> list[str]:
    """Return the slugs of separators that have nothing visible to separate.

    A separator is empty when it is the first one and no visible item precedes
    it, or when no visible item sits between it and the next separator (or the
    end of the list).
    """

    if show_all:
        return []

    empty: list[str] = []
    seen_visible = False
    seen_separator = False
    pending: models.ResolvedEntry | None = None
    for entry in entries:
        if entry.is_separator:
            if pending is not None:
                empty.append(pending.slug)
                pending = None
            if not seen_visible and not seen_separator:
                empty.append(entry.slug)
            else:
                pending = entry
            seen_separator = True
            continue
        if entry.hidden:
            continue
        seen_visible = True
        pending = None
    if pending is not None:
        empty.append(pending.slug)
    return empty


__all__ = ["find_empty_separators", "order_entries", "reconcile"]
