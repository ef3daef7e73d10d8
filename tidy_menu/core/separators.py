"""Allocation des séparateurs synthétiques."""
from __future__ import annotations

from typing import Iterable, Sequence

from tidy_menu.core import models
from tidy_menu.core.menu_registry import NATIVE_SEPARATOR_COUNT, SEPARATOR_CAPABILITY, SEPARATOR_PATTERN


def separator_number(slug: str) -> int | None:
    """Return the numeric suffix of a ``separator<N>`` slug, if any."""

    if not isinstance(slug, str):
        return None
    match = SEPARATOR_PATTERN.match(slug)
    if not match:
        return None
    number = int(match.group(1))
    return number if number > 0 else None


def is_separator_slug(slug: str) -> bool:
    return separator_number(slug) is not None


def allocate_separators(
    order: Sequence[str],
    host_entries: Iterable[models.MenuEntry],
    native_count: int = NATIVE_SEPARATOR_COUNT,
) -> list[models.MenuEntry]:
    """Return the user separators referenced by ``order`` that the host lacks.

    Each synthetic separator gets a position above every host position,
    increasing in the order the slugs first appear in ``order``.
    """

    entries = list(host_entries)
    existing = {entry.slug for entry in entries if entry.slug}
    next_position = max((entry.position for entry in entries), default=0) + 1

    allocated: list[models.MenuEntry] = []
    seen: set[str] = set()
    for slug in order:
        number = separator_number(slug)
        if number is None or number <= native_count:
            continue
        if slug in existing or slug in seen:
            continue
        seen.add(slug)
        allocated.append(
            models.MenuEntry(
                slug=slug,
                required_capability=SEPARATOR_CAPABILITY,
                is_separator=True,
                position=next_position,
            )
        )
        next_position += 1
    return allocated


def next_separator_slug(slugs: Iterable[str], native_count: int = NATIVE_SEPARATOR_COUNT) -> str:
    """Return the first free separator slug after every known separator."""

    highest = native_count
    for slug in slugs:
        number = separator_number(slug)
        if number is not None and number > highest:
            highest = number
    return f"separator{highest + 1}"


__all__ = ["allocate_separators", "is_separator_slug", "next_separator_slug", "separator_number"]
