from __future__ import annotations

from tidy_menu.core.models import MenuEntry
from tidy_menu.core.separators import allocate_separators, next_separator_slug, separator_number


def test_separator_number_parsing() -> None:
    assert separator_number("separator12") == 12
    assert separator_number("separator1") == 1
    assert separator_number("separator0") is None
    assert separator_number("separatorX") is None
    assert separator_number("index.php") is None
    assert separator_number(None) is None  # type: ignore[arg-type]


def test_allocate_places_new_separators_after_host_positions() -> None:
    host = [
        MenuEntry(slug="index.php", position=2),
        MenuEntry(slug="options-general.php", position=80),
    ]

    allocated = allocate_separators(
        ["separator5", "separator3", "separator5", "separator1", "index.php"],
        host,
    )

    assert [entry.slug for entry in allocated] == ["separator5", "separator3"]
    assert [entry.position for entry in allocated] == [81, 82]
    assert all(entry.is_separator for entry in allocated)


def test_allocate_skips_separators_the_host_already_has() -> None:
    host = [MenuEntry(slug="separator3", is_separator=True, position=40)]

    assert allocate_separators(["separator3", "separator4"], host)[0].slug == "separator4"


def test_allocate_with_empty_host() -> None:
    allocated = allocate_separators(["separator3"], [])

    assert allocated[0].position == 1


def test_next_separator_slug() -> None:
    assert next_separator_slug([]) == "separator3"
    assert next_separator_slug(["separator1", "separator2", "index.php"]) == "separator3"
    assert next_separator_slug(["separator7", "separator4"]) == "separator8"
