from __future__ import annotations

from tidy_menu.core.models import ConfigDocument, MenuEntry
from tidy_menu.core.reconciler import find_empty_separators, reconcile


def _entry(slug: str, position: int, **kwargs) -> MenuEntry:
    return MenuEntry(slug=slug, title=kwargs.pop("title", slug.title()), position=position, **kwargs)


def _separator(slug: str, position: int) -> MenuEntry:
    return MenuEntry(slug=slug, required_capability="read", is_separator=True, position=position)


def _slugs(entries) -> list[str]:
    return [entry.slug for entry in entries]


HOST = [_entry("itemA", 1), _entry("itemB", 2), _entry("itemC", 3)]


def test_saved_order_comes_first_then_remaining_host_entries() -> None:
    result = reconcile(HOST, ConfigDocument(order=["itemB", "itemA"]))

    assert _slugs(result) == ["itemB", "itemA", "itemC"]


def test_stale_slug_is_ignored() -> None:
    result = reconcile(HOST, ConfigDocument(order=["itemZ", "itemB"], hidden=["itemZ"]))

    assert _slugs(result) == ["itemB", "itemA", "itemC"]
    assert not any(entry.hidden for entry in result)


def test_missing_config_keeps_host_order() -> None:
    shuffled = [_entry("itemC", 3), _entry("itemA", 1), _entry("itemB", 2)]

    assert _slugs(reconcile(shuffled, None)) == ["itemA", "itemB", "itemC"]


def test_entries_without_slug_never_appear() -> None:
    host = [MenuEntry(slug="", title="Options", position=0), *HOST]

    result = reconcile(host, ConfigDocument(order=["", "itemC"], hidden=[""]))

    assert _slugs(result) == ["itemC", "itemA", "itemB"]


def test_duplicate_order_entries_keep_first_occurrence() -> None:
    result = reconcile(HOST, ConfigDocument(order=["itemC", "itemA", "itemC"]))

    assert _slugs(result) == ["itemC", "itemA", "itemB"]


def test_duplicate_host_slugs_keep_lowest_position() -> None:
    host = [_entry("itemA", 5, title="late"), _entry("itemA", 1, title="early"), _entry("itemB", 2)]

    result = reconcile(host, ConfigDocument())

    assert _slugs(result) == ["itemA", "itemB"]
    assert result[0].title == "early"


def test_user_separators_are_synthesized() -> None:
    host = [_entry("itemA", 1), _separator("separator1", 4), _entry("itemB", 10)]

    result = reconcile(host, ConfigDocument(order=["separator3", "itemA", "separator1", "itemB"]))

    assert _slugs(result) == ["separator3", "itemA", "separator1", "itemB"]
    synthesized = result[0]
    assert synthesized.is_separator is True
    assert synthesized.position == 11


def test_missing_native_separator_is_not_synthesized() -> None:
    result = reconcile(HOST, ConfigDocument(order=["separator2", "itemC"]))

    assert _slugs(result) == ["itemC", "itemA", "itemB"]


def test_hidden_flag_applies_to_items_only() -> None:
    host = [*HOST, _separator("separator1", 4)]

    result = reconcile(host, ConfigDocument(hidden=["itemB", "separator1"]))

    flags = {entry.slug: entry.hidden for entry in result}
    assert flags == {"itemA": False, "itemB": True, "itemC": False, "separator1": False}


def test_show_all_clears_every_hidden_flag() -> None:
    result = reconcile(HOST, ConfigDocument(hidden=["itemA", "itemB", "itemC"]), show_all=True)

    assert not any(entry.hidden for entry in result)


def test_reconcile_is_idempotent_on_its_own_order() -> None:
    host = [_entry("itemA", 1), _separator("separator1", 4), _entry("itemB", 10), _entry("itemC", 12)]
    config = ConfigDocument(order=["itemC", "separator5", "itemA"], hidden=["itemA"])

    first = reconcile(host, config)
    second = reconcile(host, ConfigDocument(order=_slugs(first), hidden=config.hidden))

    assert _slugs(second) == _slugs(first)
    assert [entry.hidden for entry in second] == [entry.hidden for entry in first]


def test_every_host_slug_appears_exactly_once() -> None:
    host = [*HOST, _separator("separator1", 4), _entry("itemD", 7)]

    result = reconcile(host, ConfigDocument(order=["itemD", "itemD", "itemA", "ghost"]))

    assert sorted(_slugs(result)) == sorted(entry.slug for entry in host)


def test_hidden_set_does_not_change_order() -> None:
    order = ["itemC", "itemA"]

    visible = reconcile(HOST, ConfigDocument(order=order))
    hidden = reconcile(HOST, ConfigDocument(order=order, hidden=["itemA", "itemB"]))

    assert _slugs(visible) == _slugs(hidden)


def test_host_list_is_not_mutated() -> None:
    host = list(HOST)

    reconcile(host, ConfigDocument(order=["separator4", "itemC"]))

    assert host == HOST


def test_empty_separator_before_hidden_items() -> None:
    host = [_entry("itemA", 1), _entry("itemB", 2)]
    config = ConfigDocument(order=["separator3", "itemA", "separator4", "itemB"], hidden=["itemA"])

    entries = reconcile(host, config)

    assert find_empty_separators(entries) == ["separator3"]


def test_trailing_separator_is_empty() -> None:
    entries = reconcile([_entry("itemA", 1), _separator("separator1", 2)], ConfigDocument())

    assert find_empty_separators(entries) == ["separator1"]


def test_separator_followed_only_by_hidden_items_is_empty() -> None:
    host = [
        _entry("itemA", 1),
        _separator("separator1", 2),
        _entry("itemB", 3),
        _separator("separator2", 4),
        _entry("itemC", 5),
    ]

    entries = reconcile(host, ConfigDocument(hidden=["itemB"]))

    assert find_empty_separators(entries) == ["separator1"]


def test_show_all_marks_no_separator_empty() -> None:
    host = [_separator("separator1", 1), _entry("itemA", 2)]

    entries = reconcile(host, ConfigDocument(hidden=["itemA"]), show_all=True)

    assert find_empty_separators(entries, show_all=True) == []


def test_synthesized_separator_sits_above_unmanageable_entries() -> None:
    host = [_entry("itemA", 1), MenuEntry(slug="", title="Site Options", position=99)]

    result = reconcile(host, ConfigDocument(order=["separator3", "itemA"]))

    assert _slugs(result) == ["separator3", "itemA"]
    assert result[0].position == 100


def test_synthesized_separator_sits_above_duplicate_host_entries() -> None:
    host = [_entry("itemA", 1), _entry("itemA", 50)]

    result = reconcile(host, ConfigDocument(order=["separator3"]))

    assert result[0].slug == "separator3"
    assert result[0].position == 51
