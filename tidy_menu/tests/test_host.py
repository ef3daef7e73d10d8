from __future__ import annotations

import json
from types import SimpleNamespace

from tidy_menu.core.host import StaticMenuHost, clean_title, filter_entries_for_role, unmanageable_titles
from tidy_menu.core.models import MenuEntry, Role


def test_clean_title_strips_badges_and_markup() -> None:
    assert clean_title('Comments <span class="awaiting-mod"><span class="pending-count">5</span></span>') == "Comments"
    assert clean_title('Plugins <span class="update-plugins">3</span>') == "Plugins"
    assert clean_title("Site<br/>Options") == "Site Options"
    assert clean_title("<strong>Tools</strong> ") == "Tools"
    assert clean_title("") == ""


def test_filter_entries_for_role() -> None:
    entries = [
        MenuEntry(slug="index.php", required_capability="read"),
        MenuEntry(slug="plugins.php", required_capability="activate_plugins"),
        MenuEntry(slug="custom.php", required_capability=""),
    ]
    role = Role(slug="editor", permissions={"read"})

    assert [entry.slug for entry in filter_entries_for_role(entries, role)] == ["index.php", "custom.php"]
    assert len(filter_entries_for_role(entries, None)) == 3


def test_unmanageable_titles() -> None:
    entries = [
        MenuEntry(slug="", title="Theme Options <span class='badge'>1</span>"),
        MenuEntry(slug="", is_separator=True),
        MenuEntry(slug="", title="<span>2</span>"),
        MenuEntry(slug="index.php", title="Dashboard"),
    ]

    assert unmanageable_titles(entries) == ["Theme Options"]


def test_static_host_lists_role_filtered_entries() -> None:
    host = StaticMenuHost.default()

    everything = [entry.slug for entry in host.list_menu_entries()]
    for_editor = [entry.slug for entry in host.list_menu_entries("editor")]

    assert "plugins.php" in everything
    assert "plugins.php" not in for_editor
    assert "edit.php" in for_editor


def test_static_host_reads_viewer_from_headers() -> None:
    host = StaticMenuHost.default()

    admin = host.current_viewer(SimpleNamespace(headers={"X-Viewer-Id": "3", "X-Viewer-Roles": "editor, administrator"}))
    editor = host.current_viewer(SimpleNamespace(headers={"X-Viewer-Id": "4", "X-Viewer-Roles": "editor"}))

    assert admin is not None and admin.roles == ["editor", "administrator"] and admin.can_manage is True
    assert editor is not None and editor.can_manage is False
    assert host.current_viewer(SimpleNamespace(headers={})) is None
    assert host.current_viewer(SimpleNamespace(headers={"X-Viewer-Id": "abc"})) is None


def test_static_host_from_json_file(tmp_path) -> None:
    path = tmp_path / "host.json"
    path.write_text(
        json.dumps(
            {
                "entries": [
                    {"slug": "index.php", "title": "Dashboard", "position": 1},
                    {"slug": "", "title": "Orphan page", "position": 2},
                ],
                "roles": [{"slug": "administrator", "permissions": ["read", "manage_options"], "user_count": 1}],
            }
        ),
        encoding="utf-8",
    )

    host = StaticMenuHost.from_json_file(path)

    assert [entry.slug for entry in host.list_menu_entries()] == ["index.php", ""]
    assert host.list_unmanageable() == ["Orphan page"]
    assert [role.slug for role in host.list_roles()] == ["administrator"]
