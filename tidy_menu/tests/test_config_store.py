from __future__ import annotations

from pathlib import Path

from tidy_menu.core import db
from tidy_menu.core.models import ConfigDocument, PluginSettings
from tidy_menu.core.scopes import ScopeKey
from tidy_menu.services.config_store import ConfigStore, key_for_scope
from tidy_menu.services.option_store import SqliteOptionStore


def _init_store(tmp_path: Path, monkeypatch) -> SqliteOptionStore:
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    monkeypatch.setattr(db, "DATA_DIR", data_dir)
    monkeypatch.setattr(db, "OPTIONS_DB_PATH", data_dir / "menu_options.db")
    return SqliteOptionStore()


def test_key_naming_scheme() -> None:
    assert key_for_scope(ScopeKey.global_scope()) == "tidy_menu_global"
    assert key_for_scope(ScopeKey.for_role("editor")) == "tidy_menu_role_editor"
    assert key_for_scope(ScopeKey.for_user(42)) == "tidy_menu_user_42"


def test_save_load_delete_roundtrip(tmp_path, monkeypatch) -> None:
    store = _init_store(tmp_path, monkeypatch)
    configs = ConfigStore(store)
    scope = ScopeKey.for_role("editor")

    assert configs.load(scope) is None

    configs.save(scope, ConfigDocument(order=["index.php", "separator3"], hidden=["upload.php"]), "1")
    loaded = configs.load(scope)
    assert loaded == ConfigDocument(order=["index.php", "separator3"], hidden=["upload.php"])
    assert configs.load(ScopeKey.global_scope()) is None

    configs.delete(scope)
    assert configs.load(scope) is None


def test_corrupted_shapes_degrade_gracefully(tmp_path, monkeypatch) -> None:
    store = _init_store(tmp_path, monkeypatch)
    store.set("tidy_menu_global", {"order": "index.php", "hidden": [1, "upload.php", ""]})

    loaded = ConfigStore(store).load(ScopeKey.global_scope())

    assert loaded == ConfigDocument(order=["index.php"], hidden=["upload.php"])


def test_invalid_json_is_treated_as_absent(tmp_path, monkeypatch) -> None:
    store = _init_store(tmp_path, monkeypatch)
    with db.get_options_connection() as conn:
        conn.execute(
            "INSERT INTO menu_options (key, value, updated_at) VALUES (?, ?, ?)",
            ("tidy_menu_global", "{broken", "2024-01-01T00:00:00+00:00"),
        )

    assert ConfigStore(store).load(ScopeKey.global_scope()) is None


def test_settings_default_and_persist(tmp_path, monkeypatch) -> None:
    store = _init_store(tmp_path, monkeypatch)
    configs = ConfigStore(store, default_apply_to="user")

    assert configs.load_settings() == PluginSettings(apply_to="user", hide_collapse_toggle=False)

    configs.save_settings(PluginSettings(apply_to="role", hide_collapse_toggle=True))
    assert configs.load_settings() == PluginSettings(apply_to="role", hide_collapse_toggle=True)


def test_unknown_stored_apply_to_falls_back_to_all(tmp_path, monkeypatch) -> None:
    store = _init_store(tmp_path, monkeypatch)
    store.set("tidy_menu_settings", {"apply_to": "everyone", "hide_collapse_menu": True})

    settings = ConfigStore(store).load_settings()

    assert settings.apply_to == "all"
    assert settings.hide_collapse_toggle is True


def test_purge_removes_every_scope_only(tmp_path, monkeypatch) -> None:
    store = _init_store(tmp_path, monkeypatch)
    configs = ConfigStore(store)
    configs.save(ScopeKey.global_scope(), ConfigDocument(order=["a"]))
    configs.save(ScopeKey.for_role("editor"), ConfigDocument(order=["b"]))
    configs.save(ScopeKey.for_user(3), ConfigDocument(order=["c"]))
    configs.save_settings(PluginSettings(apply_to="user"))
    store.set("tidy_menuXother", {"keep": True})
    store.set("another_plugin", {"keep": True})

    removed = configs.purge()

    assert removed == 4
    assert store.keys() == ["another_plugin", "tidy_menuXother"]
