"""Registry for menu identifiers, option keys and standard roles."""
from __future__ import annotations

import re

SEPARATOR_PATTERN = re.compile(r"^separator(\d+)$")
NATIVE_SEPARATOR_COUNT = 2
SEPARATOR_CAPABILITY = "read"

ADMIN_ACCESS_CAPABILITY = "read"
MANAGE_CAPABILITY = "manage_options"

OPTION_PREFIX = "tidy_menu"
SETTINGS_KEY = f"{OPTION_PREFIX}_settings"
GLOBAL_KEY = f"{OPTION_PREFIX}_global"
ROLE_KEY_PREFIX = f"{OPTION_PREFIX}_role_"
USER_KEY_PREFIX = f"{OPTION_PREFIX}_user_"

SUPER_ADMIN_ROLE = "super_admin"

# Ordre canonique, du plus privilégié au moins privilégié.
STANDARD_ROLES: dict[str, str] = {
    SUPER_ADMIN_ROLE: "Super Admin",
    "administrator": "Administrator",
    "editor": "Editor",
    "author": "Author",
    "contributor": "Contributor",
    "subscriber": "Subscriber",
}

_SUBSCRIBER_CAPS = {"read"}
_CONTRIBUTOR_CAPS = _SUBSCRIBER_CAPS | {"edit_posts", "delete_posts"}
_AUTHOR_CAPS = _CONTRIBUTOR_CAPS | {"upload_files", "publish_posts", "edit_published_posts", "delete_published_posts"}
_EDITOR_CAPS = _AUTHOR_CAPS | {
    "moderate_comments",
    "manage_categories",
    "edit_pages",
    "publish_pages",
    "edit_others_posts",
    "delete_others_posts",
}
_ADMINISTRATOR_CAPS = _EDITOR_CAPS | {
    "switch_themes",
    "edit_theme_options",
    "activate_plugins",
    "list_users",
    "edit_users",
    "manage_options",
    "import",
    "export",
}

DEFAULT_ROLES: list[dict[str, object]] = [
    {"slug": "administrator", "name": "Administrator", "permissions": sorted(_ADMINISTRATOR_CAPS), "user_count": 1},
    {"slug": "editor", "name": "Editor", "permissions": sorted(_EDITOR_CAPS), "user_count": 0},
    {"slug": "author", "name": "Author", "permissions": sorted(_AUTHOR_CAPS), "user_count": 0},
    {"slug": "contributor", "name": "Contributor", "permissions": sorted(_CONTRIBUTOR_CAPS), "user_count": 0},
    {"slug": "subscriber", "name": "Subscriber", "permissions": sorted(_SUBSCRIBER_CAPS), "user_count": 0},
]

DEFAULT_MENU_ENTRIES: list[dict[str, object]] = [
    {"slug": "index.php", "title": "Dashboard", "icon": "dashicons-dashboard", "required_capability": "read", "position": 2},
    {"slug": "separator1", "required_capability": "read", "is_separator": True, "position": 4},
    {"slug": "edit.php", "title": "Posts", "icon": "dashicons-admin-post", "required_capability": "edit_posts", "position": 5},
    {"slug": "upload.php", "title": "Media", "icon": "dashicons-admin-media", "required_capability": "upload_files", "position": 10},
    {"slug": "edit.php?post_type=page", "title": "Pages", "icon": "dashicons-admin-page", "required_capability": "edit_pages", "position": 20},
    {"slug": "edit-comments.php", "title": "Comments", "icon": "dashicons-admin-comments", "required_capability": "edit_posts", "position": 25},
    {"slug": "separator2", "required_capability": "read", "is_separator": True, "position": 59},
    {"slug": "themes.php", "title": "Appearance", "icon": "dashicons-admin-appearance", "required_capability": "switch_themes", "position": 60},
    {"slug": "plugins.php", "title": "Plugins", "icon": "dashicons-admin-plugins", "required_capability": "activate_plugins", "position": 65},
    {"slug": "users.php", "title": "Users", "icon": "dashicons-admin-users", "required_capability": "list_users", "position": 70},
    {"slug": "tools.php", "title": "Tools", "icon": "dashicons-admin-tools", "required_capability": "edit_posts", "position": 75},
    {"slug": "options-general.php", "title": "Settings", "icon": "dashicons-admin-settings", "required_capability": "manage_options", "position": 80},
]
