from pathlib import Path

from PySide6.QtCore import QByteArray, QSettings

from .utils import get_user_data_dir, get_user_data_path

PLAYER_BINARY_KEY = "player/binary"
LANGUAGE_KEY = "player/language"
SEARCH_LIMIT_KEY = "search/limit"
LOG_LEVEL_KEY = "logging/level"
CATALOG_DIR_KEY = "catalog/directory"
LAST_PLAYLIST_KEY = "catalog/last_playlist"
WINDOW_GEOMETRY_KEY = "window/geometry"

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


def _to_int(value, default: int, min_value: int | None = None, max_value: int | None = None) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        number = int(default)
    if min_value is not None:
        number = max(min_value, number)
    if max_value is not None:
        number = min(max_value, number)
    return number


def _to_choice(value, default: str, allowed: set[str]) -> str:
    token = str(value or "").strip().upper()
    if token in allowed:
        return token
    return default


def get_settings() -> QSettings:
    """Returns a QSettings object pointing to a visible .ini file."""
    path = get_user_data_path("settings.ini")
    return QSettings(path, QSettings.IniFormat)


def load_player_binary(default: str = "mpv") -> str:
    value = get_settings().value(PLAYER_BINARY_KEY, default)
    return str(value or "").strip() or default


def load_search_limit(default: int = 50) -> int:
    return _to_int(get_settings().value(SEARCH_LIMIT_KEY, default), default, 1, 500)


def load_log_level(default: str = "INFO") -> str:
    return _to_choice(get_settings().value(LOG_LEVEL_KEY, default), default, LOG_LEVELS)


def load_language_setting(default: str = "") -> str:
    return str(get_settings().value(LANGUAGE_KEY, default) or "")


def load_catalog_directory() -> Path:
    value = str(get_settings().value(CATALOG_DIR_KEY, "") or "").strip()
    if value:
        return Path(value).expanduser()
    return get_user_data_dir()


def load_last_playlist(default: str = "") -> str:
    return str(get_settings().value(LAST_PLAYLIST_KEY, default) or "")


def save_last_playlist(name: str) -> None:
    settings = get_settings()
    settings.setValue(LAST_PLAYLIST_KEY, str(name or ""))
    settings.sync()


def load_window_geometry():
    value = get_settings().value(WINDOW_GEOMETRY_KEY)
    if isinstance(value, QByteArray) and not value.isEmpty():
        return value
    return None


def save_window_geometry(geometry: QByteArray) -> None:
    settings = get_settings()
    settings.setValue(WINDOW_GEOMETRY_KEY, geometry)
    settings.sync()
