import os
import sys
from pathlib import Path
from urllib.parse import urlparse

SUPPORTED_AUDIO_EXTENSIONS = (
    ".mp3",
    ".flac",
    ".wav",
    ".ogg",
    ".m4a",
)
SUPPORTED_AUDIO_EXTENSION_SET = set(SUPPORTED_AUDIO_EXTENSIONS)

REMOTE_HOSTS = ("youtube.com", "youtu.be")
WATCH_URL_BASE = "https://www.youtube.com/watch?v="
PLAYLIST_URL_BASE = "https://www.youtube.com/playlist?list="

HOME_ENV_VAR = "PLAYDECK_HOME"


def get_resource_path(relative_path: str) -> Path:
    """Get absolute path to resource, works for dev and for PyInstaller."""
    if getattr(sys, "frozen", False):
        base_path = Path(sys._MEIPASS)
    else:
        base_path = Path(__file__).parent
    return base_path / relative_path


def get_user_data_dir() -> Path:
    """Get writable base directory for app-managed user files."""
    override = os.getenv(HOME_ENV_VAR)
    if override:
        base = Path(override).expanduser()
        base.mkdir(parents=True, exist_ok=True)
        return base
    if getattr(sys, "frozen", False):
        # Installed builds keep playlist files beside the executable.
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parent.parent


def get_user_data_path(filename: str) -> str:
    """Get path for writable user data (settings, logs, playlist files)."""
    return str(get_user_data_dir() / filename)


def is_stream_url(value: str) -> bool:
    parsed = urlparse(str(value or ""))
    return bool(parsed.scheme and parsed.netloc)


def is_remote_playlist_source(value: str) -> bool:
    text = str(value or "")
    return any(host in text for host in REMOTE_HOSTS)


def is_supported_audio_file(path: Path) -> bool:
    return path.suffix.lower() in SUPPORTED_AUDIO_EXTENSION_SET


def watch_url(video_id: str) -> str:
    return f"{WATCH_URL_BASE}{video_id}"


def playlist_url(playlist_id: str) -> str:
    return f"{PLAYLIST_URL_BASE}{playlist_id}"
