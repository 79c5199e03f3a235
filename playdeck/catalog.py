import json
import logging
from pathlib import Path
from typing import Iterable

from .sources import SearchSentinel, SourceDescriptor, classify

YT_PLAYLISTS_FILE = "playlists_yt.json"
LOCAL_PLAYLISTS_FILE = "playlists_local.json"
YT_PREFIX = "YT - "
LOCAL_PREFIX = "LOCAL - "
SEARCH_ENTRY_NAME = "SEARCH YT"


def default_config_sources(directory: Path) -> list[tuple[Path, str]]:
    return [
        (directory / YT_PLAYLISTS_FILE, YT_PREFIX),
        (directory / LOCAL_PLAYLISTS_FILE, LOCAL_PREFIX),
    ]


def _read_mapping(path: Path) -> dict[str, str]:
    with open(path, "r", encoding="utf-8-sig") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    entries = {}
    for key, value in data.items():
        if not isinstance(value, str):
            logging.warning("Skipping playlist entry with non-string source: file=%s key=%s", path, key)
            continue
        entries[str(key)] = value
    return entries


class PlaylistCatalog:
    """Read-only mapping of display name to playlist source.

    Built once from the configured JSON files. Missing or unreadable files
    contribute nothing; the search entry is always present.
    """

    def __init__(self, entries: dict[str, SourceDescriptor]):
        self._entries = dict(entries)

    @classmethod
    def load(cls, config_sources: Iterable[tuple[Path, str]]) -> "PlaylistCatalog":
        entries: dict[str, SourceDescriptor] = {}
        for file_path, prefix in config_sources:
            path = Path(file_path)
            if not path.is_file():
                logging.debug("Playlist file not found, skipping: %s", path)
                continue
            try:
                mapping = _read_mapping(path)
            except (OSError, ValueError) as e:
                logging.warning("Ignoring unreadable playlist file: file=%s err=%s", path, e)
                continue
            for raw_name, raw_source in mapping.items():
                entries[f"{prefix}{raw_name}"] = classify(raw_source)
            logging.info("Loaded playlist file: file=%s entries=%d", path, len(mapping))

        entries[SEARCH_ENTRY_NAME] = SearchSentinel()
        return cls(entries)

    def names(self) -> list[str]:
        return list(self._entries.keys())

    def get(self, name: str):
        return self._entries.get(name)

    def __getitem__(self, name: str) -> SourceDescriptor:
        return self._entries[name]

    def __contains__(self, name) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)
