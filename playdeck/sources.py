import os
from dataclasses import dataclass
from typing import Union

from .utils import is_remote_playlist_source


@dataclass(frozen=True)
class LocalDirectory:
    path: str


@dataclass(frozen=True)
class RemotePlaylist:
    url: str


@dataclass(frozen=True)
class SearchSentinel:
    pass


@dataclass(frozen=True)
class Unresolvable:
    raw: str


SourceDescriptor = Union[LocalDirectory, RemotePlaylist, SearchSentinel, Unresolvable]


def classify(raw_source) -> SourceDescriptor:
    """Decide once which kind of playlist source a configured value names.

    An existing directory wins over everything else, then anything that
    mentions a known remote host. Whatever is left cannot produce tracks.
    Search mode is never a configured value; the catalog adds it by name.
    """
    raw = str(raw_source or "")
    if raw and os.path.isdir(raw):
        return LocalDirectory(raw)
    if is_remote_playlist_source(raw):
        return RemotePlaylist(raw.strip())
    return Unresolvable(raw)
