import logging
from pathlib import Path

from .sources import LocalDirectory, RemotePlaylist, SearchSentinel, SourceDescriptor, Unresolvable
from .track_index import Track
from .utils import is_supported_audio_file, watch_url


def scan_local_directory(path: str) -> list[Track]:
    folder = Path(path)
    tracks = [
        Track(title=item.name, locator=str(item))
        for item in folder.iterdir()
        if item.is_file() and is_supported_audio_file(item)
    ]
    tracks.sort()
    return tracks


def _tracks_from_videos(videos) -> list[Track]:
    return [Track(title=str(video["title"]), locator=watch_url(video["id"])) for video in videos]


class SourceResolver:
    """Turns a playlist source into an ordered track list.

    Both entry points block on I/O and never raise: any failure is logged
    and produces an empty list.
    """

    def __init__(self, service):
        self.service = service

    def resolve(self, source: SourceDescriptor) -> list[Track]:
        if isinstance(source, SearchSentinel):
            return []
        if isinstance(source, LocalDirectory):
            try:
                tracks = scan_local_directory(source.path)
            except OSError as e:
                logging.warning("Local playlist scan failed: path=%s err=%s", source.path, e)
                return []
            logging.info("Local playlist resolved: path=%s items=%d", source.path, len(tracks))
            return tracks
        if isinstance(source, RemotePlaylist):
            try:
                metadata = self.service.get_playlist_metadata(source.url)
                tracks = _tracks_from_videos(self.service.stream_playlist_videos(metadata["id"]))
            except Exception as e:
                logging.exception("Remote playlist resolve failed: url=%s err=%s", source.url, e)
                return []
            logging.info("Remote playlist resolved: url=%s items=%d", source.url, len(tracks))
            return tracks
        if isinstance(source, Unresolvable):
            logging.warning("Playlist source is neither a directory nor a known remote: %r", source.raw)
            return []
        raise TypeError(f"unknown playlist source: {source!r}")

    def search(self, term: str) -> list[Track]:
        query = (term or "").strip()
        if not query:
            logging.debug("Blank search term, nothing to do")
            return []
        try:
            tracks = _tracks_from_videos(self.service.stream_search_results(query))
        except Exception as e:
            logging.exception("Search failed: term=%s err=%s", query, e)
            return []
        logging.info("Search finished: term=%s items=%d", query, len(tracks))
        return tracks
