import logging
from typing import Iterator, Optional

import yt_dlp

from .utils import playlist_url

DEFAULT_SEARCH_LIMIT = 50


def _build_ytdlp_opts(extra: Optional[dict] = None) -> dict:
    opts = {
        "quiet": True,
        "no_warnings": True,
        "skip_download": True,
        "extract_flat": "in_playlist",
        "noplaylist": False,
    }
    if extra:
        opts.update(extra)
    return opts


def _iter_video_entries(entries) -> Iterator[dict]:
    if not entries:
        return
    for item in entries:
        if not isinstance(item, dict):
            continue
        video_id = str(item.get("id") or "").strip()
        if not video_id:
            continue
        title = str(item.get("title") or "").strip() or video_id
        yield {"id": video_id, "title": title}


class YoutubeService:
    """Remote video-platform client backed by yt-dlp.

    Every call runs synchronously and may block on the network; callers run
    it from a worker thread. Entries are produced lazily in provider order.
    """

    def __init__(self, search_limit: int = DEFAULT_SEARCH_LIMIT, ydl_factory=None):
        self.search_limit = max(1, int(search_limit))
        self._ydl_factory = ydl_factory or yt_dlp.YoutubeDL

    @staticmethod
    def _extract(ydl, url: str) -> dict:
        info = ydl.extract_info(url, download=False, process=False)
        if not isinstance(info, dict):
            raise ValueError("invalid yt-dlp response")
        return info

    def _stream_entries(self, url: str) -> Iterator[dict]:
        # Entries are fetched page by page, so the downloader stays open
        # until the caller stops iterating.
        with self._ydl_factory(_build_ytdlp_opts()) as ydl:
            info = self._extract(ydl, url)
            yield from _iter_video_entries(info.get("entries"))

    def get_playlist_metadata(self, url: str) -> dict:
        with self._ydl_factory(_build_ytdlp_opts()) as ydl:
            info = self._extract(ydl, url)
        playlist_id = str(info.get("id") or "").strip()
        if not playlist_id:
            raise ValueError(f"no playlist id for {url}")
        logging.debug("Playlist metadata: url=%s id=%s", url, playlist_id)
        return {"id": playlist_id, "title": info.get("title")}

    def stream_playlist_videos(self, playlist_id: str) -> Iterator[dict]:
        return self._stream_entries(playlist_url(playlist_id))

    def stream_search_results(self, term: str) -> Iterator[dict]:
        return self._stream_entries(f"ytsearch{self.search_limit}:{term}")
