import logging
import threading
from dataclasses import dataclass
from typing import Optional, Union

from .catalog import PlaylistCatalog
from .playback import PlaybackDispatcher, PlaybackLaunchError
from .resolver import SourceResolver
from .sources import SearchSentinel, SourceDescriptor
from .track_index import DisplayRow, SelectionMapper, Track, TrackIndex

REQUEST_PLAYLIST = "playlist"
REQUEST_SEARCH = "search"


class RequestSequencer:
    """Hands out increasing tokens; only the newest one may commit."""

    def __init__(self):
        self._latest = 0
        self._lock = threading.Lock()

    @property
    def latest(self) -> int:
        return self._latest

    def issue(self) -> int:
        with self._lock:
            self._latest += 1
            return self._latest

    def is_current(self, token: int) -> bool:
        return token == self._latest


@dataclass(frozen=True)
class ResolveRequest:
    token: int
    kind: str
    payload: Union[SourceDescriptor, str]

    def run(self, resolver: SourceResolver) -> list[Track]:
        if self.kind == REQUEST_SEARCH:
            return resolver.search(self.payload)
        return resolver.resolve(self.payload)


class BrowserSession:
    """Everything the window does, minus the widgets.

    The window forwards user events here and renders whatever rows come
    back. Resolution runs elsewhere; results come back through ``commit``.
    """

    def __init__(self, catalog: PlaylistCatalog, resolver: SourceResolver, dispatcher: PlaybackDispatcher):
        self.catalog = catalog
        self.resolver = resolver
        self.dispatcher = dispatcher
        self.index = TrackIndex()
        self.mapper = SelectionMapper(self.index)
        self.sequencer = RequestSequencer()
        self.active_name = ""
        self.active_source: Optional[SourceDescriptor] = None
        self.now_playing = ""

    @property
    def search_mode(self) -> bool:
        return isinstance(self.active_source, SearchSentinel)

    def select_playlist(self, name: str) -> Optional[ResolveRequest]:
        source = self.catalog.get(name)
        if source is None:
            logging.debug("Unknown playlist selected: %s", name)
            return None
        self.active_name = name
        self.active_source = source
        self.index.set_tracks([])
        request = ResolveRequest(self.sequencer.issue(), REQUEST_PLAYLIST, source)
        logging.info("Playlist selected: name=%s token=%d", name, request.token)
        return request

    def submit_search(self, term: str) -> Optional[ResolveRequest]:
        if not self.search_mode:
            return None
        request = ResolveRequest(self.sequencer.issue(), REQUEST_SEARCH, term or "")
        logging.info("Search submitted: term=%s token=%d", term, request.token)
        return request

    def commit(self, token: int, tracks: list[Track]) -> bool:
        if not self.sequencer.is_current(token):
            logging.debug("Discarding stale result: token=%d latest=%d", token, self.sequencer.latest)
            return False
        self.index.set_tracks(tracks)
        return True

    def load(self, request: Optional[ResolveRequest]) -> bool:
        """Resolve a request on the calling thread and commit it."""
        if request is None:
            return False
        return self.commit(request.token, request.run(self.resolver))

    def on_text_edited(self, text: str) -> Optional[list[DisplayRow]]:
        if self.search_mode:
            return None
        return self.index.filter(text)

    def on_text_committed(self, text: str) -> Union[ResolveRequest, list[DisplayRow], None]:
        if self.search_mode:
            return self.submit_search(text)
        return self.index.filter(text)

    def rows(self) -> list[DisplayRow]:
        return self.index.rows()

    def visible_rows(self, text: str) -> list[DisplayRow]:
        """Rows for the current entry text; a fresh list starts unfiltered."""
        if self.search_mode:
            return self.index.rows()
        return self.index.filter(text)

    def play_row(self, row_text: str) -> Optional[Track]:
        track = self.mapper.resolve(row_text)
        if track is None:
            return None
        try:
            self.dispatcher.play(track)
        except PlaybackLaunchError:
            # The previous player is already gone.
            self.now_playing = ""
            raise
        self.now_playing = track.title
        return track

    def shutdown(self) -> None:
        self.dispatcher.shutdown()
