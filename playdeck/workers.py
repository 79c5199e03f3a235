import logging

from PySide6.QtCore import QThread, Signal

from .resolver import SourceResolver
from .session import ResolveRequest


class ResolveWorker(QThread):
    """Runs one playlist or search request off the UI thread.

    Always emits ``finished_tracks`` exactly once, with an empty list if the
    request blew up, so the receiver can tell the request is done.
    """

    finished_tracks = Signal(int, list)

    def __init__(self, resolver: SourceResolver, request: ResolveRequest, parent=None):
        super().__init__(parent)
        self.resolver = resolver
        self.request = request

    def run(self):
        tracks = []
        logging.debug("Resolve worker started: token=%d kind=%s", self.request.token, self.request.kind)
        try:
            tracks = self.request.run(self.resolver)
        except Exception:
            logging.exception("Resolve worker crashed: token=%d", self.request.token)
            tracks = []
        finally:
            logging.debug("Resolve worker finished: token=%d items=%d", self.request.token, len(tracks))
            self.finished_tracks.emit(self.request.token, tracks)
