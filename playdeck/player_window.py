import logging

from PySide6.QtCore import QTimer
from PySide6.QtGui import QIcon
from PySide6.QtWidgets import (
    QComboBox,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QVBoxLayout,
    QWidget,
)

from .i18n import tr
from .playback import PlaybackLaunchError
from .session import BrowserSession, REQUEST_SEARCH
from .settings import (
    load_last_playlist,
    load_window_geometry,
    save_last_playlist,
    save_window_geometry,
)
from .ui.icons import get_app_icon, icon_search
from .ui.styles import WINDOW_STYLE
from .ui.widgets import TrackListView, TrackRowModel
from .workers import ResolveWorker

FILTER_DEBOUNCE_MS = 120
WORKER_STOP_WAIT_MS = 250


class PlaylistBrowserWindow(QMainWindow):
    def __init__(self, session: BrowserSession):
        super().__init__()
        self.session = session
        self._workers: set[ResolveWorker] = set()
        self._is_shutting_down = False

        self.setWindowTitle(tr("Playdeck"))
        self.setWindowIcon(get_app_icon())
        self.resize(560, 720)

        panel = QWidget(self)
        panel.setObjectName("BrowserPanel")
        panel.setStyleSheet(WINDOW_STYLE)
        layout = QVBoxLayout(panel)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(8)

        self.combo_playlists = QComboBox(panel)
        self.combo_playlists.setToolTip(tr("Playlist"))
        self.combo_playlists.addItems(self.session.catalog.names())
        layout.addWidget(self.combo_playlists)

        self.entry_filter = QLineEdit(panel)
        self.entry_filter.setClearButtonEnabled(True)
        self.entry_filter.addAction(QIcon(icon_search()), QLineEdit.LeadingPosition)
        layout.addWidget(self.entry_filter)

        self.track_model = TrackRowModel(self)
        self.list_tracks = TrackListView(panel)
        self.list_tracks.setModel(self.track_model)
        layout.addWidget(self.list_tracks, 1)

        self.label_status = QLabel(panel)
        self.label_status.setObjectName("StatusLine")
        layout.addWidget(self.label_status)

        self.label_track = QLabel(tr("Nothing playing"), panel)
        self.label_track.setObjectName("NowPlaying")
        self.label_track.setWordWrap(True)
        layout.addWidget(self.label_track)

        self.setCentralWidget(panel)

        self._filter_debounce_timer = QTimer(self)
        self._filter_debounce_timer.setSingleShot(True)
        self._filter_debounce_timer.setInterval(FILTER_DEBOUNCE_MS)
        self._filter_debounce_timer.timeout.connect(self.apply_filter)

        self.combo_playlists.currentTextChanged.connect(self.select_playlist)
        self.entry_filter.textEdited.connect(self.on_filter_edited)
        self.entry_filter.returnPressed.connect(self.on_filter_committed)
        self.list_tracks.activated_row.connect(self.play_row)

        geometry = load_window_geometry()
        if geometry is not None:
            self.restoreGeometry(geometry)

    def start(self):
        """Select the remembered playlist, or the first one."""
        last = load_last_playlist("")
        if last and last in self.session.catalog and last != self.combo_playlists.currentText():
            self.combo_playlists.setCurrentText(last)
        else:
            self.select_playlist(self.combo_playlists.currentText())

    # ----------------------------
    # Playlist / search loading
    # ----------------------------

    def select_playlist(self, name: str):
        request = self.session.select_playlist(name)
        if request is None:
            return
        save_last_playlist(name)
        self._filter_debounce_timer.stop()
        self.entry_filter.clear()
        self.entry_filter.setPlaceholderText(
            tr("Search YouTube and press Enter") if self.session.search_mode else tr("Filter tracks")
        )
        self.refresh_rows()
        if self.session.search_mode:
            # Nothing to resolve until a search is committed.
            return
        self._start_worker(request)

    def _start_worker(self, request):
        self.label_status.setText(tr("Searching...") if request.kind == REQUEST_SEARCH else tr("Loading..."))
        worker = ResolveWorker(self.session.resolver, request)
        worker.finished_tracks.connect(self._on_worker_finished)
        worker.finished.connect(lambda: self._forget_worker(worker))
        self._workers.add(worker)
        worker.start()

    def _forget_worker(self, worker):
        self._workers.discard(worker)
        worker.deleteLater()

    def _on_worker_finished(self, token, tracks):
        if self._is_shutting_down:
            return
        if not self.session.commit(token, tracks):
            return
        self.refresh_rows()

    # ----------------------------
    # Filter / search input
    # ----------------------------

    def on_filter_edited(self, _text: str):
        if self.session.search_mode:
            return
        # Filter from the first character; only debounce to keep typing smooth.
        self._filter_debounce_timer.start()

    def on_filter_committed(self):
        self._filter_debounce_timer.stop()
        result = self.session.on_text_committed(self.entry_filter.text())
        if result is None:
            return
        if isinstance(result, list):
            self._show_rows(result)
        else:
            self.track_model.set_rows([])
            self._start_worker(result)

    def apply_filter(self):
        rows = self.session.on_text_edited(self.entry_filter.text())
        if rows is not None:
            self._show_rows(rows)

    def refresh_rows(self):
        # Text typed while the list was loading still applies.
        self._show_rows(self.session.visible_rows(self.entry_filter.text()))

    def _show_rows(self, rows):
        self.track_model.set_rows(rows)
        total = len(self.session.index)
        if len(rows) == total:
            self.label_status.setText(tr("{} tracks", total))
        else:
            self.label_status.setText(tr("{} of {} tracks", len(rows), total))

    # ----------------------------
    # Playback
    # ----------------------------

    def play_row(self, row_text: str):
        try:
            track = self.session.play_row(row_text)
        except PlaybackLaunchError as e:
            logging.error("Playback launch failed: row=%s err=%s", row_text, e)
            self.label_track.setText(tr("Nothing playing"))
            QMessageBox.warning(self, tr("Playback failed"), tr("Could not start the player: {}", e))
            return
        if track is None:
            return
        self.label_track.setText(tr("Now playing: {}", track.title))

    def has_running_workers(self) -> bool:
        return any(worker.isRunning() for worker in self._workers)

    def shutdown(self):
        if self._is_shutting_down:
            return
        self._is_shutting_down = True
        self._filter_debounce_timer.stop()
        for worker in list(self._workers):
            worker.requestInterruption()
            worker.wait(WORKER_STOP_WAIT_MS)
        self.session.shutdown()

    def closeEvent(self, event):
        try:
            save_window_geometry(self.saveGeometry())
        except Exception as e:
            logging.debug("Window geometry not saved: %s", e)
        self.shutdown()
        super().closeEvent(event)
