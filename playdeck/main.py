import atexit
import logging
import os
import shutil
import signal
import subprocess
import sys
import threading

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QApplication

from .app_logging import setup_app_logging
from .catalog import PlaylistCatalog, default_config_sources
from .i18n import setup_i18n
from .playback import PlaybackDispatcher
from .remote import YoutubeService
from .resolver import SourceResolver
from .session import BrowserSession
from .settings import (
    load_catalog_directory,
    load_log_level,
    load_player_binary,
    load_search_limit,
)


def _probe_tool_version(binary_name: str) -> str:
    exe = shutil.which(binary_name)
    if not exe:
        return "not found"
    try:
        run_kwargs = {}
        if os.name == "nt":
            flags = getattr(subprocess, "CREATE_NO_WINDOW", 0)
            if flags:
                run_kwargs["creationflags"] = flags
        proc = subprocess.run(
            [exe, "--version"],
            capture_output=True,
            text=True,
            timeout=3,
            check=False,
            **run_kwargs,
        )
        raw = (proc.stdout or proc.stderr or "").splitlines()
        first_line = raw[0].strip() if raw else ""
        return f"{exe} ({first_line or 'version unknown'})"
    except (OSError, subprocess.SubprocessError) as e:
        return f"{exe} (version probe failed: {e})"


def _log_runtime_tool_diagnostics(player_binary: str) -> None:
    import yt_dlp

    logging.info("Runtime yt-dlp (python package)=%s", getattr(yt_dlp.version, "__version__", "unknown"))
    logging.info("Runtime player %s=%s", player_binary, _probe_tool_version(player_binary))


def build_session() -> BrowserSession:
    catalog_dir = load_catalog_directory()
    catalog = PlaylistCatalog.load(default_config_sources(catalog_dir))
    logging.info("Playlist catalog ready: dir=%s entries=%d", catalog_dir, len(catalog))
    resolver = SourceResolver(YoutubeService(search_limit=load_search_limit()))
    dispatcher = PlaybackDispatcher(player_binary=load_player_binary())
    return BrowserSession(catalog, resolver, dispatcher)


def install_quit_signals(app) -> QTimer:
    """Route SIGINT and SIGTERM through a normal Qt quit so aboutToQuit runs.

    Python only runs signal handlers between bytecodes, so a periodic no-op
    timer wakes the interpreter while the Qt event loop is idle.
    """

    def _request_quit(signum, _frame):
        logging.info("Signal received, quitting: signum=%s", signum)
        app.quit()

    for signum in (signal.SIGINT, signal.SIGTERM):
        signal.signal(signum, _request_quit)

    wakeup = QTimer(app)
    wakeup.setInterval(200)
    wakeup.timeout.connect(lambda: None)
    wakeup.start()
    return wakeup


def run() -> int:
    setup_app_logging(load_log_level())
    setup_i18n()

    session = build_session()
    _log_runtime_tool_diagnostics(session.dispatcher.player_binary)
    atexit.register(session.shutdown)

    # Deferred: the window module pulls in the whole widget stack.
    from .player_window import PlaylistBrowserWindow

    app = QApplication(sys.argv)
    app.setQuitOnLastWindowClosed(True)

    window = PlaylistBrowserWindow(session)
    app.aboutToQuit.connect(window.shutdown)

    def _quit_watchdog() -> None:
        killer = threading.Timer(3.0, lambda: os._exit(0))
        killer.daemon = True
        killer.start()

    app.aboutToQuit.connect(_quit_watchdog)
    install_quit_signals(app)

    window.show()
    window.start()

    exit_code = app.exec()

    if window.has_running_workers():
        # A resolve can sit on the network indefinitely; do not wait for it.
        logging.warning("Forcing process exit with resolve workers still running")
        session.shutdown()
        logging.shutdown()
        os._exit(int(exit_code))

    return int(exit_code)


if __name__ == "__main__":
    raise SystemExit(run())
