import logging
import os
import shutil
import subprocess
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .track_index import Track
from .utils import is_stream_url

DEFAULT_PLAYER_BINARY = "mpv"
KILL_WAIT_SECONDS = 2.0


class PlaybackLaunchError(RuntimeError):
    """The external player could not be started."""


@dataclass
class PlaybackSession:
    locator: str
    title: str
    process: Any

    def is_alive(self) -> bool:
        return self.process is not None and self.process.poll() is None

    def terminate(self) -> None:
        if not self.is_alive():
            return
        logging.info("Stopping player: pid=%s title=%s", getattr(self.process, "pid", "?"), self.title)
        self.process.kill()
        try:
            self.process.wait(timeout=KILL_WAIT_SECONDS)
        except subprocess.TimeoutExpired:
            logging.warning("Player did not exit after kill: pid=%s", getattr(self.process, "pid", "?"))


class ProcessSlot:
    """Holds at most one playback session; replacing it kills the old one."""

    def __init__(self):
        self._session: Optional[PlaybackSession] = None

    @property
    def session(self) -> Optional[PlaybackSession]:
        return self._session

    def release(self) -> Optional[PlaybackSession]:
        old = self._session
        self._session = None
        if old is not None:
            old.terminate()
        return old

    def replace(self, start: Callable[[], PlaybackSession]) -> Optional[PlaybackSession]:
        # The old session is gone before the new one is started, so a launch
        # failure leaves the slot empty.
        old = self.release()
        self._session = start()
        return old


def build_player_command(binary: str, locator: str) -> list[str]:
    cmd = [binary]
    if is_stream_url(locator):
        cmd.append("--ytdl=yes")
    cmd.extend(["--osc=yes", "--force-window=yes", "--loop=inf", "--", locator])
    return cmd


class PlaybackDispatcher:
    def __init__(self, player_binary: str = DEFAULT_PLAYER_BINARY, popen=None, which=None):
        self.player_binary = player_binary or DEFAULT_PLAYER_BINARY
        self._popen = popen or subprocess.Popen
        self._which = which or shutil.which
        self._slot = ProcessSlot()
        self._lock = threading.Lock()

    @property
    def current(self) -> Optional[PlaybackSession]:
        return self._slot.session

    def _launch(self, track: Track) -> PlaybackSession:
        exe = self._which(self.player_binary)
        if not exe:
            raise PlaybackLaunchError(f"player not found: {self.player_binary}")
        cmd = build_player_command(exe, track.locator)
        run_kwargs = {}
        if os.name == "nt":
            flags = getattr(subprocess, "CREATE_NO_WINDOW", 0)
            if flags:
                run_kwargs["creationflags"] = flags
        try:
            process = self._popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                **run_kwargs,
            )
        except (OSError, ValueError) as e:
            raise PlaybackLaunchError(f"could not start {self.player_binary}: {e}") from e
        logging.info("Player started: pid=%s locator=%s", getattr(process, "pid", "?"), track.locator)
        return PlaybackSession(locator=track.locator, title=track.title, process=process)

    def play(self, track: Track) -> PlaybackSession:
        with self._lock:
            self._slot.replace(lambda: self._launch(track))
            return self._slot.session

    def stop(self) -> None:
        with self._lock:
            self._slot.release()

    def shutdown(self) -> None:
        try:
            self.stop()
        except Exception:
            logging.exception("Player cleanup failed")
