import subprocess

import pytest

from playdeck.playback import (
    PlaybackDispatcher,
    PlaybackLaunchError,
    ProcessSlot,
    PlaybackSession,
    build_player_command,
)
from playdeck.track_index import Track

from conftest import FakeProcess

LOCAL = Track("a.mp3", "/music/a.mp3")
REMOTE = Track("Video", "https://www.youtube.com/watch?v=abc")


def test_command_for_url_requests_stream_resolution():
    assert build_player_command("mpv", REMOTE.locator) == [
        "mpv",
        "--ytdl=yes",
        "--osc=yes",
        "--force-window=yes",
        "--loop=inf",
        "--",
        REMOTE.locator,
    ]


def test_command_for_local_file():
    assert build_player_command("mpv", LOCAL.locator) == [
        "mpv",
        "--osc=yes",
        "--force-window=yes",
        "--loop=inf",
        "--",
        LOCAL.locator,
    ]


def test_play_launches_resolved_binary(dispatcher, fake_popen):
    session = dispatcher.play(LOCAL)

    assert session.title == "a.mp3"
    assert session.locator == LOCAL.locator
    assert fake_popen.processes[0].cmd[0] == "/usr/bin/mpv"
    assert fake_popen.kwargs[0]["stdin"] == subprocess.DEVNULL


def test_second_play_kills_the_first(dispatcher, fake_popen):
    dispatcher.play(LOCAL)
    dispatcher.play(REMOTE)

    first, second = fake_popen.processes
    assert first.killed
    assert fake_popen.alive() == [second]
    assert dispatcher.current.locator == REMOTE.locator


def test_many_plays_leave_one_live_process(dispatcher, fake_popen):
    for i in range(5):
        dispatcher.play(Track(f"t{i}", f"/m/{i}.mp3"))
    assert len(fake_popen.alive()) == 1
    assert fake_popen.alive()[0].cmd[-1] == "/m/4.mp3"


def test_exited_player_is_not_killed_again(dispatcher, fake_popen):
    dispatcher.play(LOCAL)
    fake_popen.processes[0].returncode = 0

    dispatcher.play(REMOTE)

    assert not fake_popen.processes[0].killed


def test_missing_binary_raises(fake_popen):
    dispatcher = PlaybackDispatcher(player_binary="mpv", popen=fake_popen, which=lambda name: None)

    with pytest.raises(PlaybackLaunchError):
        dispatcher.play(LOCAL)
    assert fake_popen.processes == []


def test_popen_failure_raises_and_clears_slot(fake_popen):
    calls = []

    def popen(cmd, **kwargs):
        calls.append(cmd)
        if len(calls) > 1:
            raise FileNotFoundError(cmd[0])
        return fake_popen(cmd, **kwargs)

    dispatcher = PlaybackDispatcher(popen=popen, which=lambda name: name)
    dispatcher.play(LOCAL)

    with pytest.raises(PlaybackLaunchError):
        dispatcher.play(REMOTE)
    assert fake_popen.alive() == []
    assert dispatcher.current is None


def test_shutdown_kills_and_is_idempotent(dispatcher, fake_popen):
    dispatcher.play(LOCAL)

    dispatcher.shutdown()
    dispatcher.shutdown()

    assert fake_popen.alive() == []
    assert dispatcher.current is None


def test_shutdown_without_session(dispatcher):
    dispatcher.shutdown()
    assert dispatcher.current is None


def test_slot_replace_returns_old_session():
    slot = ProcessSlot()
    old = PlaybackSession("/a", "a", FakeProcess(["mpv"]))
    new = PlaybackSession("/b", "b", FakeProcess(["mpv"]))

    assert slot.replace(lambda: old) is None
    assert slot.replace(lambda: new) is old
    assert not old.is_alive()
    assert slot.session is new


def test_kill_timeout_is_tolerated():
    class Stubborn(FakeProcess):
        def kill(self):
            self.killed = True

        def wait(self, timeout=None):
            raise subprocess.TimeoutExpired(self.cmd, timeout)

    session = PlaybackSession("/a", "a", Stubborn(["mpv"]))
    session.terminate()
    assert session.process.killed


def test_dash_leading_locator_is_not_an_option():
    cmd = build_player_command("mpv", "-weird-name.mp3")
    assert cmd[-2:] == ["--", "-weird-name.mp3"]
