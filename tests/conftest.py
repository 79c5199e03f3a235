import pytest

from playdeck.playback import PlaybackDispatcher
from playdeck.resolver import SourceResolver


class FakeService:
    """Stands in for the YouTube client; records calls, never touches the network."""

    def __init__(self, playlists=None, search_results=None, fail_with=None):
        self.playlists = playlists or {}
        self.search_results = search_results or {}
        self.fail_with = fail_with
        self.calls = []

    def get_playlist_metadata(self, url):
        self.calls.append(("metadata", url))
        if self.fail_with:
            raise self.fail_with
        if url not in self.playlists:
            raise ValueError(f"unknown playlist {url}")
        return {"id": f"PL-{url.rsplit('=', 1)[-1]}"}

    def stream_playlist_videos(self, playlist_id):
        self.calls.append(("videos", playlist_id))
        for url, videos in self.playlists.items():
            if f"PL-{url.rsplit('=', 1)[-1]}" == playlist_id:
                yield from videos
                return

    def stream_search_results(self, term):
        self.calls.append(("search", term))
        if self.fail_with:
            raise self.fail_with
        yield from self.search_results.get(term, [])


class FakeProcess:
    _next_pid = 1000

    def __init__(self, cmd):
        FakeProcess._next_pid += 1
        self.pid = FakeProcess._next_pid
        self.cmd = cmd
        self.returncode = None
        self.killed = False

    def poll(self):
        return self.returncode

    def kill(self):
        self.killed = True
        self.returncode = -9

    def wait(self, timeout=None):
        return self.returncode


class FakePopen:
    def __init__(self):
        self.processes = []
        self.kwargs = []

    def __call__(self, cmd, **kwargs):
        process = FakeProcess(cmd)
        self.processes.append(process)
        self.kwargs.append(kwargs)
        return process

    def alive(self):
        return [p for p in self.processes if p.poll() is None]


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    monkeypatch.setenv("PLAYDECK_HOME", str(home))
    return home


@pytest.fixture
def fake_service():
    return FakeService(
        playlists={
            "https://www.youtube.com/playlist?list=abc": [
                {"id": "v3", "title": "Zebra"},
                {"id": "v1", "title": "Alpha"},
                {"id": "v2", "title": "Mid"},
            ],
        },
        search_results={
            "lofi": [
                {"id": "s1", "title": "Lofi Beats"},
                {"id": "s2", "title": "Chill Lofi"},
            ],
        },
    )


@pytest.fixture
def resolver(fake_service):
    return SourceResolver(fake_service)


@pytest.fixture
def fake_popen():
    return FakePopen()


@pytest.fixture
def dispatcher(fake_popen):
    return PlaybackDispatcher(player_binary="mpv", popen=fake_popen, which=lambda name: f"/usr/bin/{name}")


@pytest.fixture
def music_dir(tmp_path):
    folder = tmp_path / "music"
    folder.mkdir()
    for name in ("b.mp3", "a.wav", "c.txt", "a.mp3"):
        (folder / name).touch()
    return folder
