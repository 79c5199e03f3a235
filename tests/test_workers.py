from playdeck.session import REQUEST_PLAYLIST, REQUEST_SEARCH, ResolveRequest
from playdeck.sources import LocalDirectory
from playdeck.workers import ResolveWorker


def _run_inline(worker):
    received = []
    worker.finished_tracks.connect(lambda token, tracks: received.append((token, tracks)))
    # Called directly, run() executes on this thread and emits synchronously.
    worker.run()
    return received


def test_worker_emits_token_and_tracks(resolver, music_dir):
    request = ResolveRequest(7, REQUEST_PLAYLIST, LocalDirectory(str(music_dir)))

    received = _run_inline(ResolveWorker(resolver, request))

    assert len(received) == 1
    token, tracks = received[0]
    assert token == 7
    assert [t.title for t in tracks] == ["a.mp3", "a.wav", "b.mp3"]


def test_worker_runs_searches(resolver):
    received = _run_inline(ResolveWorker(resolver, ResolveRequest(3, REQUEST_SEARCH, "lofi")))

    assert [t.title for t in received[0][1]] == ["Lofi Beats", "Chill Lofi"]


def test_worker_crash_still_reports_empty_result():
    class Exploding:
        def resolve(self, source):
            raise RuntimeError("boom")

    received = _run_inline(ResolveWorker(Exploding(), ResolveRequest(2, REQUEST_PLAYLIST, LocalDirectory("/x"))))

    assert received == [(2, [])]
