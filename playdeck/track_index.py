from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(frozen=True, order=True)
class Track:
    title: str
    locator: str


@dataclass(frozen=True)
class DisplayRow:
    """A track as rendered in the list, numbered by its unfiltered position."""

    number: int
    track: Track

    @property
    def text(self) -> str:
        return f"{self.number}. {self.track.title}"

    def __str__(self) -> str:
        return self.text


class TrackIndex:
    def __init__(self):
        self._tracks: list[Track] = []
        self._query = ""

    @property
    def tracks(self) -> list[Track]:
        return list(self._tracks)

    @property
    def query(self) -> str:
        return self._query

    def __len__(self) -> int:
        return len(self._tracks)

    def set_tracks(self, tracks: Iterable[Track]) -> None:
        self._tracks = list(tracks)
        self._query = ""

    def track_at(self, index: int) -> Optional[Track]:
        if 0 <= index < len(self._tracks):
            return self._tracks[index]
        return None

    def filter(self, term: str) -> list[DisplayRow]:
        self._query = (term or "").lower()
        return self.rows()

    def rows(self) -> list[DisplayRow]:
        query = self._query
        return [
            DisplayRow(number, track)
            for number, track in enumerate(self._tracks, start=1)
            if query in track.title.lower()
        ]


class SelectionMapper:
    """Maps a rendered row string back to the track it was built from."""

    def __init__(self, index: TrackIndex):
        self._index = index

    def resolve(self, row_text) -> Optional[Track]:
        text = str(row_text or "")
        dot = text.find(".")
        if dot <= 0:
            return None
        prefix = text[:dot]
        if not (prefix.isascii() and prefix.isdigit()):
            return None
        number = int(prefix)
        if number < 1:
            return None
        return self._index.track_at(number - 1)
