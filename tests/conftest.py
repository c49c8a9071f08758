"""Shared fixtures for TuneLift tests."""

from pathlib import Path
from typing import List, Optional

import pytest
from loguru import logger

from tunelift.core.config import ExportConfig
from tunelift.domain.playlists.models import (
    Playlist,
    PlaylistKind,
    SpecialKind,
    Track,
    TrackKind,
)


class FakeSource:
    """In-memory playlist source; each playlist's handle is its track list."""

    def __init__(self, playlists: List[Optional[Playlist]]):
        self._playlists = playlists
        self.entered = False
        self.exited = False
        self.playlist_enumerations = 0

    def __enter__(self) -> "FakeSource":
        self.entered = True
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.exited = True

    def playlists(self):
        self.playlist_enumerations += 1
        yield from self._playlists

    def tracks(self, playlist: Playlist):
        yield from playlist.handle or []


def make_track(
    location: Optional[str],
    artist: str = "Artist",
    title: str = "Title",
    duration: int = 200,
    kind: TrackKind = TrackKind.FILE,
) -> Track:
    return Track(kind=kind, location=location, duration=duration, artist=artist, title=title)


def make_playlist(
    name: str,
    tracks: Optional[List[Optional[Track]]] = None,
    smart: bool = False,
    kind: PlaylistKind = PlaylistKind.USER,
    visible: bool = True,
    special_kind: SpecialKind = SpecialKind.NONE,
    track_count: Optional[int] = None,
) -> Playlist:
    tracks = tracks or []
    return Playlist(
        name=name,
        kind=kind,
        visible=visible,
        special_kind=special_kind,
        is_smart=smart,
        track_count=len(tracks) if track_count is None else track_count,
        handle=tracks,
    )


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep config, data and the working directory inside tmp_path."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)


@pytest.fixture(autouse=True)
def reset_loguru():
    """Drop any sinks a test configured (e.g. daily log files)."""
    yield
    logger.remove()


@pytest.fixture
def export_dir(tmp_path: Path) -> Path:
    return tmp_path / "export"


@pytest.fixture
def make_config(export_dir: Path):
    """Build an ExportConfig pointing at the test export folder."""

    def _make(**overrides) -> ExportConfig:
        return ExportConfig(export_folder=export_dir, **overrides)

    return _make


@pytest.fixture
def track():
    """Factory for file-backed tracks."""
    return make_track


@pytest.fixture
def playlist():
    """Factory for user playlists whose handle is their track list."""
    return make_playlist


@pytest.fixture
def source():
    """Factory for in-memory playlist sources."""
    return FakeSource
