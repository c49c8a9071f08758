"""
Playlist domain models.

Read-only views over playlists and tracks from the media library. Playlist
sources translate host objects into these so the export pipeline never
touches host-specific codes.
"""

from enum import Enum
from typing import Any, NamedTuple, Optional


class PlaylistKind(Enum):
    USER = "user"  # Created by the user (regular or smart)
    OTHER = "other"  # Library, device, radio, etc.


class SpecialKind(Enum):
    NONE = "none"
    OTHER = "other"  # Built-in purpose playlists (Music, Podcasts, folders, ...)


class TrackKind(Enum):
    FILE = "file"  # Backed by a file on disk
    OTHER = "other"  # CD, URL stream, device, cloud


class ExportDecision(Enum):
    """Outcome of the playlist selection rules."""

    EXPORT = "export"
    SKIP_EMPTY = "skip_empty"
    SKIP_SMART = "skip_smart"
    SKIP_REGULAR = "skip_regular"
    SKIP_PREFIX = "skip_prefix"
    SKIP_NOT_USER_PLAYLIST = "skip_not_user_playlist"


class Track(NamedTuple):
    """A track as seen by the exporter."""

    kind: TrackKind
    location: Optional[str]  # Absolute path, None when not file-backed
    duration: int = 0  # in seconds
    artist: str = ""
    title: str = ""


class Playlist(NamedTuple):
    """A playlist as seen by the exporter.

    The handle is opaque to the pipeline; the source that produced the
    playlist uses it to enumerate the tracks on demand.
    """

    name: str
    kind: PlaylistKind
    visible: bool
    special_kind: SpecialKind
    is_smart: bool
    track_count: int
    handle: Any = None
