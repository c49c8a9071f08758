"""
Exported iTunes / Music library XML provider.

Reads the property list written by iTunes ("iTunes Music Library.xml") or by
Music's File > Library > Export Library. Works on any platform.
"""

import plistlib
import re
from pathlib import Path
from typing import Any, Dict, Iterator, Optional
from urllib.parse import unquote, urlparse
from xml.parsers.expat import ExpatError

from loguru import logger

from ...exceptions import LibraryUnavailableError
from ...playlists.models import Playlist, PlaylistKind, SpecialKind, Track, TrackKind

# Drive-letter paths come through file URLs as /C:/Music/...
WINDOWS_DRIVE_PATH = re.compile(r"^/[A-Za-z]:/")


def location_to_path(location: str) -> str:
    """
    Convert a library file URL to a local path.

    Windows locations are returned with backslashes, matching what the
    COM interface reports.

    Args:
        location: URL such as file://localhost/C:/Music/a.mp3

    Returns:
        Local path such as C:\\Music\\a.mp3 or /Users/me/Music/a.mp3
    """
    parsed = urlparse(location)
    if parsed.scheme and parsed.scheme != "file":
        return location

    path = unquote(parsed.path)
    if WINDOWS_DRIVE_PATH.match(path):
        return path[1:].replace("/", "\\")
    if parsed.netloc and parsed.netloc != "localhost":
        # UNC share: file://server/share/a.mp3
        return "\\\\" + parsed.netloc + path.replace("/", "\\")
    return path


def _to_playlist(entry: Dict[str, Any]) -> Playlist:
    master = bool(entry.get("Master", False))
    special = "Distinguished Kind" in entry or bool(entry.get("Folder", False))
    items = entry.get("Playlist Items", [])
    return Playlist(
        name=str(entry["Name"]),
        kind=PlaylistKind.OTHER if master else PlaylistKind.USER,
        visible=bool(entry.get("Visible", True)),
        special_kind=SpecialKind.OTHER if special else SpecialKind.NONE,
        is_smart="Smart Info" in entry,
        track_count=len(items),
        handle=items,
    )


def _to_track(entry: Dict[str, Any]) -> Track:
    location = entry.get("Location")
    is_file = entry.get("Track Type") == "File"
    return Track(
        kind=TrackKind.FILE if is_file else TrackKind.OTHER,
        location=location_to_path(location) if location else None,
        duration=int(entry.get("Total Time", 0)) // 1000,
        artist=str(entry.get("Artist", "")),
        title=str(entry.get("Name", "")),
    )


class ITunesXmlSource:
    """Playlist source backed by an exported library XML file."""

    def __init__(self, xml_path: Path):
        self.xml_path = Path(xml_path)
        self._library: Optional[Dict[str, Any]] = None

    def __enter__(self) -> "ITunesXmlSource":
        try:
            with open(self.xml_path, "rb") as f:
                library = plistlib.load(f)
        except (OSError, plistlib.InvalidFileException, ExpatError, ValueError) as e:
            raise LibraryUnavailableError(
                f"Unable to read library file '{self.xml_path}': {e}"
            ) from e

        if not isinstance(library, dict):
            raise LibraryUnavailableError(
                f"Library file '{self.xml_path}' is not an iTunes library export"
            )

        self._library = library
        logger.debug(f"Loaded library XML: {self.xml_path}")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._library = None

    def playlists(self) -> Iterator[Optional[Playlist]]:
        if self._library is None:
            raise LibraryUnavailableError("Library file is not open")

        entries = self._library.get("Playlists")
        if not isinstance(entries, list):
            raise LibraryUnavailableError("Unable to access playlists in library file.")

        for entry in entries:
            try:
                yield _to_playlist(entry)
            except (KeyError, TypeError, AttributeError) as e:
                logger.debug(f"Skipping unreadable playlist entry: {e}")
                yield None

    def tracks(self, playlist: Playlist) -> Iterator[Optional[Track]]:
        if self._library is None:
            raise LibraryUnavailableError("Library file is not open")

        library_tracks = self._library.get("Tracks", {})
        for item in playlist.handle or []:
            try:
                yield _to_track(library_tracks[str(item["Track ID"])])
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.debug(f"Skipping unreadable track in '{playlist.name}': {e}")
                yield None
