"""
iTunes COM automation provider (Windows only).

Talks to a running or freshly launched iTunes through the
"iTunes.Application" COM server using pywin32 dynamic dispatch.
Host codes used below come from the iTunes COM SDK.
"""

from typing import Any, Iterator, Optional, Tuple

from loguru import logger

from tunelift.core.output import log

from ...exceptions import LibraryUnavailableError
from ...playlists.models import Playlist, PlaylistKind, SpecialKind, Track, TrackKind

PROG_ID = "iTunes.Application"

IT_PLAYLIST_KIND_USER = 2
IT_USER_PLAYLIST_SPECIAL_KIND_NONE = 0
IT_TRACK_KIND_FILE = 1


def _import_win32() -> Tuple[Any, type]:
    """Import pywin32 lazily so the package loads on every platform.

    Returns:
        (win32com.client module, pywintypes.com_error)

    Raises:
        LibraryUnavailableError: If pywin32 is not available
    """
    try:
        import pywintypes
        import win32com.client
    except ImportError as e:
        raise LibraryUnavailableError(
            "The iTunes COM interface needs Windows with pywin32 installed. "
            "Use --library-xml to export from a library XML file instead."
        ) from e
    return win32com.client, pywintypes.com_error


class ITunesComSource:
    """Playlist source backed by the iTunes COM server.

    Args:
        close_after_export: Ask iTunes to quit on exit, but only when this
            source launched it
    """

    def __init__(self, close_after_export: bool = False):
        self.close_after_export = close_after_export
        self.launched_by_us = False
        self._app: Any = None
        self._com_error: type = Exception

    def __enter__(self) -> "ITunesComSource":
        client, com_error = _import_win32()
        self._com_error = com_error

        log("Connecting to iTunes...")

        # COM cannot say whether iTunes was already open; an active object
        # means it was
        try:
            client.GetActiveObject(PROG_ID)
            self.launched_by_us = False
        except com_error:
            self.launched_by_us = True

        try:
            self._app = client.Dispatch(PROG_ID)
        except com_error as e:
            raise LibraryUnavailableError(f"Unable to connect to iTunes: {e}") from e

        try:
            library = self._app.LibraryPlaylist
        except (com_error, AttributeError) as e:
            self._release()
            raise LibraryUnavailableError("Unable to access iTunes library.") from e
        if library is None:
            self._release()
            raise LibraryUnavailableError("Unable to access iTunes library.")

        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._app is None:
            return

        if self.close_after_export:
            if self.launched_by_us:
                log("Attempting to close iTunes...")
                try:
                    self._app.Quit()
                except (self._com_error, AttributeError) as e:
                    log(f"Unable to close iTunes: {e}", level="warning")
            else:
                log("iTunes was not started by TuneLift; leaving it running.")

        self._release()

    def _release(self) -> None:
        self._app = None
        logger.debug("Released iTunes COM object")

    def playlists(self) -> Iterator[Optional[Playlist]]:
        if self._app is None:
            raise LibraryUnavailableError("Not connected to iTunes")

        try:
            collection = self._app.LibrarySource.Playlists
            count = int(collection.Count)
        except (self._com_error, AttributeError, TypeError) as e:
            raise LibraryUnavailableError("Unable to access iTunes playlists.") from e

        # COM collections are 1-based
        for index in range(1, count + 1):
            try:
                com_playlist = collection.Item(index)
                yield self._to_playlist(com_playlist) if com_playlist is not None else None
            except (self._com_error, AttributeError, TypeError, ValueError) as e:
                logger.debug(f"Skipping unreadable playlist #{index}: {e}")
                yield None

    def tracks(self, playlist: Playlist) -> Iterator[Optional[Track]]:
        try:
            collection = playlist.handle.Tracks
            count = int(collection.Count)
        except (self._com_error, AttributeError, TypeError) as e:
            logger.warning(f"Unable to read tracks of '{playlist.name}': {e}")
            return

        for index in range(1, count + 1):
            try:
                com_track = collection.Item(index)
                yield self._to_track(com_track) if com_track is not None else None
            except (self._com_error, AttributeError, TypeError, ValueError) as e:
                logger.debug(f"Skipping unreadable track #{index} in '{playlist.name}': {e}")
                yield None

    @staticmethod
    def _to_playlist(com_playlist: Any) -> Playlist:
        is_user = int(com_playlist.Kind) == IT_PLAYLIST_KIND_USER

        # SpecialKind and Smart only exist on user playlists
        special_kind = SpecialKind.NONE
        is_smart = False
        if is_user:
            if int(com_playlist.SpecialKind) != IT_USER_PLAYLIST_SPECIAL_KIND_NONE:
                special_kind = SpecialKind.OTHER
            is_smart = bool(com_playlist.Smart)

        return Playlist(
            name=str(com_playlist.Name),
            kind=PlaylistKind.USER if is_user else PlaylistKind.OTHER,
            visible=bool(com_playlist.Visible),
            special_kind=special_kind,
            is_smart=is_smart,
            track_count=int(com_playlist.Tracks.Count),
            handle=com_playlist,
        )

    @staticmethod
    def _to_track(com_track: Any) -> Track:
        if int(com_track.Kind) != IT_TRACK_KIND_FILE:
            return Track(kind=TrackKind.OTHER, location=None)

        location = com_track.Location
        return Track(
            kind=TrackKind.FILE,
            location=str(location) if location else None,
            duration=int(com_track.Duration or 0),
            artist=str(com_track.Artist or ""),
            title=str(com_track.Name or ""),
        )
