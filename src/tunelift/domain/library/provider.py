"""
Provider interface for playlist sources.

Defines the read-only contract the export pipeline consumes. Providers
wrap a media library (iTunes COM automation, an exported library XML file)
and hand out Playlist/Track views.

Providers are context managers: the connection is opened on enter and
released on exit, whether the export succeeded or not.
"""

from typing import Iterator, Optional, Protocol

from ..playlists.models import Playlist, Track


class PlaylistSource(Protocol):
    """Protocol defining the interface for playlist sources.

    Example:

        with ITunesXmlSource(path) as source:
            for playlist in source.playlists():
                if playlist is None:
                    continue
                for track in source.tracks(playlist):
                    ...
    """

    def __enter__(self) -> "PlaylistSource":
        """Connect to the library.

        Raises:
            LibraryUnavailableError: If the library cannot be reached
        """
        ...

    def __exit__(self, exc_type, exc, tb) -> None:
        """Release the library connection."""
        ...

    def playlists(self) -> Iterator[Optional[Playlist]]:
        """Enumerate playlists in library order.

        Entries whose properties cannot be read are yielded as None.

        Raises:
            LibraryUnavailableError: If the playlist collection is inaccessible
        """
        ...

    def tracks(self, playlist: Playlist) -> Iterator[Optional[Track]]:
        """Enumerate a playlist's tracks in playlist order.

        Entries whose properties cannot be read are yielded as None.
        """
        ...
