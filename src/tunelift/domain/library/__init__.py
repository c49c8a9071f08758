"""Library domain - read-only access to the media library's playlists.

This domain handles:
- The PlaylistSource contract consumed by the export pipeline
- iTunes COM automation (Windows)
- Exported library XML files (any platform)
"""

from .provider import PlaylistSource
from .providers import ITunesComSource, ITunesXmlSource

__all__ = [
    "PlaylistSource",
    "ITunesComSource",
    "ITunesXmlSource",
]
