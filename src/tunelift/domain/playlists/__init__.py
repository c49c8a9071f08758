"""Playlists domain - selection and M3U/M3U8 export.

This domain handles:
- Read-only playlist and track views
- Selection rules (user, visible, empty, smart, regular, prefix)
- Path rewriting (base path, Unix separators, find/replace)
- Writing standard and extended playlist files
"""

# Models
from .models import (
    ExportDecision,
    Playlist,
    PlaylistKind,
    SpecialKind,
    Track,
    TrackKind,
)

# Selection
from .selection import is_wanted_playlist

# Export operations
from .exporters import (
    ExportSummary,
    delete_existing_playlists,
    export_playlist,
    export_playlists,
    prepare_export_folder,
    render_playlist,
    rewrite_location,
    sanitize_filename,
)

__all__ = [
    # Models
    "ExportDecision",
    "Playlist",
    "PlaylistKind",
    "SpecialKind",
    "Track",
    "TrackKind",
    # Selection
    "is_wanted_playlist",
    # Export
    "ExportSummary",
    "delete_existing_playlists",
    "export_playlist",
    "export_playlists",
    "prepare_export_folder",
    "render_playlist",
    "rewrite_location",
    "sanitize_filename",
]
