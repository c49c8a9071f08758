"""
Playlist export functionality for TuneLift.
Writes library playlists as standard or extended M3U/M3U8 files.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path, PureWindowsPath
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

from loguru import logger

from tunelift.core.config import ExportConfig
from tunelift.core.output import log
from tunelift.utils.text import pluralise

from ..exceptions import ExportFolderError
from .models import ExportDecision, Playlist, Track, TrackKind
from .selection import is_wanted_playlist, starts_with_ignore_case

if TYPE_CHECKING:
    from ..library.provider import PlaylistSource

AUDIO_EXTENSIONS = {".mp3", ".m4a", ".m4b"}
PLAYLIST_EXTENSIONS = {".m3u", ".m3u8"}

# Characters Windows refuses in file names, plus control characters
INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


@dataclass
class ExportSummary:
    """What an export run did."""

    decisions: List[Tuple[str, ExportDecision]] = field(default_factory=list)
    written: List[Path] = field(default_factory=list)
    no_audio: List[str] = field(default_factory=list)  # Nothing exportable
    failed: List[str] = field(default_factory=list)  # Could not be written
    deleted: Optional[int] = None  # Old playlist files removed, if requested

    @property
    def wanted_count(self) -> int:
        return sum(1 for _, d in self.decisions if d is ExportDecision.EXPORT)


def sanitize_filename(name: str) -> str:
    """
    Make a playlist name safe to use as a file name.

    Every illegal character is replaced with an underscore; nothing else
    changes.

    Example:
        "Rock/Pop: 80's?" -> "Rock_Pop_ 80's_"
    """
    return INVALID_FILENAME_CHARS.sub("_", name)


def rewrite_location(location: str, config: ExportConfig) -> str:
    """
    Rewrite a track path for the playlist file.

    Applied in order: strip the base path, swap backslashes for forward
    slashes (Unix paths only), then find/replace.

    Args:
        location: Absolute track path as reported by the library
        config: Export options

    Returns:
        Rewritten path
    """
    path = location

    if config.base_path and starts_with_ignore_case(path, config.base_path):
        path = path[len(config.base_path):]

    if config.use_unix_paths:
        path = path.replace("\\", "/")

    if config.find_text:
        # Function replacement keeps backslashes in replace_text literal
        path = re.sub(
            re.escape(config.find_text),
            lambda _: config.replace_text,
            path,
            flags=re.IGNORECASE,
        )

    return path


def is_exportable_track(track: Optional[Track]) -> bool:
    """Check a track is a file-backed MP3/AAC audio track."""
    if track is None or track.kind is not TrackKind.FILE or not track.location:
        return False
    # A file named just ".mp3" has no suffix but still counts
    name = PureWindowsPath(track.location).name.lower()
    return name.endswith(tuple(AUDIO_EXTENSIONS))


def render_playlist(
    name: str, tracks: Iterable[Optional[Track]], config: ExportConfig
) -> Tuple[str, int]:
    """
    Build the contents of a playlist file.

    Args:
        name: Playlist name (used in the #PLAYLIST header)
        tracks: Tracks in playlist order
        config: Export options

    Returns:
        Tuple of (file contents, tracks written). When no track is
        exportable the count is 0 and the contents hold at most the header.
    """
    eol = config.line_ending
    lines: List[str] = []

    if not config.not_extended:
        lines.append("#EXTM3U")
        lines.append(f"#PLAYLIST:{name}")

    exported = 0
    for track in tracks:
        if not is_exportable_track(track):
            continue

        if not config.not_extended:
            lines.append(f"#EXTINF:{track.duration},{track.artist} - {track.title}")
        lines.append(rewrite_location(track.location, config))
        exported += 1

    return "".join(line + eol for line in lines), exported


def delete_existing_playlists(folder: Path) -> int:
    """
    Delete .m3u/.m3u8 files directly inside a folder (not recursive).

    Args:
        folder: Export folder

    Returns:
        Number of files deleted

    Raises:
        ExportFolderError: If the folder cannot be listed
    """
    log(f"Deleting existing playlists from: {folder}")

    try:
        playlist_files = [
            entry
            for entry in folder.iterdir()
            if entry.suffix.lower() in PLAYLIST_EXTENSIONS and entry.is_file()
        ]
    except OSError as e:
        raise ExportFolderError(f"Unable to delete: {e}") from e

    count = 0
    for entry in playlist_files:
        try:
            entry.unlink()
            count += 1
        except OSError as e:
            log(f"Unable to delete '{entry.name}': {e}", level="warning")

    log(f"Successfully deleted {pluralise(count, 'playlist', 'playlists')}")
    return count


def prepare_export_folder(config: ExportConfig) -> Optional[int]:
    """
    Make sure the export folder exists, clearing old playlists if requested.

    Returns:
        Number of deleted playlist files, or None when deletion was not requested

    Raises:
        ExportFolderError: If the folder cannot be accessed, created or listed
    """
    folder = config.export_folder

    try:
        folder_exists = folder.is_dir()
    except OSError as e:
        raise ExportFolderError(f"Unable to access folder '{folder}': {e}") from e

    if folder_exists:
        if config.delete_existing:
            return delete_existing_playlists(folder)
        log(f"Exporting to folder: {folder}")
        return None

    try:
        folder.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ExportFolderError(f"Unable to create folder '{folder}': {e}") from e

    log(f"Created folder for export: {folder}")
    return None


def export_playlist(
    playlist: Playlist, source: "PlaylistSource", config: ExportConfig
) -> Optional[Path]:
    """
    Export one playlist to the export folder, overwriting any existing file.

    Returns:
        Path written, or None if the playlist had no audio content

    Raises:
        OSError: If the file cannot be written
    """
    contents, exported = render_playlist(playlist.name, source.tracks(playlist), config)
    if exported == 0:
        return None

    output_path = config.export_folder / (
        sanitize_filename(playlist.name) + config.file_extension
    )
    # newline="" keeps the chosen line endings on every platform
    output_path.write_text(contents, encoding="utf-8", newline="")
    logger.debug(f"Wrote {exported} tracks to {output_path}")
    return output_path


def export_playlists(config: ExportConfig, source: "PlaylistSource") -> ExportSummary:
    """
    Export every wanted playlist from a source.

    Prepares the export folder, then makes a counting pass (with skip
    notices) and an export pass over the same playlists. Decisions from the
    counting pass are reused so the progress totals always match.

    Args:
        config: Export options
        source: Open playlist source

    Returns:
        ExportSummary describing what was written and skipped

    Raises:
        ExportFolderError: If the export folder cannot be prepared
        LibraryUnavailableError: If the source's playlists cannot be read
    """
    summary = ExportSummary()
    summary.deleted = prepare_export_folder(config)

    log("Getting playlist details...")
    playlists = [playlist for playlist in source.playlists() if playlist is not None]

    # Counting pass
    decisions = [is_wanted_playlist(p, config, notify=True) for p in playlists]
    summary.decisions = [(p.name, d) for p, d in zip(playlists, decisions)]
    wanted = [p for p, d in zip(playlists, decisions) if d is ExportDecision.EXPORT]
    total_tracks = sum(p.track_count for p in wanted)

    log(
        f"Found {pluralise(len(wanted), 'playlist', 'playlists')} "
        f"(totaling {pluralise(total_tracks, 'track', 'tracks')}) to export."
    )

    # Export pass
    for index, playlist in enumerate(wanted, start=1):
        log(
            f"Exporting {index}/{len(wanted)}: {playlist.name} "
            f"({playlist.track_count} tracks)"
        )

        try:
            output_path = export_playlist(playlist, source, config)
        except OSError as e:
            log(f"Unable to save playlist '{playlist.name}': {e}", level="error")
            summary.failed.append(playlist.name)
            continue

        if output_path is None:
            log(f"No audio content to save for playlist: {playlist.name}")
            summary.no_audio.append(playlist.name)
        else:
            summary.written.append(output_path)

    return summary
