"""
Playlist selection rules.

Decides, per playlist, whether it is exported or why it is skipped.
"""

from tunelift.core.config import ExportConfig
from tunelift.core.output import log

from .models import ExportDecision, Playlist, PlaylistKind, SpecialKind

SKIP_NOTICES = {
    ExportDecision.SKIP_EMPTY: "Ignoring empty playlist",
    ExportDecision.SKIP_SMART: "Ignoring smart playlist",
    ExportDecision.SKIP_REGULAR: "Ignoring regular playlist",
    ExportDecision.SKIP_PREFIX: "Ignoring playlist with prefix",
}


def starts_with_ignore_case(text: str, prefix: str) -> bool:
    """Case-insensitive prefix test that never changes the prefix length."""
    return text[: len(prefix)].casefold() == prefix.casefold()


def _decide(playlist: Playlist, config: ExportConfig) -> ExportDecision:
    # Built-in, hidden and special-purpose playlists are never reported
    if playlist.kind is not PlaylistKind.USER:
        return ExportDecision.SKIP_NOT_USER_PLAYLIST
    if not playlist.visible:
        return ExportDecision.SKIP_NOT_USER_PLAYLIST
    if playlist.special_kind is not SpecialKind.NONE:
        return ExportDecision.SKIP_NOT_USER_PLAYLIST

    if playlist.track_count == 0:
        return ExportDecision.SKIP_EMPTY
    if config.ignore_smart_playlists and playlist.is_smart:
        return ExportDecision.SKIP_SMART
    if config.ignore_regular_playlists and not playlist.is_smart:
        return ExportDecision.SKIP_REGULAR
    if config.ignore_prefix and starts_with_ignore_case(
        playlist.name, config.ignore_prefix
    ):
        return ExportDecision.SKIP_PREFIX

    return ExportDecision.EXPORT


def is_wanted_playlist(
    playlist: Playlist, config: ExportConfig, notify: bool = False
) -> ExportDecision:
    """
    Apply the selection rules to a playlist. The first matching rule wins.

    Args:
        playlist: Playlist to evaluate
        config: Export options
        notify: Log a notice when the playlist is skipped for an
            empty/smart/regular/prefix reason

    Returns:
        ExportDecision for the playlist
    """
    decision = _decide(playlist, config)

    if notify and decision in SKIP_NOTICES:
        log(f"{SKIP_NOTICES[decision]}: {playlist.name}")

    return decision
