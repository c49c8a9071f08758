"""
TuneLift - export run orchestration

Prints the banner, sets up logging, opens the playlist source, runs the
export and the release check, and turns fatal errors into an exit status.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

from loguru import logger

from tunelift import __version__
from tunelift.core import config
from tunelift.core.console import safe_print
from tunelift.core.output import log, setup_loguru
from tunelift.domain.exceptions import TuneLiftError
from tunelift.domain.library import ITunesComSource, ITunesXmlSource, PlaylistSource
from tunelift.domain.playlists import export_playlists
from tunelift.domain.updates import (
    AppVersion,
    check_latest_release,
    parse_program_version,
    to_semantic_string,
)

PROGRAM_VERSION: AppVersion = parse_program_version(__version__)


def print_banner(repository: str) -> None:
    """Print the startup banner."""
    safe_print(
        f"TuneLift v{to_semantic_string(PROGRAM_VERSION)}, "
        f"Copyright © 2020-{datetime.now().year} Richard Lawrence",
        style="bold",
    )
    safe_print("Export iTunes audio playlists as standard or extended .m3u files.")
    safe_print(f"https://github.com/{repository}")
    safe_print()
    safe_print("This program comes with ABSOLUTELY NO WARRANTY. This is free software,")
    safe_print("and you are welcome to redistribute it under certain conditions; see")
    safe_print("the documentation for details.")
    safe_print()


def notify_if_update_available(updates: config.UpdatesConfig) -> None:
    """Run the release check and print a notice if a newer version exists."""
    result = check_latest_release(
        PROGRAM_VERSION,
        updates.repository,
        config.get_version_cache_path(),
        timeout=updates.timeout_seconds,
    )
    if not result.update_available:
        return

    safe_print()
    safe_print(
        f"  A new version ({to_semantic_string(result.latest_version)}) is available! "
        f"You are using {to_semantic_string(PROGRAM_VERSION)}",
        style="cyan",
    )
    safe_print(f"  Get it from https://github.com/{updates.repository}/")


def open_source(
    library_xml: Optional[Path], close_after_export: bool
) -> PlaylistSource:
    """Pick the playlist source for this run."""
    if library_xml:
        return ITunesXmlSource(library_xml)
    return ITunesComSource(close_after_export=close_after_export)


def run(
    export_config: config.ExportConfig,
    app_config: config.Config,
    library_xml: Optional[Path] = None,
    close_after_export: bool = False,
    check_for_updates: bool = True,
) -> int:
    """
    Run one export.

    Args:
        export_config: Validated export options
        app_config: Settings from config.toml
        library_xml: Read playlists from this library XML file instead of COM
        close_after_export: Quit iTunes afterwards if this run launched it
        check_for_updates: Ask GitHub for a newer release at the end

    Returns:
        Process exit status (0 success, 1 fatal error)
    """
    print_banner(app_config.updates.repository)

    log_dir = config.get_log_dir(app_config)
    try:
        setup_loguru(
            log_dir,
            level=app_config.logging.level,
            retention_days=app_config.logging.retention_days,
            console_output=app_config.logging.console_output,
        )
    except OSError as e:
        # No log file to write to yet
        safe_print(f"Unable to create log folder '{log_dir}': {e}", style="red")
        return 1

    log("Starting TuneLift...")

    try:
        with open_source(library_xml, close_after_export) as source:
            summary = export_playlists(export_config, source)
    except TuneLiftError as e:
        log(str(e), level="error")
        return 1

    logger.debug(
        f"Export summary: {len(summary.written)} written, "
        f"{len(summary.no_audio)} without audio, {len(summary.failed)} failed"
    )
    log("TuneLift finished.")

    if check_for_updates and app_config.updates.check_for_updates:
        notify_if_update_available(app_config.updates)

    return 0
