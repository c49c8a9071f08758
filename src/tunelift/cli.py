"""
TuneLift CLI - Entry point

Parses the command line into an ExportConfig and hands over to main.run.
Invalid option combinations print usage and exit before anything runs.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from tunelift.core import config


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="tunelift",
        usage="%(prog)s [options] <destination folder>",
        description="Export iTunes audio playlists as standard or extended .m3u files.",
        epilog=f"Logs are written to {config.get_data_dir() / 'logs'}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )

    parser.add_argument(
        "destination",
        metavar="<destination folder>",
        help="The folder to export the playlists to.",
    )

    selection = parser.add_argument_group("Playlist Selection")
    selection.add_argument(
        "-ns", "--no-smart",
        dest="ignore_smart",
        action="store_true",
        help="Skip exporting smart playlists.",
    )
    selection.add_argument(
        "-np", "--no-playlist", "--no-playlists",
        dest="ignore_regular",
        action="store_true",
        help="Skip exporting regular (non-smart) playlists.",
    )
    selection.add_argument(
        "-i", "--ignore",
        metavar="<text>",
        default="",
        help="Exclude playlists with names starting <text>.",
    )

    output = parser.add_argument_group("Output Format")
    output.add_argument(
        "-8", "--append-8",
        dest="append_eight",
        action="store_true",
        help="Use .m3u8 file extension.",
    )
    output.add_argument(
        "-ne", "--not-extended",
        dest="not_extended",
        action="store_true",
        help="Export using basic .m3u format, with no extended playlist/song "
        "titles and duration information.",
    )
    output.add_argument(
        "-u", "--unix", "-l", "--linux",
        dest="unix",
        action="store_true",
        help="Use Unix-style paths and LF line endings.",
    )

    paths = parser.add_argument_group("File Path Adjustments")
    paths.add_argument(
        "-f", "--find",
        metavar="<text>",
        default="",
        help="Match <text> in file path for substitution.",
    )
    paths.add_argument(
        "-r", "--replace",
        metavar="<text>",
        default="",
        help="Replace matched text with <text>.",
    )
    paths.add_argument(
        "-b", "--base-path",
        metavar="<path>",
        default="",
        help="Remove leading <path> from file path.",
    )

    files = parser.add_argument_group("File Management")
    files.add_argument(
        "-d", "--delete",
        action="store_true",
        help="Remove existing playlist files from destination.",
    )

    other = parser.add_argument_group("Other Options")
    other.add_argument(
        "-x", "--library-xml",
        metavar="<file>",
        type=Path,
        default=None,
        help="Read playlists from an exported library XML file instead of "
        "connecting to iTunes.",
    )
    other.add_argument(
        "-c", "--close",
        action="store_true",
        help="Close iTunes after export (won't close if already running).",
    )
    other.add_argument(
        "-nc", "--no-check",
        dest="no_check",
        action="store_true",
        help="Do not check GitHub for later versions.",
    )

    return parser


def build_export_config(args: argparse.Namespace) -> config.ExportConfig:
    """
    Turn parsed arguments into a validated ExportConfig.

    Raises:
        ValueError: If the option combination is invalid
    """
    export_config = config.ExportConfig(
        export_folder=Path(args.destination),
        ignore_smart_playlists=args.ignore_smart,
        ignore_regular_playlists=args.ignore_regular,
        ignore_prefix=args.ignore,
        use_unix_paths=args.unix,
        find_text=args.find,
        replace_text=args.replace,
        append_eight=args.append_eight,
        not_extended=args.not_extended,
        delete_existing=args.delete,
        base_path=args.base_path,
    )
    export_config.validate()
    return export_config


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the tunelift command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        export_config = build_export_config(args)
    except ValueError as e:
        parser.error(str(e))  # Prints usage, exits with status 2

    app_config = config.load_config()
    library_xml = args.library_xml
    if library_xml is None and app_config.library.xml_path:
        library_xml = Path(app_config.library.xml_path)

    # Delegate to the export run
    from .main import run

    sys.exit(
        run(
            export_config,
            app_config,
            library_xml=library_xml,
            close_after_export=args.close,
            check_for_updates=not args.no_check,
        )
    )


if __name__ == "__main__":
    main()
