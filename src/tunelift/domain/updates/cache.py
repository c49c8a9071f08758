"""
Release check cache.

A tiny INI file remembering when GitHub was last asked and which release
it reported. The cache is advisory: anything unreadable counts as empty.
"""

import configparser
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from loguru import logger

SECTION = "Version"
TIMESTAMP_KEY = "LastCheckedTimestamp"
VERSION_KEY = "LatestKnownVersion"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class CachedVersionInfo:
    """Raw cached values, kept as the strings found in the file."""

    last_checked: Optional[str] = None  # UTC, TIMESTAMP_FORMAT
    latest_version: Optional[str] = None  # major.minor.patch


def format_timestamp(moment: datetime) -> str:
    """Format a moment as a UTC cache timestamp."""
    return moment.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a cache timestamp.

    Naive values are UTC. ISO 8601 text is accepted as well.

    Returns:
        Aware datetime, or None if missing or unparsable
    """
    if not value:
        return None

    try:
        moment = datetime.strptime(value.strip(), TIMESTAMP_FORMAT)
    except ValueError:
        try:
            moment = datetime.fromisoformat(value.strip())
        except ValueError:
            return None

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def _new_parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(interpolation=None)
    parser.optionxform = str  # Keep key case as written
    return parser


def load_cache(cache_path: Path) -> CachedVersionInfo:
    """
    Load the cache record, or an empty one if the file is missing or broken.
    """
    if not cache_path.exists():
        return CachedVersionInfo()

    parser = _new_parser()
    try:
        parser.read(cache_path, encoding="utf-8")
    except (configparser.Error, OSError, UnicodeDecodeError) as e:
        logger.debug(f"Ignoring unreadable version cache {cache_path}: {e}")
        return CachedVersionInfo()

    if not parser.has_section(SECTION):
        return CachedVersionInfo()

    section = parser[SECTION]
    return CachedVersionInfo(
        last_checked=section.get(TIMESTAMP_KEY),
        latest_version=section.get(VERSION_KEY),
    )


def save_cache(cache_path: Path, info: CachedVersionInfo) -> bool:
    """
    Write the cache record, creating the file and its folder if needed.

    Returns:
        True if saved, False if the file could not be written
    """
    parser = _new_parser()
    parser.add_section(SECTION)
    if info.last_checked:
        parser[SECTION][TIMESTAMP_KEY] = info.last_checked
    if info.latest_version:
        parser[SECTION][VERSION_KEY] = info.latest_version

    try:
        cache_path.parent.mkdir(parents=True, exist_ok=True)
        with open(cache_path, "w", encoding="utf-8") as f:
            parser.write(f)
    except OSError as e:
        logger.debug(f"Unable to save version cache {cache_path}: {e}")
        return False

    return True
