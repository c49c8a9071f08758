"""
Version parsing and formatting.

The running build is described by four numbers (major, minor, build, patch).
The build slot marks local development builds; releases on GitHub are
plain major.minor.patch and always have build 0.
"""

import re
from typing import NamedTuple, Optional

PROGRAM_VERSION_PATTERN = re.compile(r"^(\d+)\.(\d+)\.(\d+)(?:\.dev(\d+))?$")


class AppVersion(NamedTuple):
    """Four-part version, ordered as (major, minor, build, patch)."""

    major: int
    minor: int
    build: int = 0
    patch: int = 0


def parse_semantic_version(version_string: Optional[str]) -> Optional[AppVersion]:
    """
    Parse "major.minor.patch" into AppVersion(major, minor, 0, patch).

    Args:
        version_string: Version text such as "1.0.6"

    Returns:
        AppVersion, or None if the text is not three non-negative integers
    """
    if not version_string or not version_string.strip():
        return None

    parts = version_string.strip().split(".")
    if len(parts) != 3 or not all(part.isascii() and part.isdigit() for part in parts):
        return None

    major, minor, patch = (int(part) for part in parts)
    return AppVersion(major, minor, 0, patch)


def parse_program_version(version_string: str) -> AppVersion:
    """
    Parse the package version ("1.2.3" or "1.2.3.dev4").

    A .devN suffix becomes the build slot.

    Raises:
        ValueError: If the version string is malformed
    """
    match = PROGRAM_VERSION_PATTERN.match(version_string)
    if not match:
        raise ValueError(f"Invalid program version: {version_string!r}")

    major, minor, patch, build = match.groups()
    return AppVersion(int(major), int(minor), int(build or 0), int(patch))


def to_semantic_string(version: Optional[AppVersion]) -> str:
    """
    Format a version as "major.minor.patch" for display.

    Development builds get a " (dev build N)" suffix.

    Example:
        AppVersion(1, 2, 0, 3) -> "1.2.3"
        AppVersion(1, 2, 4, 3) -> "1.2.3 (dev build 4)"
    """
    if version is None:
        return "0.0.0"

    result = f"{version.major}.{version.minor}.{version.patch}"
    if version.build > 0:
        result += f" (dev build {version.build})"
    return result
