"""Updates domain - cached GitHub release check.

This domain handles:
- Four-part program versions and semantic version parsing
- The INI cache remembering the last check
- Deciding when to ask GitHub and whether an update exists
"""

from .checker import VersionCheckResult, check_latest_release
from .version import (
    AppVersion,
    parse_program_version,
    parse_semantic_version,
    to_semantic_string,
)

__all__ = [
    "VersionCheckResult",
    "check_latest_release",
    "AppVersion",
    "parse_program_version",
    "parse_semantic_version",
    "to_semantic_string",
]
