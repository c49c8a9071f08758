"""
GitHub release check.

Asks GitHub for the latest release at most once every CHECK_INTERVAL,
remembering the answer in a small cache file. Never prints and never raises:
a failed check simply reports no update.
"""

import re
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import NamedTuple, Optional

import requests
from loguru import logger

from .cache import (
    CachedVersionInfo,
    format_timestamp,
    load_cache,
    parse_timestamp,
    save_cache,
)
from .version import AppVersion, parse_semantic_version, to_semantic_string

GITHUB_API_URL = "https://api.github.com"
CHECK_INTERVAL = timedelta(days=7)
DEFAULT_TIMEOUT = 10.0  # seconds

TAG_NAME_PATTERN = re.compile(r'"tag_name"\s*:\s*"([^"]+)"')


class VersionCheckResult(NamedTuple):
    """Outcome of a release check."""

    update_available: bool
    latest_version: Optional[AppVersion]


class FetchResult(NamedTuple):
    """A response from GitHub; version is None when no usable tag was found."""

    version: Optional[str]
    checked_at: datetime


def needs_check(info: CachedVersionInfo, now: Optional[datetime] = None) -> bool:
    """
    Check whether the cached answer is too old to trust.

    Args:
        info: Cached record
        now: Current time (default: now, UTC)

    Returns:
        True if the timestamp is missing, unparsable or CHECK_INTERVAL old
    """
    last_checked = parse_timestamp(info.last_checked)
    if last_checked is None:
        return True

    now = now or datetime.now(timezone.utc)
    return now - last_checked >= CHECK_INTERVAL


def build_user_agent(repo: str, current_version: AppVersion) -> str:
    """GitHub rejects requests without a User-Agent; identify as owner.repo/version."""
    return f"{repo.replace('/', '.')}/{to_semantic_string(current_version)}"


def extract_tag_version(body: str) -> Optional[str]:
    """
    Pull the release version out of a releases/latest response body.

    A single leading "v" or "V" is removed from the tag.

    Returns:
        Version text such as "1.2.3", or None if the body has no tag_name
    """
    match = TAG_NAME_PATTERN.search(body)
    if not match:
        return None

    tag = match.group(1).strip()
    if tag[:1] in ("v", "V"):
        tag = tag[1:]
    return tag or None


def fetch_latest_version(
    repo: str, current_version: AppVersion, timeout: float = DEFAULT_TIMEOUT
) -> Optional[FetchResult]:
    """
    Ask GitHub for the latest release of a repository.

    Args:
        repo: Repository as owner/repo
        current_version: Running version (sent in the User-Agent)
        timeout: Seconds to wait for GitHub

    Returns:
        FetchResult for any HTTP response (version None on error status or
        unexpected body), or None if GitHub could not be reached at all
    """
    url = f"{GITHUB_API_URL}/repos/{repo}/releases/latest"
    headers = {
        "User-Agent": build_user_agent(repo, current_version),
        "Accept": "application/vnd.github+json",
    }

    try:
        response = requests.get(url, headers=headers, timeout=timeout)
    except requests.RequestException as e:
        logger.debug(f"Release check failed for {repo}: {e}")
        return None

    checked_at = datetime.now(timezone.utc)

    if not response.ok:
        logger.debug(f"Release check for {repo} returned HTTP {response.status_code}")
        return FetchResult(None, checked_at)

    version = extract_tag_version(response.text)
    if version is None:
        logger.debug(f"No tag_name in release response for {repo}")
    return FetchResult(version, checked_at)


def check_latest_release(
    current_version: AppVersion,
    repo: str,
    cache_path: Path,
    timeout: float = DEFAULT_TIMEOUT,
) -> VersionCheckResult:
    """
    Determine whether a newer release than the running one exists.

    GitHub is only contacted when the cached answer is missing or at least
    CHECK_INTERVAL old. Any response refreshes the cached timestamp, so a
    repository without usable releases is not asked again until the interval
    passes; the cached version only changes when a valid major.minor.patch
    tag is found.

    Args:
        current_version: Running version
        repo: GitHub repository as owner/repo
        cache_path: INI file holding the cached answer
        timeout: Seconds to wait for GitHub

    Returns:
        VersionCheckResult(update_available, latest_version)
    """
    info = load_cache(cache_path)

    if needs_check(info):
        fetched = fetch_latest_version(repo, current_version, timeout=timeout)
        if fetched is not None:
            info.last_checked = format_timestamp(fetched.checked_at)
            if parse_semantic_version(fetched.version) is not None:
                info.latest_version = fetched.version
            save_cache(cache_path, info)

    latest = parse_semantic_version(info.latest_version)
    update_available = latest is not None and latest > current_version

    return VersionCheckResult(update_available, latest)
