"""Tests for the release check cache file."""

from datetime import datetime, timezone

from tunelift.domain.updates.cache import (
    CachedVersionInfo,
    format_timestamp,
    load_cache,
    parse_timestamp,
    save_cache,
)


class TestTimestamps:
    """Tests for cache timestamp handling."""

    def test_format_is_utc(self) -> None:
        """Timestamps are written in UTC without a zone suffix."""
        moment = datetime(2024, 3, 1, 12, 30, 5, tzinfo=timezone.utc)
        assert format_timestamp(moment) == "2024-03-01 12:30:05"

    def test_parse_naive_as_utc(self) -> None:
        """Naive timestamps are read as UTC."""
        parsed = parse_timestamp("2024-03-01 12:30:05")
        assert parsed == datetime(2024, 3, 1, 12, 30, 5, tzinfo=timezone.utc)

    def test_parse_iso(self) -> None:
        """ISO 8601 timestamps are accepted too."""
        parsed = parse_timestamp("2024-03-01T12:30:05+00:00")
        assert parsed == datetime(2024, 3, 1, 12, 30, 5, tzinfo=timezone.utc)

    def test_parse_garbage(self) -> None:
        """Unparsable or missing timestamps give None."""
        assert parse_timestamp("yesterday") is None
        assert parse_timestamp(None) is None
        assert parse_timestamp("") is None


class TestLoadSaveCache:
    """Tests for load_cache and save_cache."""

    def test_missing_file_is_empty(self, tmp_path) -> None:
        """A missing cache file gives an empty record."""
        assert load_cache(tmp_path / "none.ini") == CachedVersionInfo()

    def test_save_then_load(self, tmp_path) -> None:
        """A saved record loads back unchanged."""
        path = tmp_path / "nested" / "version_check.ini"
        info = CachedVersionInfo(last_checked="2024-03-01 12:30:05", latest_version="1.0.6")

        assert save_cache(path, info)
        assert load_cache(path) == info

    def test_file_layout(self, tmp_path) -> None:
        """The file uses the Version section and its two keys."""
        path = tmp_path / "version_check.ini"
        save_cache(path, CachedVersionInfo("2024-03-01 12:30:05", "1.0.6"))
        text = path.read_text(encoding="utf-8")
        assert "[Version]" in text
        assert "LastCheckedTimestamp = 2024-03-01 12:30:05" in text
        assert "LatestKnownVersion = 1.0.6" in text

    def test_version_omitted_when_unknown(self, tmp_path) -> None:
        """An unknown version is not written."""
        path = tmp_path / "version_check.ini"
        save_cache(path, CachedVersionInfo(last_checked="2024-03-01 12:30:05"))
        assert "LatestKnownVersion" not in path.read_text(encoding="utf-8")
        assert load_cache(path).latest_version is None

    def test_corrupt_file_is_empty(self, tmp_path) -> None:
        """A corrupt file gives an empty record."""
        path = tmp_path / "version_check.ini"
        path.write_text("this is not [an ini file\n= nope", encoding="utf-8")
        assert load_cache(path) == CachedVersionInfo()

    def test_missing_section_is_empty(self, tmp_path) -> None:
        """A file without the Version section gives an empty record."""
        path = tmp_path / "version_check.ini"
        path.write_text("[Other]\nkey = value\n", encoding="utf-8")
        assert load_cache(path) == CachedVersionInfo()

    def test_unwritable_location(self, tmp_path) -> None:
        """Saving under a file reports failure instead of raising."""
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not folder")
        assert not save_cache(blocker / "version_check.ini", CachedVersionInfo("x", "1.0.0"))
