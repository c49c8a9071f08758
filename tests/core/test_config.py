"""Tests for configuration loading."""

import tomllib
from pathlib import Path

import pytest

from tunelift.core.config import (
    Config,
    ExportConfig,
    create_default_config,
    get_config_path,
    get_log_dir,
    get_version_cache_path,
    load_config,
)


class TestExportConfig:
    """Tests for ExportConfig."""

    def test_defaults(self) -> None:
        """Defaults give CRLF endings and the .m3u extension."""
        config = ExportConfig(export_folder=Path("out"))
        assert config.line_ending == "\r\n"
        assert config.file_extension == ".m3u"
        config.validate()

    def test_unix_and_m3u8(self) -> None:
        """Unix paths switch to LF, append_eight to .m3u8."""
        config = ExportConfig(export_folder=Path("out"), use_unix_paths=True, append_eight=True)
        assert config.line_ending == "\n"
        assert config.file_extension == ".m3u8"

    def test_ignoring_everything_is_invalid(self) -> None:
        """Ignoring both playlist types is rejected."""
        config = ExportConfig(
            export_folder=Path("out"),
            ignore_smart_playlists=True,
            ignore_regular_playlists=True,
        )
        with pytest.raises(ValueError, match="nothing to do"):
            config.validate()

    def test_replace_requires_find(self) -> None:
        """Replacement text needs find text."""
        config = ExportConfig(export_folder=Path("out"), replace_text="/mnt")
        with pytest.raises(ValueError, match=r"No text to find defined for replacement text \('/mnt'\)"):
            config.validate()

    def test_find_without_replace_is_valid(self) -> None:
        """Find text alone is allowed."""
        ExportConfig(export_folder=Path("out"), find_text="C:\\").validate()

    def test_immutable(self) -> None:
        """Export settings cannot change after construction."""
        config = ExportConfig(export_folder=Path("out"))
        with pytest.raises(AttributeError):
            config.append_eight = True


class TestLoadConfig:
    """Tests for load_config."""

    def test_creates_default_file(self, tmp_path, capsys) -> None:
        """A default config.toml is written on first load."""
        config = load_config()

        expected = tmp_path / "config" / "tunelift" / "config.toml"
        assert expected.exists()
        assert "Created default configuration at:" in capsys.readouterr().out
        assert config == Config()

    def test_default_file_round_trips(self) -> None:
        """The default file loads back as the default config."""
        data = tomllib.loads(create_default_config())
        assert data["updates"]["repository"] == "mrsilver76/tunelift"
        assert data["logging"]["retention_days"] == 14

        load_config()  # writes the default
        assert load_config() == Config()

    def test_working_directory_file_wins(self, tmp_path) -> None:
        """A config.toml in the working directory is preferred."""
        local = Path.cwd() / "config.toml"
        local.write_text('[updates]\ncheck_for_updates = false\n', encoding="utf-8")

        assert get_config_path() == local
        assert load_config().updates.check_for_updates is False

    def test_values_loaded(self, tmp_path) -> None:
        """Values from every section are applied."""
        (Path.cwd() / "config.toml").write_text(
            "[logging]\n"
            'level = "debug"\n'
            f'log_dir = "{(tmp_path / "logs").as_posix()}"\n'
            "retention_days = 3\n"
            "[updates]\n"
            'repository = "someone/fork"\n'
            "timeout_seconds = 2.5\n"
            "[library]\n"
            'xml_path = "/tmp/library.xml"\n',
            encoding="utf-8",
        )

        config = load_config()

        assert config.logging.level == "DEBUG"
        assert config.logging.retention_days == 3
        assert get_log_dir(config) == tmp_path / "logs"
        assert config.updates.repository == "someone/fork"
        assert config.updates.timeout_seconds == 2.5
        assert config.library.xml_path == str(Path("/tmp/library.xml"))

    def test_invalid_section_falls_back(self, capsys) -> None:
        """Invalid sections fall back to defaults with a warning."""
        (Path.cwd() / "config.toml").write_text(
            '[logging]\nlevel = "LOUD"\n[updates]\nrepository = "no-slash"\n',
            encoding="utf-8",
        )

        config = load_config()

        assert config.logging.level == "INFO"
        assert config.updates.repository == "mrsilver76/tunelift"
        out = capsys.readouterr().out
        assert "Invalid logging configuration" in out
        assert "Invalid updates configuration" in out

    def test_broken_toml_uses_defaults(self, capsys) -> None:
        """Unparsable TOML gives the default config."""
        (Path.cwd() / "config.toml").write_text("[logging\nlevel =", encoding="utf-8")
        assert load_config() == Config()
        assert "Using default configuration." in capsys.readouterr().out


class TestPaths:
    """Tests for data paths."""

    def test_default_log_dir(self, tmp_path) -> None:
        """Logs default to the data directory."""
        assert get_log_dir(Config()) == tmp_path / "data" / "tunelift" / "logs"

    def test_version_cache_path(self, tmp_path) -> None:
        """The release cache lives in the data directory."""
        assert get_version_cache_path() == tmp_path / "data" / "tunelift" / "version_check.ini"
