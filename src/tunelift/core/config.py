"""
Configuration management for TuneLift
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class ExportConfig:
    """Options for a single export run.

    Built once from the command line and passed explicitly into the export
    pipeline. Never mutated after construction.
    """

    export_folder: Path
    ignore_smart_playlists: bool = False
    ignore_regular_playlists: bool = False
    ignore_prefix: str = ""  # Case-insensitive name prefix to skip
    use_unix_paths: bool = False  # LF line endings and forward slashes
    find_text: str = ""  # Case-insensitive text to find in track paths
    replace_text: str = ""
    append_eight: bool = False  # .m3u8 instead of .m3u
    not_extended: bool = False  # Basic format without #EXTINF lines
    delete_existing: bool = False
    base_path: str = ""  # Leading path removed from track paths

    @property
    def line_ending(self) -> str:
        return "\n" if self.use_unix_paths else "\r\n"

    @property
    def file_extension(self) -> str:
        return ".m3u8" if self.append_eight else ".m3u"

    def validate(self) -> None:
        """Validate option combinations.

        Raises:
            ValueError: If the options cannot produce a meaningful export
        """
        if self.ignore_smart_playlists and self.ignore_regular_playlists:
            raise ValueError(
                "Ignoring both playlists and smart playlists means nothing to do."
            )
        if self.replace_text and not self.find_text:
            raise ValueError(
                f"No text to find defined for replacement text ('{self.replace_text}')"
            )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_dir: Optional[str] = None  # Default: ~/.local/share/tunelift/logs
    retention_days: int = 14  # Daily log files older than this are removed
    console_output: bool = False  # Mirror log records to stderr

    def validate(self) -> None:
        """Validate logging configuration values.

        Raises:
            ValueError: If configuration values are invalid
        """
        valid_levels = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}
        if self.level not in valid_levels:
            raise ValueError(
                f"Invalid log level: {self.level}. Valid levels are: {sorted(valid_levels)}"
            )
        if self.retention_days < 1:
            raise ValueError("retention_days must be at least 1")


@dataclass
class UpdatesConfig:
    """Configuration for the GitHub release check."""

    check_for_updates: bool = True
    repository: str = "mrsilver76/tunelift"  # owner/repo
    timeout_seconds: float = 10.0

    def validate(self) -> None:
        """Validate release check configuration values.

        Raises:
            ValueError: If configuration values are invalid
        """
        owner, _, repo = self.repository.partition("/")
        if not owner or not repo or "/" in repo:
            raise ValueError(
                f"Invalid repository: {self.repository!r}. Expected 'owner/repo'"
            )
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")


@dataclass
class LibraryConfig:
    """Configuration for the playlist source."""

    xml_path: Optional[str] = None  # Exported library XML, used instead of COM


@dataclass
class Config:
    """Main configuration object."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    updates: UpdatesConfig = field(default_factory=UpdatesConfig)
    library: LibraryConfig = field(default_factory=LibraryConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "tunelift"
    return Path.home() / ".config" / "tunelift"


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Current working directory
    2. XDG_CONFIG_HOME/tunelift (or ~/.config/tunelift)
    """
    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def get_data_dir() -> Path:
    """Get the data directory path (logs and release check cache)."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "tunelift"
    return Path.home() / ".local" / "share" / "tunelift"


def get_log_dir(config: Config) -> Path:
    """Get the folder daily log files are written to."""
    if config.logging.log_dir:
        return Path(config.logging.log_dir)
    return get_data_dir() / "logs"


def get_version_cache_path() -> Path:
    """Get the path of the release check cache file."""
    return get_data_dir() / "version_check.ini"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# TuneLift Configuration

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Folder for daily log files (default: ~/.local/share/tunelift/logs)
# log_dir = "/path/to/logs"

# Days to keep old log files
retention_days = 14

# Also write log records to stderr (useful for debugging)
console_output = false

[updates]
# Check GitHub for a newer release at the end of each run (at most once a week)
check_for_updates = true

# GitHub repository to check, as owner/repo
repository = "mrsilver76/tunelift"

# Seconds to wait for GitHub before giving up
timeout_seconds = 10

[library]
# Read playlists from an exported library XML file instead of the
# iTunes COM interface
# xml_path = "~/Music/iTunes/iTunes Music Library.xml"
""".strip()


def load_config() -> Config:
    """Load configuration from file or create default.

    Invalid sections are reported and replaced with their defaults.
    """
    config_path = get_config_path()

    if not config_path.exists():
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(config_path, "w", encoding="utf-8") as f:
                f.write(create_default_config())
            print(f"Created default configuration at: {config_path}")
        except OSError as e:
            print(f"Unable to create default configuration at {config_path}: {e}")
        return Config()

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        print(f"Error loading configuration from {config_path}: {e}")
        print("Using default configuration.")
        return Config()

    config = Config()

    if "logging" in toml_data:
        logging_data = toml_data["logging"]
        log_dir = logging_data.get("log_dir")
        if log_dir:
            log_dir = str(Path(log_dir).expanduser())
        config.logging = LoggingConfig(
            level=str(logging_data.get("level", config.logging.level)).upper(),
            log_dir=log_dir,
            retention_days=logging_data.get(
                "retention_days", config.logging.retention_days
            ),
            console_output=logging_data.get(
                "console_output", config.logging.console_output
            ),
        )
        try:
            config.logging.validate()
        except (ValueError, TypeError) as e:
            print(f"Warning: Invalid logging configuration: {e}")
            print("Using default logging configuration.")
            config.logging = LoggingConfig()

    if "updates" in toml_data:
        updates_data = toml_data["updates"]
        config.updates = UpdatesConfig(
            check_for_updates=updates_data.get(
                "check_for_updates", config.updates.check_for_updates
            ),
            repository=str(
                updates_data.get("repository", config.updates.repository)
            ),
            timeout_seconds=updates_data.get(
                "timeout_seconds", config.updates.timeout_seconds
            ),
        )
        try:
            config.updates.validate()
        except (ValueError, TypeError) as e:
            print(f"Warning: Invalid updates configuration: {e}")
            print("Using default updates configuration.")
            config.updates = UpdatesConfig()

    if "library" in toml_data:
        xml_path = toml_data["library"].get("xml_path")
        if xml_path:
            xml_path = str(Path(xml_path).expanduser())
        config.library = LibraryConfig(xml_path=xml_path)

    return config
