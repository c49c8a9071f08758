"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Logging (Loguru)
- Console management (Rich)

Clean architecture principle: The core layer has no dependencies on
domain or application layers.
"""

# Configuration
from .config import (
    Config,
    ExportConfig,
    load_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    get_log_dir,
    get_version_cache_path,
    create_default_config,
)

# Output
from .output import log, setup_loguru

# Console
from .console import get_console, safe_print

__all__ = [
    # Config
    "Config",
    "ExportConfig",
    "load_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "get_log_dir",
    "get_version_cache_path",
    "create_default_config",
    # Output
    "log",
    "setup_loguru",
    # Console
    "get_console",
    "safe_print",
]
