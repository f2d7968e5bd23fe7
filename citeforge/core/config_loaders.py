"""
Configuration Loading and Management Functions.

Handles loading, saving, and applying environment overrides to CiteForge
configuration.

Configuration precedence: 1. Env vars, 2. YAML file, 3. Defaults

Environment Variables
---------------------
    CITEFORGE_REFERENCES_DIR   Reference data directory
    CITEFORGE_DEFAULT_SOURCE   Default reference source name
    CITEFORGE_LOG_LEVEL        Log level used by the CLI
"""

import os
import re
from pathlib import Path
from typing import Any, Optional, TYPE_CHECKING

import yaml

from citeforge.core.constants import is_valid_source_name
from citeforge.core.exceptions import CiteForgeError

if TYPE_CHECKING:
    from citeforge.core.config import Config

CONFIG_FILENAMES = ("citeforge.yaml", "config.yaml")
LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class _Logger:
    """Lazy logger holder.

    Avoids importing rich at config-import time.
    """

    _instance = None

    @classmethod
    def get(cls) -> Any:
        """Get logger (lazy-loaded)."""
        if cls._instance is None:
            from citeforge.core.logging import get_logger

            cls._instance = get_logger(__name__)
        return cls._instance


def expand_env_vars(value: Any) -> Any:
    """Recursively expand environment variables in config values.

    Handles nested structures including:
    - Strings with ${VAR_NAME} or ${VAR_NAME:default} syntax
    - Nested dictionaries
    - Nested lists

    Args:
        value: Configuration value (string, dict, list, or primitive)

    Returns:
        Value with all environment variables expanded
    """
    if isinstance(value, str):
        pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

        def replace_env_var(match: re.Match) -> str:
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return re.sub(pattern, replace_env_var, value)
    elif isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    return value


def _apply_env_overrides(config: "Config") -> "Config":
    """
    Apply environment variable overrides to configuration.

    Environment variables take precedence over config file values.
    Invalid values are ignored with a warning.
    """
    references_dir = os.environ.get("CITEFORGE_REFERENCES_DIR")
    if references_dir and references_dir.strip() not in ("/", "\\"):
        config.references.directory = references_dir.strip()

    default_source = os.environ.get("CITEFORGE_DEFAULT_SOURCE")
    if default_source:
        if is_valid_source_name(default_source):
            config.references.default_source = default_source
        else:
            _Logger.get().warning(
                "Ignoring invalid CITEFORGE_DEFAULT_SOURCE",
                value=default_source,
            )

    return config


def get_log_level(default: str = "INFO") -> str:
    """Return the log level from CITEFORGE_LOG_LEVEL, or default."""
    level = os.environ.get("CITEFORGE_LOG_LEVEL", "").strip().upper()
    if level in LOG_LEVELS:
        return level
    return default


def load_config(
    config_path: Optional[Path] = None, base_path: Optional[Path] = None
) -> "Config":
    """
    Load configuration from YAML file with environment variable overrides.

    A config file that cannot be read or fails validation is reported and
    replaced by the defaults; it never stops a build.

    Args:
        config_path: Path to config file. Defaults to citeforge.yaml (or
            config.yaml) in base_path.
        base_path: Base path for the project. Defaults to current directory,
            or the config file's directory when config_path is given.

    Returns:
        Config object with all settings.
    """
    # Lazy import to avoid circular dependency
    from citeforge.core.config import Config

    if base_path is None:
        base_path = config_path.parent if config_path else Path.cwd()

    if config_path is None:
        for filename in CONFIG_FILENAMES:
            candidate = base_path / filename
            if candidate.exists():
                config_path = candidate
                break
        else:
            return _create_default_config(base_path)
    if not config_path.exists():
        _Logger.get().warning("Config file not found", path=str(config_path))
        return _create_default_config(base_path)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise CiteForgeError(
                f"Top level of {config_path.name} must be a mapping"
            )
        config = Config.from_dict(data, base_path)
        return _apply_env_overrides(config)

    except (OSError, yaml.YAMLError, CiteForgeError) as e:
        _Logger.get().warning(
            "Could not load config, using defaults",
            path=str(config_path),
            error=str(e),
        )
        return _create_default_config(base_path)


def _create_default_config(base_path: Path) -> "Config":
    """Create default configuration with environment overrides."""
    from citeforge.core.config import Config

    config = Config()
    config._base_path = base_path
    return _apply_env_overrides(config)


def save_config(config: "Config", config_path: Optional[Path] = None) -> None:
    """Save configuration to YAML file."""
    if config_path is None:
        config_path = config._base_path / CONFIG_FILENAMES[0]

    config_dict = config.to_dict()

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)
