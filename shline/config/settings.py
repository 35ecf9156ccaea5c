"""
settings.py

This module provides application configuration management for shline.

Features:
- Centralized application configuration using Pydantic settings
- Location of the JSON config file holding stored variables
- Load/save helpers for the stored variable mapping
- Basic JSON validation utilities

Usage:
Import appsettings for application configuration values.
"""

import json
from pathlib import Path
from typing import Any, Final
from appdirs import user_config_dir
from pydantic_settings import BaseSettings, SettingsConfigDict
from shline.lib.log import LOG

# Set up the configuration directory and file using appdirs
CONFIG_DIR: Final[Path] = Path(user_config_dir("shline", ""))
CONFIG_FILE: Final[Path] = CONFIG_DIR / "config.json"


class App(BaseSettings):
    """
    Application settings model.

    Settings can be overridden through environment variables with SHL_ prefix.

    Attributes:
        beQuiet: Suppress detailed logging output
        noEnv: Do not consult the process environment when expanding
        strict: Abort expansion when a variable cannot be resolved
        commandLogPrefix: Prefix written before each logged command
    """

    beQuiet: bool = False
    noEnv: bool = False
    strict: bool = False
    commandLogPrefix: str = "+"

    model_config = SettingsConfigDict(
        env_prefix="SHL_",  # Environment variables with this prefix override settings
        case_sensitive=False,  # Allow case-insensitive environment variables
        extra="allow",  # Allow additional attributes not defined in the model
    )


def json_validate(data: dict[str, Any]) -> bool:
    """
    Validate if the provided data is serializable as JSON.

    Args:
        data: The data dictionary to validate

    Returns:
        bool: True if valid JSON, False otherwise
    """
    try:
        json.dumps(data)
        return True
    except (TypeError, ValueError) as e:
        LOG(f"Invalid JSON data: {e}")
        return False


def config_varsLoad(config_file: Path | None = None) -> dict[str, str]:
    """
    Read the stored variable mapping from the config file.

    A missing file yields an empty mapping. A file that cannot be decoded,
    or whose "vars" entry is not an object, is logged and treated as empty.

    Args:
        config_file: Alternate config file path (defaults to CONFIG_FILE)

    Returns:
        dict[str, str]: Variable names mapped to their values
    """
    path: Path = config_file or CONFIG_FILE
    if not path.exists():
        return {}
    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        LOG(f"Could not read config file {path}: {e}")
        return {}

    stored: Any = data.get("vars", {}) if isinstance(data, dict) else None
    if not isinstance(stored, dict):
        LOG(f"Ignoring malformed 'vars' entry in {path}")
        return {}
    return {str(k): str(v) for k, v in stored.items()}


def config_varsSave(variables: dict[str, str], config_file: Path | None = None) -> bool:
    """
    Persist the variable mapping to the config file.

    Creates the config directory if it doesn't exist. Other top-level keys
    already in the file are preserved.

    Args:
        variables: Variable names mapped to their values
        config_file: Alternate config file path (defaults to CONFIG_FILE)

    Returns:
        bool: True if the file was written
    """
    path: Path = config_file or CONFIG_FILE
    data: dict[str, Any] = {}
    if path.exists():
        try:
            loaded: Any = json.loads(path.read_text(encoding="utf-8"))
            if isinstance(loaded, dict):
                data = loaded
        except (OSError, json.JSONDecodeError) as e:
            LOG(f"Overwriting unreadable config file {path}: {e}")
    data["vars"] = dict(variables)

    if not json_validate(data):
        return False
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return True
    except OSError as e:
        LOG(f"Could not write config file {path}: {e}")
        return False


# Create the application settings instance
appsettings: Final[App] = App()
