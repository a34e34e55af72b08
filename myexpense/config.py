"""Configuration file management for myexpense."""

import copy
import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

DEFAULT_CONFIG: dict[str, Any] = {
    "storage": {"medium": "local"},
    "remote": {
        "base_url": "",
        "collection": "transactions",
        "token_env": "MYEXPENSE_REMOTE_TOKEN",
        "timeout": 10,
    },
    "display": {"currency": "₹"},
    "logging": {"level": "WARNING"},
}

MEDIA = ("local", "remote")


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "myexpense" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    save_config(copy.deepcopy(DEFAULT_CONFIG), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file, filling in defaults.

    A missing file yields the defaults.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary with every default section present.

    Raises:
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    config = copy.deepcopy(DEFAULT_CONFIG)
    if not config_path.exists():
        return config

    with open(config_path, "rb") as f:
        loaded = tomllib.load(f)

    for section, values in loaded.items():
        if isinstance(values, dict) and isinstance(config.get(section), dict):
            config[section].update(values)
        else:
            config[section] = values
    return config


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def get_setting(config: dict[str, Any], section: str, key: str) -> Any:
    """Read a setting, falling back to the built-in default."""
    value = config.get(section, {}).get(key)
    if value is None:
        return DEFAULT_CONFIG.get(section, {}).get(key)
    return value


def get_medium_name(config: dict[str, Any]) -> str:
    """Get the configured backing medium name.

    Raises:
        ValueError: If the medium is not local or remote.
    """
    medium = str(get_setting(config, "storage", "medium")).lower()
    if medium not in MEDIA:
        raise ValueError(f"Unknown storage medium {medium!r} (expected one of: {', '.join(MEDIA)})")
    return medium
