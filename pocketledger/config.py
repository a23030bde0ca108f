"""Configuration file management for pocketledger."""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from pocketledger.store.schema import DB_ENV_VAR, get_db_path

DEFAULT_LOG_LEVEL = "WARNING"


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
    return get_xdg_config_home() / "pocketledger" / "config.toml"


def default_config() -> dict[str, Any]:
    return {
        "log_level": DEFAULT_LOG_LEVEL,
        "display": {"currency_symbol": ""},
    }


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)
    save_config(default_config(), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary. Missing keys are filled from the defaults,
        and a missing file yields the defaults.

    Raises:
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    config = default_config()
    if not config_path.exists():
        return config

    with open(config_path, "rb") as f:
        loaded = tomllib.load(f)

    display = {**config["display"], **loaded.get("display", {})}
    config.update(loaded)
    config["display"] = display
    return config


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def resolve_db_path(config: dict[str, Any]) -> Path:
    """Pick the database path: environment, then config ``db_path``, then XDG default."""
    if os.environ.get(DB_ENV_VAR):
        return get_db_path()
    configured = config.get("db_path")
    if configured:
        return Path(configured).expanduser()
    return get_db_path()


def get_currency_symbol(config: dict[str, Any]) -> str:
    return str(config.get("display", {}).get("currency_symbol", ""))
