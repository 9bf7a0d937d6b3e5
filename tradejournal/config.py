"""Configuration loading for TradeJournal.

Settings live in ``config.toml`` inside the config directory, which
defaults to ``~/.config/tradejournal`` and can be moved with the
``TRADEJOURNAL_HOME`` environment variable.
"""

import copy
import os
from pathlib import Path
from typing import Optional

import toml

from tradejournal.errors import JournalError

ENV_HOME = "TRADEJOURNAL_HOME"
CONFIG_FILE = "config.toml"

DEFAULT_CONFIG = {
    "store": {
        "db_name": "journal.db",
    },
    "logging": {
        "level": "WARNING",
    },
    "display": {
        "currency": "$",
    },
}


def get_config_dir(config_dir: Optional[Path] = None) -> Path:
    """Resolve the config directory.

    Args:
        config_dir: Explicit directory, takes precedence when given.

    Returns:
        Path to the config directory (not created).
    """
    if config_dir is not None:
        return Path(config_dir)
    env_home = os.environ.get(ENV_HOME)
    if env_home:
        return Path(env_home)
    return Path.home() / ".config" / "tradejournal"


def _merge(base: dict, override: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_dir: Optional[Path] = None) -> dict:
    """Load configuration, falling back to defaults for missing keys.

    Args:
        config_dir: Config directory; resolved with get_config_dir().

    Returns:
        Configuration dictionary.

    Raises:
        JournalError: If the config file exists but is not valid TOML.
    """
    config_path = get_config_dir(config_dir) / CONFIG_FILE

    if not config_path.exists():
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        user_config = toml.load(config_path)
    except toml.TomlDecodeError as e:
        raise JournalError(f"Invalid config file {config_path}: {e}") from e

    return _merge(DEFAULT_CONFIG, user_config)


def write_default_config(config_dir: Optional[Path] = None) -> Path:
    """Create a template configuration file if none exists.

    Returns:
        Path to the config file.
    """
    directory = get_config_dir(config_dir)
    directory.mkdir(parents=True, exist_ok=True)
    config_path = directory / CONFIG_FILE

    if not config_path.exists():
        with open(config_path, "w") as f:
            toml.dump(DEFAULT_CONFIG, f)

    return config_path


def get_db_path(config: dict, config_dir: Optional[Path] = None) -> Path:
    """Path to the SQLite journal database."""
    return get_config_dir(config_dir) / config["store"]["db_name"]
