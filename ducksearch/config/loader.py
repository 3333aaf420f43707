"""Configuration loading utilities."""

import json
import os
from pathlib import Path

from loguru import logger

from ducksearch.config.schema import Config

CONFIG_PATH_ENV = "DUCKSEARCH_CONFIG"


def get_config_path() -> Path:
    """Get the configuration file path, honouring $DUCKSEARCH_CONFIG."""
    override = os.environ.get(CONFIG_PATH_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / ".ducksearch" / "config.json"


def load_config(config_path: Path | None = None) -> Config:
    """
    Load configuration from file or create default.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        Loaded configuration object. Missing or malformed files yield defaults.
    """
    path = config_path or get_config_path()
    if not path.exists():
        return Config()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return Config.model_validate(data)
    except (json.JSONDecodeError, ValueError) as e:
        logger.warning("Failed to load config from {}: {}; using defaults", path, e)
        return Config()


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Write `config` as camelCase JSON, creating parent directories."""
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(by_alias=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
