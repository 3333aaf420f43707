"""Configuration for ducksearch."""

from ducksearch.config.loader import get_config_path, load_config, save_config
from ducksearch.config.schema import Config

__all__ = ["Config", "get_config_path", "load_config", "save_config"]
