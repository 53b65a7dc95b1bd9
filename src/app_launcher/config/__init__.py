"""Configuration loading and schema definitions."""

from app_launcher.config.loader import load_config
from app_launcher.config.schema import Config, IconConfig, LaunchConfig, SearchConfig

__all__ = [
    "Config",
    "IconConfig",
    "LaunchConfig",
    "SearchConfig",
    "load_config",
]
