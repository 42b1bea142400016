"""Configuration module: exports Settings and load_config."""

from eventfinder.config.loader import load_config
from eventfinder.config.settings import Settings

__all__ = ["Settings", "load_config"]
