"""Configuration and logging helpers."""

from .config import DEFAULT_CONFIG, ConfigManager
from .logging import setup_logging

__all__ = ["DEFAULT_CONFIG", "ConfigManager", "setup_logging"]
