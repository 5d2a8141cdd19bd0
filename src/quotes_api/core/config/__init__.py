"""Configuration module with YAML and environment variable support."""

from .settings import PairCountStrategy, Settings, get_settings


__all__ = [
    "PairCountStrategy",
    "Settings",
    "get_settings",
]
