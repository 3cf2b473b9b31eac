"""Configuration loading and validation module."""

from toplists.config.effective import EffectiveConfig
from toplists.config.loader import (
    ConfigLoader,
    ConfigLoaderReuseError,
    ConfigValidationError,
    LoaderState,
)
from toplists.config.schemas import SourceConfig, SourcesConfig


__all__ = [
    "ConfigLoader",
    "ConfigLoaderReuseError",
    "ConfigValidationError",
    "EffectiveConfig",
    "LoaderState",
    "SourceConfig",
    "SourcesConfig",
]
