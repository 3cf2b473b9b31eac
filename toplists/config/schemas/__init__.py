"""Configuration schemas."""

from toplists.config.schemas.sources import SourceConfig, SourcesConfig


__all__ = [
    "SourceConfig",
    "SourcesConfig",
]
