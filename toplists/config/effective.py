"""Effective configuration for an aggregation run."""

import hashlib
import json
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from toplists.config.schemas.sources import SourceConfig, SourcesConfig


class EffectiveConfig(BaseModel):
    """Validated, immutable configuration used throughout a run.

    Attributes:
        sources: Validated sources configuration.
        file_checksums: SHA-256 checksums of loaded files.
        run_id: Unique identifier for the run.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    sources: SourcesConfig
    file_checksums: Annotated[dict[str, str], Field(default_factory=dict)]
    run_id: str

    @property
    def primary_source(self) -> SourceConfig | None:
        """The enabled source that is authoritative for URLs, if any."""
        for source in self.get_enabled_sources():
            if source.primary:
                return source
        return None

    @property
    def local_sources(self) -> list[SourceConfig]:
        """Enabled sources other than the primary, in declaration order."""
        return [s for s in self.get_enabled_sources() if not s.primary]

    def to_normalized_json(self) -> str:
        """Convert to JSON with sorted keys and compact separators.

        Returns:
            JSON string with stable ordering.
        """
        data = self.model_dump(mode="json")
        return json.dumps(data, sort_keys=True, separators=(",", ":"))

    def compute_checksum(self) -> str:
        """Compute SHA-256 checksum of the normalized configuration.

        Returns:
            Hex-encoded SHA-256 checksum.
        """
        normalized = self.to_normalized_json()
        return hashlib.sha256(normalized.encode("utf-8")).hexdigest()

    def get_source_by_name(self, name: str) -> SourceConfig | None:
        """Get a source configuration by name.

        Args:
            name: The source name to look up.

        Returns:
            SourceConfig if found, None otherwise.
        """
        for source in self.sources.sources:
            if source.name == name:
                return source
        return None

    def get_enabled_sources(self) -> list[SourceConfig]:
        """Get all enabled sources in declaration order."""
        return [s for s in self.sources.sources if s.enabled]

    def summary(self) -> dict[str, object]:
        """Get a summary of the effective configuration.

        Returns:
            Dictionary with summary information.
        """
        primary = self.primary_source
        return {
            "run_id": self.run_id,
            "sources_count": len(self.sources.sources),
            "enabled_sources_count": len(self.get_enabled_sources()),
            "primary_source": primary.name if primary else None,
            "output": self.sources.output,
            "config_checksum": self.compute_checksum(),
            "file_checksums": self.file_checksums,
        }
