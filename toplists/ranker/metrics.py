"""Metrics collection for the ranker module."""

from dataclasses import dataclass
from typing import ClassVar


@dataclass
class RankerMetrics:
    """Metrics for ranking operations.

    Attributes:
        entries_in: Number of merged entries ranked.
        local_tier_count: Entries with at least one local-market rank.
        primary_only_count: Entries ranked by the primary source alone.
        urls_synthesized: Entries given an ``https://`` URL.
        ranking_duration_ms: Time spent sorting.
    """

    entries_in: int = 0
    local_tier_count: int = 0
    primary_only_count: int = 0
    urls_synthesized: int = 0
    ranking_duration_ms: float = 0.0

    _instance: ClassVar["RankerMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "RankerMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_entries_in(self, count: int) -> None:
        """Record input entry count.

        Args:
            count: Number of entries.
        """
        self.entries_in = count

    def record_tiers(self, local: int, primary_only: int) -> None:
        """Record entry counts per tier.

        Args:
            local: Entries in the local-market tier.
            primary_only: Entries in the primary-only tier.
        """
        self.local_tier_count = local
        self.primary_only_count = primary_only

    def record_urls_synthesized(self, count: int) -> None:
        """Record how many URLs were synthesized.

        Args:
            count: Number of synthesized URLs.
        """
        self.urls_synthesized = count

    def record_ranking_duration(self, duration_ms: float) -> None:
        """Record ranking duration.

        Args:
            duration_ms: Duration in milliseconds.
        """
        self.ranking_duration_ms = duration_ms

    def to_dict(self) -> dict[str, object]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "entries_in": self.entries_in,
            "local_tier_count": self.local_tier_count,
            "primary_only_count": self.primary_only_count,
            "urls_synthesized": self.urls_synthesized,
            "ranking_duration_ms": self.ranking_duration_ms,
        }
