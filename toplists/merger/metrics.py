"""Metrics collection for the merger module."""

from dataclasses import dataclass, field
from typing import ClassVar


@dataclass
class MergerMetrics:
    """Metrics for merge operations.

    Attributes:
        records_in: Records folded per source.
        empty_keys: Records dropped per source for an empty key.
        primary_overrides: Primary duplicates that replaced a larger rank.
        primary_duplicates_kept: Primary duplicates that did not override.
        entries_seeded: Entries first created by each source.
        entries_out: Entries in the merged mapping.
    """

    records_in: dict[str, int] = field(default_factory=dict)
    empty_keys: dict[str, int] = field(default_factory=dict)
    primary_overrides: int = 0
    primary_duplicates_kept: int = 0
    entries_seeded: dict[str, int] = field(default_factory=dict)
    entries_out: int = 0

    _instance: ClassVar["MergerMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "MergerMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_records_in(self, source_name: str, count: int) -> None:
        """Record how many records a source contributed.

        Args:
            source_name: Source name.
            count: Number of records.
        """
        self.records_in[source_name] = count

    def record_empty_key(self, source_name: str) -> None:
        """Record a record dropped for normalizing to the empty key.

        Args:
            source_name: Source name.
        """
        self.empty_keys[source_name] = self.empty_keys.get(source_name, 0) + 1

    def record_primary_duplicate(self, overridden: bool) -> None:
        """Record a repeated primary key.

        Args:
            overridden: Whether the duplicate replaced the stored rank.
        """
        if overridden:
            self.primary_overrides += 1
        else:
            self.primary_duplicates_kept += 1

    def record_entry_seeded(self, source_name: str) -> None:
        """Record a new entry created by a source.

        Args:
            source_name: Source name.
        """
        self.entries_seeded[source_name] = self.entries_seeded.get(source_name, 0) + 1

    def record_entries_out(self, count: int) -> None:
        """Record the merged entry count.

        Args:
            count: Number of merged entries.
        """
        self.entries_out = count

    def to_dict(self) -> dict[str, object]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "records_in": self.records_in,
            "empty_keys": self.empty_keys,
            "primary_overrides": self.primary_overrides,
            "primary_duplicates_kept": self.primary_duplicates_kept,
            "entries_seeded": self.entries_seeded,
            "entries_out": self.entries_out,
        }
