"""Data models for merged domain entries."""

from dataclasses import dataclass, field


@dataclass
class AggregatedEntry:
    """One site after merging all sources.

    Attributes:
        website: Normalized domain key.
        url: Canonical URL from the primary source, or None until the
            ranker synthesizes one.
        rank: Source name to that source's rank for this site.
    """

    website: str
    url: str | None = None
    rank: dict[str, int] = field(default_factory=dict)

    def copy(self) -> "AggregatedEntry":
        """Return an independent copy of this entry."""
        return AggregatedEntry(website=self.website, url=self.url, rank=dict(self.rank))

    def to_json_dict(self) -> dict[str, object]:
        """Convert to the output record shape.

        Returns:
            Dictionary with website, url and rank keys.
        """
        return {
            "website": self.website,
            "url": self.url,
            "rank": dict(self.rank),
        }
