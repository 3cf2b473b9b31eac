"""Data models for source list records."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceRecord:
    """One entry of one ranking list in the uniform shape.

    Attributes:
        domain: Domain as published by the source (not yet normalized).
        rank: 1-based rank within the source; passed through unchecked.
        url: Canonical URL if the source supplies one.
        category: Site category if the source supplies one.
    """

    domain: str
    rank: int
    url: str | None = None
    category: str | None = None


@dataclass
class ReadStats:
    """Counts collected while reading one source.

    Attributes:
        source_name: Name of the source.
        items_in: Raw items seen.
        records_out: Records emitted.
        invalid_item: Items dropped for not being mappings.
        missing_domain: Items dropped for lacking a domain.
        invalid_rank: Items dropped for lacking an integer rank.
    """

    source_name: str
    items_in: int = 0
    records_out: int = 0
    invalid_item: int = 0
    missing_domain: int = 0
    invalid_rank: int = 0

    @property
    def dropped(self) -> int:
        """Total items dropped."""
        return self.invalid_item + self.missing_domain + self.invalid_rank
