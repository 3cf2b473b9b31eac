"""Result models for an aggregation run."""

import hashlib
import json
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from toplists.merger.models import AggregatedEntry


class RankedEntry(BaseModel):
    """One line of the final list.

    Attributes:
        website: Normalized domain key.
        url: Canonical or synthesized URL.
        rank: Source name to rank; sources that did not list the site
            are absent.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    website: Annotated[str, Field(min_length=1)]
    url: Annotated[str, Field(min_length=1)]
    rank: Annotated[dict[str, int], Field(min_length=1)]

    @classmethod
    def from_entry(cls, entry: AggregatedEntry) -> "RankedEntry":
        """Freeze a ranked AggregatedEntry."""
        return cls(website=entry.website, url=entry.url or "", rank=dict(entry.rank))


def compute_checksum(entries: list[RankedEntry]) -> str:
    """Compute SHA-256 checksum of the ordered output.

    Args:
        entries: Entries in output order.

    Returns:
        SHA-256 hex digest.
    """
    data = [entry.model_dump() for entry in entries]
    json_str = json.dumps(data, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(json_str.encode("utf-8")).hexdigest()


class RankedList(BaseModel):
    """Complete result of an aggregation run.

    Attributes:
        entries: Final ordered list.
        primary_source: Name of the primary source.
        local_sources: Names of the local-market sources.
        records_by_source: Records read per source.
        dropped_by_source: Raw items dropped per source.
        entries_total: Number of merged entries.
        output_checksum: SHA-256 of the ordered output JSON.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    entries: list[RankedEntry] = Field(default_factory=list)
    primary_source: str
    local_sources: list[str] = Field(default_factory=list)
    records_by_source: dict[str, int] = Field(default_factory=dict)
    dropped_by_source: dict[str, int] = Field(default_factory=dict)
    entries_total: Annotated[int, Field(ge=0)] = 0
    output_checksum: str = ""

    def to_json_list(self) -> list[dict[str, object]]:
        """Convert the entries to the output record shape."""
        return [entry.model_dump() for entry in self.entries]
