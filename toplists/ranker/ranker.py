"""Composite ranker ordering merged entries into the final list."""

import time
from collections.abc import Collection, Mapping

import structlog

from toplists.merger.models import AggregatedEntry
from toplists.ranker.constants import (
    MISSING_RANK,
    SYNTHESIZED_URL_SCHEME,
    TIER_LOCAL_MARKET,
    TIER_PRIMARY_ONLY,
)
from toplists.ranker.metrics import RankerMetrics


logger = structlog.get_logger()

# (tier, -local count, mean local rank, min local rank, primary rank, website)
SortKey = tuple[int, int, float, float, float, str]


def local_ranks(entry: AggregatedEntry, local_sources: Collection[str]) -> list[int]:
    """Collect the entry's ranks from local-market sources.

    Args:
        entry: Merged entry.
        local_sources: Names of the local-market sources.

    Returns:
        Ranks in the entry's source order.
    """
    return [rank for name, rank in entry.rank.items() if name in local_sources]


def composite_sort_key(
    entry: AggregatedEntry,
    local_sources: Collection[str],
    primary_source: str | None,
) -> SortKey:
    """Build the sort key of an entry.

    Entries ranked by any local-market source come first, by more
    sources, then lower mean rank, then lower best rank. Entries ranked
    only by the primary source follow, by primary rank. The website key
    breaks every remaining tie.

    Args:
        entry: Merged entry.
        local_sources: Names of the local-market sources.
        primary_source: Name of the primary source.

    Returns:
        Tuple compared lexicographically; smaller sorts first.
    """
    ranks = local_ranks(entry, local_sources)
    if ranks:
        return (
            TIER_LOCAL_MARKET,
            -len(ranks),
            sum(ranks) / len(ranks),
            float(min(ranks)),
            0.0,
            entry.website,
        )

    primary_rank = entry.rank.get(primary_source) if primary_source else None
    return (
        TIER_PRIMARY_ONLY,
        0,
        0.0,
        0.0,
        MISSING_RANK if primary_rank is None else float(primary_rank),
        entry.website,
    )


def synthesize_url(website: str) -> str:
    """Build the fallback URL for a website key."""
    return f"{SYNTHESIZED_URL_SCHEME}{website}"


def rank_entries(
    entries: Mapping[str, AggregatedEntry],
    local_sources: Collection[str],
    primary_source: str | None = None,
) -> list[AggregatedEntry]:
    """Order merged entries and fill in missing URLs.

    The input entries are left untouched; the result holds copies.

    Args:
        entries: Merged entries keyed by normalized domain.
        local_sources: Names of the local-market sources.
        primary_source: Name of the primary source.

    Returns:
        Entries in final order, each with a URL.
    """
    local = frozenset(local_sources)
    ordered = sorted(
        (entry.copy() for entry in entries.values()),
        key=lambda e: composite_sort_key(e, local, primary_source),
    )

    for entry in ordered:
        if not entry.url:
            entry.url = synthesize_url(entry.website)

    return ordered


class CompositeRanker:
    """Ranks merged entries with logging and metrics."""

    def __init__(
        self,
        run_id: str,
        local_sources: Collection[str],
        primary_source: str | None,
        metrics: RankerMetrics | None = None,
    ) -> None:
        """Initialize the ranker.

        Args:
            run_id: Run identifier for logging.
            local_sources: Names of the local-market sources.
            primary_source: Name of the primary source.
            metrics: Optional metrics instance.
        """
        self._run_id = run_id
        self._local_sources = frozenset(local_sources)
        self._primary_source = primary_source
        self._metrics = metrics or RankerMetrics.get_instance()
        self._log = logger.bind(component="ranker", run_id=run_id)

    def rank(self, entries: Mapping[str, AggregatedEntry]) -> list[AggregatedEntry]:
        """Rank merged entries.

        Args:
            entries: Merged entries keyed by normalized domain.

        Returns:
            Entries in final order, each with a URL.
        """
        self._log.info("ranking_started", entries_in=len(entries))
        self._metrics.record_entries_in(len(entries))

        missing_urls = sum(1 for e in entries.values() if not e.url)
        local_count = sum(
            1 for e in entries.values() if local_ranks(e, self._local_sources)
        )

        start = time.perf_counter()
        ordered = rank_entries(entries, self._local_sources, self._primary_source)
        duration_ms = (time.perf_counter() - start) * 1000

        self._metrics.record_ranking_duration(duration_ms)
        self._metrics.record_tiers(local_count, len(entries) - local_count)
        self._metrics.record_urls_synthesized(missing_urls)

        self._log.info(
            "ranking_complete",
            entries_out=len(ordered),
            local_tier_count=local_count,
            primary_only_count=len(entries) - local_count,
            urls_synthesized=missing_urls,
        )
        return ordered
