"""Merge engine folding every source's records into one keyed mapping."""

from collections.abc import Callable, Sequence

import structlog

from toplists.merger.metrics import MergerMetrics
from toplists.merger.models import AggregatedEntry
from toplists.merger.normalizer import EMPTY_KEY, normalize_domain
from toplists.sources.models import SourceRecord


logger = structlog.get_logger()

SourceRecords = tuple[str, Sequence[SourceRecord]]

# Called after each source is folded with (source_name, primary, records, entries).
FoldHook = Callable[[str, bool, int, int], None]


def fold_primary(
    entries: dict[str, AggregatedEntry],
    source_name: str,
    records: Sequence[SourceRecord],
    metrics: MergerMetrics | None = None,
) -> None:
    """Fold the primary source, which seeds URLs.

    When a key repeats, only a strictly smaller rank replaces the stored
    rank, and it brings its URL along. Equal or larger ranks leave the
    first occurrence untouched.

    Args:
        entries: Mapping being built; updated in place.
        source_name: Name of the primary source.
        records: Primary source records.
        metrics: Optional metrics instance.
    """
    for record in records:
        key = normalize_domain(record.domain)
        if key == EMPTY_KEY:
            if metrics:
                metrics.record_empty_key(source_name)
            continue

        existing = entries.get(key)
        if existing is None:
            entries[key] = AggregatedEntry(
                website=key,
                url=record.url,
                rank={source_name: record.rank},
            )
            if metrics:
                metrics.record_entry_seeded(source_name)
            continue

        stored_rank = existing.rank.get(source_name)
        overridden = stored_rank is None or record.rank < stored_rank
        if overridden:
            existing.url = record.url
            existing.rank[source_name] = record.rank
        if metrics:
            metrics.record_primary_duplicate(overridden)


def fold_secondary(
    entries: dict[str, AggregatedEntry],
    source_name: str,
    records: Sequence[SourceRecord],
    metrics: MergerMetrics | None = None,
) -> None:
    """Fold a local-market source.

    Existing keys gain or overwrite this source's rank; a repeated key
    within the source keeps its last rank. New keys get an entry without
    a URL since only the primary source provides URLs.

    Args:
        entries: Mapping being built; updated in place.
        source_name: Name of the source.
        records: Source records.
        metrics: Optional metrics instance.
    """
    for record in records:
        key = normalize_domain(record.domain)
        if key == EMPTY_KEY:
            if metrics:
                metrics.record_empty_key(source_name)
            continue

        existing = entries.get(key)
        if existing is None:
            entries[key] = AggregatedEntry(
                website=key,
                url=None,
                rank={source_name: record.rank},
            )
            if metrics:
                metrics.record_entry_seeded(source_name)
        else:
            existing.rank[source_name] = record.rank


def merge_sources(
    primary: SourceRecords,
    others: Sequence[SourceRecords],
    metrics: MergerMetrics | None = None,
    on_folded: FoldHook | None = None,
) -> dict[str, AggregatedEntry]:
    """Merge all sources into a mapping keyed by normalized domain.

    The primary source is folded first in its own pass; the other
    sources follow in the given order.

    Args:
        primary: (name, records) of the primary source.
        others: (name, records) of the local-market sources.
        metrics: Optional metrics instance.
        on_folded: Optional callback run after each source is folded.

    Returns:
        Mapping of normalized domain to merged entry.
    """
    entries: dict[str, AggregatedEntry] = {}
    passes = [(primary, True), *((source, False) for source in others)]

    for (source_name, records), is_primary in passes:
        if metrics:
            metrics.record_records_in(source_name, len(records))
        fold = fold_primary if is_primary else fold_secondary
        fold(entries, source_name, records, metrics)
        if on_folded:
            on_folded(source_name, is_primary, len(records), len(entries))

    if metrics:
        metrics.record_entries_out(len(entries))
    return entries


class ListMerger:
    """Runs the merge with logging and metrics."""

    def __init__(self, run_id: str, metrics: MergerMetrics | None = None) -> None:
        """Initialize the merger.

        Args:
            run_id: Run identifier for logging.
            metrics: Optional metrics instance.
        """
        self._run_id = run_id
        self._metrics = metrics or MergerMetrics.get_instance()
        self._log = logger.bind(component="merger", run_id=run_id)

    def _log_folded(
        self, source_name: str, primary: bool, records: int, entries: int
    ) -> None:
        self._log.info(
            "source_folded",
            source_name=source_name,
            primary=primary,
            records=records,
            entries=entries,
        )

    def merge(
        self,
        primary: SourceRecords,
        others: Sequence[SourceRecords],
    ) -> dict[str, AggregatedEntry]:
        """Merge the primary source and the local-market sources.

        Args:
            primary: (name, records) of the primary source.
            others: (name, records) of the other sources in declaration order.

        Returns:
            Mapping of normalized domain to merged entry.
        """
        self._log.info(
            "merge_started",
            primary_source=primary[0],
            sources=[name for name, _ in others],
        )

        entries = merge_sources(
            primary, others, metrics=self._metrics, on_folded=self._log_folded
        )

        self._log.info(
            "merge_complete",
            entries_out=len(entries),
            primary_overrides=self._metrics.primary_overrides,
        )
        return entries
