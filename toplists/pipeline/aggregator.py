"""Aggregation orchestrator: read, merge, rank."""

from collections.abc import Mapping

import structlog

from toplists.config.effective import EffectiveConfig
from toplists.config.schemas.sources import SourceConfig, SourcesConfig
from toplists.errors import PrimarySourceMissingError
from toplists.merger.merger import ListMerger
from toplists.merger.metrics import MergerMetrics
from toplists.pipeline.models import RankedEntry, RankedList, compute_checksum
from toplists.ranker.metrics import RankerMetrics
from toplists.ranker.ranker import CompositeRanker
from toplists.sources.models import SourceRecord
from toplists.sources.reader import SourceRecordReader


logger = structlog.get_logger()


class ListAggregator:
    """Turns the raw lists of every configured source into one ranking.

    Sources are read, then merged, then ranked; a missing primary source
    is the only condition that stops a run.
    """

    def __init__(
        self,
        run_id: str,
        config: EffectiveConfig,
        merger_metrics: MergerMetrics | None = None,
        ranker_metrics: RankerMetrics | None = None,
    ) -> None:
        """Initialize the aggregator.

        Args:
            run_id: Run identifier for logging.
            config: Validated configuration naming the sources.
            merger_metrics: Optional merger metrics instance.
            ranker_metrics: Optional ranker metrics instance.
        """
        self._run_id = run_id
        self._config = config
        self._merger_metrics = merger_metrics or MergerMetrics.get_instance()
        self._ranker_metrics = ranker_metrics or RankerMetrics.get_instance()
        self._log = logger.bind(component="aggregator", run_id=run_id)

    def _resolve_primary(self) -> SourceConfig:
        primary = self._config.primary_source
        if primary is None:
            configured = [s.name for s in self._config.sources.sources]
            error = PrimarySourceMissingError(configured)
            self._log.error("primary_source_missing", **error.to_dict())
            raise error
        return primary

    def aggregate(self, raw_by_source: Mapping[str, object]) -> RankedList:
        """Aggregate all enabled sources.

        Sources without raw data count as empty lists.

        Args:
            raw_by_source: Source name to parsed list data.

        Returns:
            RankedList with the ordered entries and run statistics.

        Raises:
            PrimarySourceMissingError: If no enabled source is primary.
        """
        primary = self._resolve_primary()
        local = self._config.local_sources

        self._log.info(
            "aggregation_started",
            primary_source=primary.name,
            local_sources=[s.name for s in local],
        )

        # Phase 1: read every enabled source
        reader = SourceRecordReader(self._run_id)
        records: dict[str, list[SourceRecord]] = {}
        for source in [primary, *local]:
            if source.name not in raw_by_source:
                self._log.warning("source_data_missing", source_name=source.name)
            records[source.name] = reader.read(source, raw_by_source.get(source.name, []))

        # Phase 2: merge
        merger = ListMerger(self._run_id, metrics=self._merger_metrics)
        merged = merger.merge(
            (primary.name, records[primary.name]),
            [(s.name, records[s.name]) for s in local],
        )

        # Phase 3: rank
        ranker = CompositeRanker(
            self._run_id,
            local_sources=[s.name for s in local],
            primary_source=primary.name,
            metrics=self._ranker_metrics,
        )
        ordered = [RankedEntry.from_entry(e) for e in ranker.rank(merged)]

        stats = reader.stats
        result = RankedList(
            entries=ordered,
            primary_source=primary.name,
            local_sources=[s.name for s in local],
            records_by_source={name: s.records_out for name, s in stats.items()},
            dropped_by_source={name: s.dropped for name, s in stats.items()},
            entries_total=len(ordered),
            output_checksum=compute_checksum(ordered),
        )

        self._log.info(
            "aggregation_complete",
            entries_total=result.entries_total,
            output_checksum=result.output_checksum[:12],
            merger_metrics=self._merger_metrics.to_dict(),
            ranker_metrics=self._ranker_metrics.to_dict(),
        )
        return result


def aggregate_pure(
    raw_by_source: Mapping[str, object],
    config: EffectiveConfig | SourcesConfig | None = None,
    run_id: str = "pure",
) -> RankedList:
    """Pure function API for list aggregation.

    Args:
        raw_by_source: Source name to parsed list data.
        config: Configuration; defaults to the built-in source list.
        run_id: Run identifier.

    Returns:
        RankedList with the ordered entries.
    """
    if config is None:
        config = SourcesConfig.default()
    if isinstance(config, SourcesConfig):
        config = EffectiveConfig(sources=config, run_id=run_id)

    aggregator = ListAggregator(
        run_id=run_id,
        config=config,
        merger_metrics=MergerMetrics(),
        ranker_metrics=RankerMetrics(),
    )
    return aggregator.aggregate(raw_by_source)
