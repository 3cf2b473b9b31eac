"""Source record reader: maps a list's raw items to SourceRecords."""

from collections.abc import Mapping, Sequence
from urllib.parse import urlparse

import structlog

from toplists.config.schemas.sources import SourceConfig
from toplists.errors import MalformedSourceInputError
from toplists.sources.models import ReadStats, SourceRecord


logger = structlog.get_logger()


def extract_domain(value: object) -> str | None:
    """Pull the domain out of a raw domain field value.

    Bare domains are returned trimmed. Values carrying a scheme are
    reduced to their network location; unparsable URLs hold no domain.

    Args:
        value: Raw field value.

    Returns:
        Domain string, or None if the value holds no domain.
    """
    if not isinstance(value, str):
        return None

    domain = value.strip()
    if "://" in domain:
        try:
            domain = urlparse(domain).netloc
        except ValueError:
            return None

    return domain or None


def extract_rank(value: object) -> int | None:
    """Read a rank field value as an integer.

    Values are not range-checked; zero, negative, and duplicate ranks
    are passed through.

    Args:
        value: Raw field value.

    Returns:
        Integer rank, or None if the value is not integer-like.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        digits = text[1:] if text.startswith("-") else text
        if digits.isdecimal() and digits.isascii():
            return int(text)
    return None


def _optional_text(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def read_records(
    source: SourceConfig,
    raw_data: object,
    stats: ReadStats | None = None,
) -> list[SourceRecord]:
    """Convert one source's raw items into SourceRecords.

    Items that are not mappings, or that lack a domain or a usable rank,
    are dropped silently and counted in ``stats``.

    Args:
        source: Configuration naming the source's fields.
        raw_data: Parsed list data produced by the source's fetcher.
        stats: Optional counters to update.

    Returns:
        Records in the order the source listed them.

    Raises:
        MalformedSourceInputError: If raw_data is not a list.
    """
    if isinstance(raw_data, (str, bytes)) or not isinstance(raw_data, Sequence):
        msg = f"Source '{source.name}' data must be a list of items"
        raise MalformedSourceInputError(
            msg,
            source_name=source.name,
            received_type=type(raw_data).__name__,
        )

    stats = stats or ReadStats(source_name=source.name)
    records: list[SourceRecord] = []

    for item in raw_data:
        stats.items_in += 1
        if not isinstance(item, Mapping):
            stats.invalid_item += 1
            continue

        domain = extract_domain(item.get(source.domain_field))
        if domain is None:
            stats.missing_domain += 1
            continue

        rank = extract_rank(item.get("rank"))
        if rank is None:
            stats.invalid_rank += 1
            continue

        url = _optional_text(item.get(source.url_field)) if source.url_field else None

        records.append(
            SourceRecord(
                domain=domain,
                rank=rank,
                url=url,
                category=_optional_text(item.get("category")),
            )
        )

    stats.records_out = len(records)
    return records


class SourceRecordReader:
    """Reads every configured source and keeps per-source counts."""

    def __init__(self, run_id: str) -> None:
        """Initialize the reader.

        Args:
            run_id: Run identifier for logging.
        """
        self._run_id = run_id
        self._stats: dict[str, ReadStats] = {}
        self._log = logger.bind(component="reader", run_id=run_id)

    @property
    def stats(self) -> dict[str, ReadStats]:
        """Per-source read counts."""
        return dict(self._stats)

    def read(self, source: SourceConfig, raw_data: object) -> list[SourceRecord]:
        """Read one source, degrading malformed input to zero records.

        Args:
            source: Source configuration.
            raw_data: Parsed list data for the source.

        Returns:
            Records for the source; empty if the input was malformed.
        """
        stats = ReadStats(source_name=source.name)
        self._stats[source.name] = stats

        try:
            records = read_records(source, raw_data, stats)
        except MalformedSourceInputError as e:
            stats.records_out = 0
            self._log.warning("source_input_malformed", **e.to_dict())
            return []

        if stats.dropped:
            self._log.debug(
                "source_items_dropped",
                source_name=source.name,
                invalid_item=stats.invalid_item,
                missing_domain=stats.missing_domain,
                invalid_rank=stats.invalid_rank,
            )

        self._log.info(
            "source_read",
            source_name=source.name,
            items_in=stats.items_in,
            records_out=stats.records_out,
        )
        return records
