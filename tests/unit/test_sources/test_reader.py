"""Unit tests for the source record reader."""

import pytest

from toplists.config.schemas.sources import SourceConfig
from toplists.errors import AggregationErrorClass, MalformedSourceInputError
from toplists.sources.models import ReadStats, SourceRecord
from toplists.sources.reader import (
    SourceRecordReader,
    extract_domain,
    extract_rank,
    read_records,
)


def _make_source(
    name: str = "tranco",
    domain_field: str = "domain",
    url_field: str | None = "url",
    primary: bool = False,
) -> SourceConfig:
    """Create a test SourceConfig."""
    return SourceConfig(
        name=name,
        path=f"{name}.json",
        domain_field=domain_field,
        url_field=url_field,
        primary=primary,
    )


class TestExtractDomain:
    """Tests for extract_domain."""

    @pytest.mark.unit
    def test_bare_domain_is_trimmed(self) -> None:
        """Bare domains pass through without surrounding whitespace."""
        assert extract_domain("  Example.com ") == "Example.com"

    @pytest.mark.unit
    def test_url_is_reduced_to_host(self) -> None:
        """A full URL yields its network location."""
        assert extract_domain("https://www.example.com/path?q=1") == "www.example.com"

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [None, "", "   ", 42, ["a.tw"], "https://"])
    def test_no_domain(self, value: object) -> None:
        """Missing, empty, and non-string values hold no domain."""
        assert extract_domain(value) is None

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["http://[::1", "https://[2001:db8::1/path"])
    def test_unparsable_url_holds_no_domain(self, value: str) -> None:
        """URLs urlparse rejects are treated as missing domains."""
        assert extract_domain(value) is None


class TestExtractRank:
    """Tests for extract_rank."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(1, 1), (0, 0), (-3, -3), (2.0, 2), ("7", 7), (" 12 ", 12)],
    )
    def test_integer_like_values(self, value: object, expected: int) -> None:
        """Integer-like ranks are read unchanged, without range checks."""
        assert extract_rank(value) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value",
        [None, True, 1.5, "first", "", {}, "\u00b3", "--5", "-", "\uff17", " - 3"],
    )
    def test_non_integer_values(self, value: object) -> None:
        """Other values are not ranks."""
        assert extract_rank(value) is None


class TestReadRecords:
    """Tests for read_records."""

    @pytest.mark.unit
    def test_reads_domain_rank_and_url(self) -> None:
        """Declared fields are mapped onto SourceRecord."""
        source = _make_source()
        records = read_records(
            source,
            [{"rank": 1, "domain": "google.com.tw", "url": "https://www.google.com.tw/"}],
        )

        assert records == [
            SourceRecord(domain="google.com.tw", rank=1, url="https://www.google.com.tw/")
        ]

    @pytest.mark.unit
    def test_uses_configured_domain_field(self) -> None:
        """The domain comes from the field the source declares."""
        source = _make_source(name="semrush", domain_field="domain_name", url_field=None)
        records = read_records(
            source, [{"rank": 4, "domain_name": "shopee.tw", "total_traffic": 1000}]
        )

        assert records == [SourceRecord(domain="shopee.tw", rank=4)]

    @pytest.mark.unit
    def test_url_ignored_when_not_declared(self) -> None:
        """Sources without a URL field never produce URLs."""
        source = _make_source(name="cloudflare", url_field=None)
        records = read_records(source, [{"rank": 1, "domain": "a.tw", "url": "https://a.tw"}])

        assert records[0].url is None

    @pytest.mark.unit
    def test_blank_url_becomes_none(self) -> None:
        """An empty URL value is treated as absent."""
        records = read_records(_make_source(), [{"rank": 1, "domain": "a.tw", "url": " "}])

        assert records[0].url is None

    @pytest.mark.unit
    def test_category_carried_through(self) -> None:
        """Similarweb categories survive the mapping."""
        source = _make_source(name="similarweb", domain_field="website", url_field=None)
        records = read_records(
            source, [{"rank": 1, "website": "youtube.com", "category": "Arts & Entertainment"}]
        )

        assert records[0].category == "Arts & Entertainment"

    @pytest.mark.unit
    def test_items_without_domain_are_dropped(self) -> None:
        """Items lacking a domain are skipped and counted."""
        stats = ReadStats(source_name="tranco")
        records = read_records(
            _make_source(),
            [
                {"rank": 1},
                {"rank": 2, "domain": ""},
                {"rank": 3, "domain": None},
                {"rank": 4, "domain": "ok.tw"},
            ],
            stats,
        )

        assert [r.domain for r in records] == ["ok.tw"]
        assert stats.items_in == 4
        assert stats.missing_domain == 3
        assert stats.records_out == 1
        assert stats.dropped == 3

    @pytest.mark.unit
    def test_items_without_rank_are_dropped(self) -> None:
        """Items lacking an integer rank are skipped and counted."""
        stats = ReadStats(source_name="tranco")
        records = read_records(
            _make_source(),
            [{"domain": "a.tw"}, {"rank": "n/a", "domain": "b.tw"}, {"rank": 1, "domain": "c.tw"}],
            stats,
        )

        assert [r.domain for r in records] == ["c.tw"]
        assert stats.invalid_rank == 2

    @pytest.mark.unit
    def test_duplicate_and_out_of_range_ranks_pass_through(self) -> None:
        """Ranks are not validated or renumbered."""
        records = read_records(
            _make_source(),
            [
                {"rank": 0, "domain": "a.tw"},
                {"rank": 5, "domain": "b.tw"},
                {"rank": 5, "domain": "c.tw"},
            ],
        )

        assert [r.rank for r in records] == [0, 5, 5]

    @pytest.mark.unit
    def test_empty_list(self) -> None:
        """A source with no items yields no records."""
        assert read_records(_make_source(), []) == []

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("raw_data", "type_name"),
        [({"sites": []}, "dict"), ("[]", "str"), (None, "NoneType"), (3, "int")],
    )
    def test_non_list_input_is_malformed(self, raw_data: object, type_name: str) -> None:
        """Raw data must be a list."""
        with pytest.raises(MalformedSourceInputError) as exc_info:
            read_records(_make_source(), raw_data)

        assert exc_info.value.source_name == "tranco"
        assert exc_info.value.received_type == type_name
        assert exc_info.value.error_class == AggregationErrorClass.INPUT

    @pytest.mark.unit
    def test_non_mapping_items_are_dropped(self) -> None:
        """Items that are not mappings cost only themselves."""
        stats = ReadStats(source_name="cloudflare")
        records = read_records(
            _make_source(name="cloudflare", url_field=None),
            [None, {"rank": 1, "domain": "a.tw"}, "b.tw", 7, {"rank": 2, "domain": "c.tw"}],
            stats,
        )

        assert [r.domain for r in records] == ["a.tw", "c.tw"]
        assert stats.invalid_item == 3
        assert stats.dropped == 3
        assert stats.records_out == 2

    @pytest.mark.unit
    def test_bad_rank_and_domain_strings_are_dropped(self) -> None:
        """Unusual rank strings and unparsable URLs drop only their item."""
        stats = ReadStats(source_name="cloudflare")
        records = read_records(
            _make_source(name="cloudflare", url_field=None),
            [
                {"rank": "\u00b3", "domain": "b.tw"},
                {"rank": "--5", "domain": "d.tw"},
                {"rank": 1, "domain": "http://[::1"},
                {"rank": 2, "domain": "c.tw"},
            ],
            stats,
        )

        assert records == [SourceRecord(domain="c.tw", rank=2)]
        assert stats.invalid_rank == 2
        assert stats.missing_domain == 1


class TestSourceRecordReader:
    """Tests for SourceRecordReader."""

    @pytest.mark.unit
    def test_malformed_input_reads_as_empty(self) -> None:
        """Malformed data costs only that source's records."""
        reader = SourceRecordReader(run_id="test")

        records = reader.read(_make_source(), {"not": "a list"})

        assert records == []
        assert reader.stats["tranco"].records_out == 0

    @pytest.mark.unit
    def test_stats_kept_per_source(self) -> None:
        """Counts are tracked separately for each source read."""
        reader = SourceRecordReader(run_id="test")
        reader.read(_make_source(), [{"rank": 1, "domain": "a.tw"}, {"rank": 2}])
        reader.read(
            _make_source(name="cloudflare", url_field=None),
            [{"rank": 1, "domain": "b.tw"}],
        )

        stats = reader.stats
        assert stats["tranco"].records_out == 1
        assert stats["tranco"].missing_domain == 1
        assert stats["cloudflare"].records_out == 1
