"""Integration tests for merging the fixture list files."""

import json
from pathlib import Path

import pytest

from toplists.config.loader import ConfigLoader
from toplists.merger.metrics import MergerMetrics
from toplists.pipeline.aggregator import ListAggregator
from toplists.pipeline.models import RankedList
from toplists.ranker.metrics import RankerMetrics
from toplists.renderer.json_renderer import JsonRenderer
from toplists.sources.io import load_source_files


FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"
LISTS_DIR = FIXTURES_DIR / "lists"

EXPECTED_ORDER = [
    "youtube.com",
    "google.com",
    "shopee.tw",
    "line.me",
    "ptt.cc",
    "facebook.com",
    "gov.tw",
]


def _merge_fixtures() -> RankedList:
    """Load the fixture config and lists and aggregate them."""
    loader = ConfigLoader(run_id="it-merge")
    effective = loader.load(FIXTURES_DIR / "config" / "sources.yaml")
    raw = load_source_files(effective.get_enabled_sources(), LISTS_DIR)
    aggregator = ListAggregator(
        run_id="it-merge",
        config=effective,
        merger_metrics=MergerMetrics(),
        ranker_metrics=RankerMetrics(),
    )
    return aggregator.aggregate(raw)


class TestMergeFixtureLists:
    """End-to-end merge over the fixture lists."""

    @pytest.mark.integration
    def test_order(self) -> None:
        """Local-market coverage dominates, then primary-only sites."""
        ranked = _merge_fixtures()

        assert [e.website for e in ranked.entries] == EXPECTED_ORDER

    @pytest.mark.integration
    def test_primary_url_and_rank_kept(self) -> None:
        """The primary's best rank and its URL win over a later duplicate."""
        ranked = _merge_fixtures()
        google = ranked.entries[1]

        assert google.url == "https://www.google.com/"
        assert google.rank == {"tranco": 1, "cloudflare": 1, "similarweb": 1}

    @pytest.mark.integration
    def test_www_and_case_folded(self) -> None:
        """Sources listing www or uppercase variants share one entry."""
        ranked = _merge_fixtures()
        by_site = {e.website: e for e in ranked.entries}

        assert by_site["youtube.com"].rank == {
            "tranco": 2,
            "ahrefs": 1,
            "cloudflare": 2,
            "similarweb": 2,
        }
        assert by_site["shopee.tw"].rank == {"ahrefs": 2, "similarweb": 3}

    @pytest.mark.integration
    def test_urls_synthesized_for_local_only_sites(self) -> None:
        """Sites the primary never listed get an https URL."""
        ranked = _merge_fixtures()
        by_site = {e.website: e for e in ranked.entries}

        assert by_site["shopee.tw"].url == "https://shopee.tw"
        assert by_site["line.me"].url == "https://line.me"
        assert by_site["facebook.com"].url == "https://facebook.com"

    @pytest.mark.integration
    def test_source_counts(self) -> None:
        """Malformed and empty items are counted per source."""
        ranked = _merge_fixtures()

        assert ranked.records_by_source == {
            "tranco": 5,
            "ahrefs": 3,
            "cloudflare": 3,
            "similarweb": 3,
            "semrush": 0,
        }
        assert ranked.dropped_by_source["similarweb"] == 1
        assert ranked.entries_total == len(EXPECTED_ORDER)

    @pytest.mark.integration
    def test_rendered_output(self, tmp_path: Path) -> None:
        """The written file holds the ordered records."""
        ranked = _merge_fixtures()
        output = tmp_path / "merged_lists_tw.json"

        JsonRenderer("it-merge", output).render(ranked)

        data = json.loads(output.read_text(encoding="utf-8"))
        assert [item["website"] for item in data] == EXPECTED_ORDER
        assert data[-1] == {
            "website": "gov.tw",
            "url": "https://www.gov.tw/",
            "rank": {"tranco": 4},
        }

    @pytest.mark.integration
    def test_deterministic(self) -> None:
        """Repeated runs produce the same checksum."""
        first = _merge_fixtures()
        second = _merge_fixtures()

        assert first.output_checksum == second.output_checksum
