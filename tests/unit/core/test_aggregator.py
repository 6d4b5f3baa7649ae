"""Tests for jarsearch.core.aggregator module."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from jarsearch.core.aggregator import Aggregator
from jarsearch.core.types import MINI_MODE_CONTENT, Match, UnitOutcome


def _match(location: str, line: int | None = 1) -> Match:
    return Match(location, line, "content", "text_file")


class TestRecord:
    """Tests for Aggregator.record."""

    def test_full_mode_keeps_every_match(self):
        agg = Aggregator()
        agg.record(_match("a.txt", 1))
        agg.record(_match("a.txt", 2))
        assert len(agg.results) == 2
        assert agg.stats.matches_found == 2

    def test_mini_mode_one_per_location(self):
        agg = Aggregator(mini=True)
        for line in (1, 2, 3):
            agg.record(_match("a.txt", line))
        agg.record(_match("b.txt", 7))
        assert [(m.location, m.line, m.content) for m in agg.results] == [
            ("a.txt", None, MINI_MODE_CONTENT),
            ("b.txt", None, MINI_MODE_CONTENT),
        ]
        assert agg.stats.matches_found == 4
        assert agg.unique_locations == 2

    def test_mini_keeps_first_category(self):
        agg = Aggregator(mini=True)
        agg.record(Match("x.bin", 1, "a", "bin"))
        agg.record(Match("x.bin", None, "a", "bin_binary"))
        assert [m.category for m in agg.results] == ["bin"]


class TestConcurrentRecord:
    """The counting law holds when many threads record at once."""

    def test_full_mode(self):
        agg = Aggregator()
        with ThreadPoolExecutor(max_workers=8) as pool:
            for i in range(800):
                pool.submit(agg.record, _match(f"f{i % 10}.txt", i + 1))
        assert len(agg.results) == 800
        assert agg.stats.matches_found == 800

    def test_mini_mode(self):
        agg = Aggregator(mini=True)
        with ThreadPoolExecutor(max_workers=8) as pool:
            for i in range(800):
                pool.submit(agg.record, _match(f"f{i % 10}.txt", i + 1))
        assert len(agg.results) == 10
        assert len({m.location for m in agg.results}) == 10
        assert agg.stats.matches_found == 800


class TestMerge:
    def test_processed_outcome(self):
        agg = Aggregator()
        outcome = UnitOutcome(
            unit=Path("a.jar"),
            matches=[_match("a.jar:x.txt")],
            processed=True,
            class_entries=3,
            source_entries=1,
            other_entries=2,
            entries_skipped=1,
        )
        agg.merge(outcome)
        s = agg.stats
        assert (s.files_processed, s.units_skipped) == (1, 0)
        assert (s.class_entries, s.source_files, s.other_files) == (3, 1, 2)
        assert s.entries_skipped == 1
        assert s.matches_found == 1
        assert len(agg.results) == 1

    def test_skipped_outcome(self):
        agg = Aggregator()
        agg.merge(UnitOutcome.skip(Path("bad.jar"), "cannot open container"))
        assert agg.stats.files_processed == 0
        assert agg.stats.units_skipped == 1
        assert agg.results == []

    def test_set_elapsed(self):
        agg = Aggregator()
        agg.set_elapsed(1500.0)
        assert agg.stats.elapsed_seconds == 1.5
