"""
Result and statistics aggregation.

The Aggregator is the single sink for matches and counters of one run. Every
shared structure has its own lock, held only for one update. In mini mode the
dedup lock is taken first and released before the result lock is taken, so no
two locks are ever held at once.
"""

from __future__ import annotations

import threading

from .types import MINI_MODE_CONTENT, Match, RunStatistics, UnitOutcome


class Aggregator:
    """
    Thread-safe sink for the matches and counters of one run.

    In mini mode only the first Match per location enters the result list,
    reduced to a ``Found matches`` marker without a line number.
    ``matches_found`` counts every raw Match in both modes, so in mini mode it
    can exceed ``len(results)``.

    Example:
        >>> agg = Aggregator(mini=True)
        >>> agg.record(Match("a.txt", 1, "x", "text_file"))
        >>> agg.record(Match("a.txt", 2, "x", "text_file"))
        >>> len(agg.results), agg.stats.matches_found
        (1, 2)
    """

    def __init__(self, mini: bool = False) -> None:
        self.mini = mini
        self.results: list[Match] = []
        self.stats = RunStatistics()
        self._seen_locations: set[str] = set()
        self._results_lock = threading.Lock()
        self._seen_lock = threading.Lock()
        self._stats_lock = threading.Lock()

    @property
    def unique_locations(self) -> int:
        with self._seen_lock:
            return len(self._seen_locations)

    def record(self, match: Match) -> None:
        """Record one raw match."""
        if self.mini:
            with self._seen_lock:
                is_new = match.location not in self._seen_locations
                if is_new:
                    self._seen_locations.add(match.location)
            if is_new:
                reduced = Match(match.location, None, MINI_MODE_CONTENT, match.category)
                with self._results_lock:
                    self.results.append(reduced)
        else:
            with self._results_lock:
                self.results.append(match)

        with self._stats_lock:
            self.stats.matches_found += 1

    def merge(self, outcome: UnitOutcome) -> None:
        """Apply one unit's matches and partial counters."""
        for match in outcome.matches:
            self.record(match)

        with self._stats_lock:
            if outcome.processed:
                self.stats.files_processed += 1
            if outcome.skipped:
                self.stats.units_skipped += 1
            self.stats.class_entries += outcome.class_entries
            self.stats.source_files += outcome.source_entries
            self.stats.other_files += outcome.other_entries
            self.stats.entries_skipped += outcome.entries_skipped

    def set_elapsed(self, elapsed_ms: float) -> None:
        with self._stats_lock:
            self.stats.elapsed_ms = elapsed_ms
