"""
Parallel fan-out of units of work.

Each unit (one container or one loose file) is processed independently and
fully by one worker. Workers never touch shared state: they return a
UnitOutcome, and outcomes are yielded back to the caller in submission order
so that the merge is single-threaded and the result order is stable.

Classes:
    ParallelSearchManager: Runs a per-unit function over a bounded thread pool

Example:
    >>> from jarsearch.core.config import SearchConfig
    >>> manager = ParallelSearchManager(SearchConfig(workers=4))
    >>> for outcome in manager.process_units(jar_paths, scan_one):
    ...     aggregator.merge(outcome)
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

from ..config import SearchConfig
from ..types import UnitOutcome
from ...utils.logging_config import SearchLogger, get_logger

UnitFunction = Callable[[Path], UnitOutcome]


class ParallelSearchManager:
    """Runs a per-unit search function across a bounded worker pool."""

    def __init__(self, config: SearchConfig, logger: SearchLogger | None = None) -> None:
        self.config = config
        self.logger = logger or get_logger()
        self.cpu_count = os.cpu_count() or 4

    def get_worker_count(self, unit_count: int) -> int:
        """Configured workers (or CPU count), never more than there are units."""
        workers = self.config.workers or self.cpu_count
        return max(1, min(workers, unit_count))

    def process_units(
        self, units: Sequence[Path], search_function: UnitFunction
    ) -> Iterator[UnitOutcome]:
        """
        Apply ``search_function`` to every unit and yield the outcomes.

        Outcomes come back in the order of ``units``. An exception escaping
        ``search_function`` turns into a skipped outcome for that unit only.
        """
        if not units:
            return
        workers = self.get_worker_count(len(units))
        if workers == 1:
            for unit in units:
                yield self._run_one(search_function, unit)
            return

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="jarsearch") as executor:
            futures: list[tuple[Path, Future[UnitOutcome]]] = [
                (unit, executor.submit(search_function, unit)) for unit in units
            ]
            for unit, future in futures:
                try:
                    yield future.result()
                except Exception as e:
                    yield self._failed(unit, e)

    def _run_one(self, search_function: UnitFunction, unit: Path) -> UnitOutcome:
        try:
            return search_function(unit)
        except Exception as e:
            return self._failed(unit, e)

    def _failed(self, unit: Path, error: Exception) -> UnitOutcome:
        self.logger.exception(f"Unexpected error while processing {unit}", file_path=str(unit))
        return UnitOutcome.skip(unit, f"unexpected error: {error}", error=error)
