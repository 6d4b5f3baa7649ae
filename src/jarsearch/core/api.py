"""
Main API for jarsearch.

This module provides the JarSearch class, the entry point for all search
operations. It walks the root, plans the units of work for the selected mode,
fans them out to the worker pool, and merges the per-unit outcomes into one
SearchResult.

Example:
    Basic usage:
        >>> from jarsearch.core.api import JarSearch
        >>> from jarsearch.core.config import SearchConfig
        >>> from jarsearch.core.types import Query, SearchMode
        >>>
        >>> engine = JarSearch(SearchConfig(root="/opt/app/lib"))
        >>> result = engine.run(Query(SearchMode.EXACT_CLASS, "StringUtils"))
        >>> for match in result.items:
        ...     print(match.location)

    The narrow functional contract:
        >>> from jarsearch import run
        >>> items, stats = run("master", r"jdbc:oracle", "/opt/app", exclusions=["/logs/"])
"""

from __future__ import annotations

import time
from collections import Counter
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

import regex as regex_mod

from ..search.classifier import classify_path, file_type_label
from ..search.container import ContainerScanner
from ..search.matchers import package_prefix
from ..search.text_scanner import scan_loose_file
from ..search.walker import ClassifiedFile, ExclusionFilter, iter_classified_files, passes_size_threshold
from ..utils.error_handling import ErrorCollector, PatternError, create_error_report, handle_file_error
from ..utils.logging_config import SearchLogger, get_logger
from .aggregator import Aggregator
from .config import SearchConfig
from .managers.parallel_processing import ParallelSearchManager, UnitFunction
from .types import (
    ArchiveSummary,
    EntryKind,
    FileCategory,
    Match,
    Query,
    RunStatistics,
    SearchMode,
    SearchResult,
    UnitOutcome,
)

# Master mode processes loose files in this category order
_LOOSE_ORDER = (
    FileCategory.SOURCE,
    FileCategory.CONFIG,
    FileCategory.SCRIPT,
    FileCategory.MARKUP,
    FileCategory.TEXT,
    FileCategory.OTHER,
)


def compile_pattern(pattern: str) -> regex_mod.Pattern:
    """Compile a search pattern, raising PatternError if it is invalid."""
    try:
        return regex_mod.compile(pattern)
    except regex_mod.error as e:
        raise PatternError(f"Invalid pattern {pattern!r}: {e}", pattern) from e


class JarSearch:
    """
    Archive-aware search engine.

    Attributes:
        cfg (SearchConfig): Configuration object controlling search behavior
        logger (SearchLogger): Logging interface
        error_collector (ErrorCollector): Units that could not be read in the last run
        exclusions (ExclusionFilter): Path substrings to skip
        container_scanner (ContainerScanner): Per-container search operations
        parallel_manager (ParallelSearchManager): Worker pool fan-out
    """

    def __init__(self, config: SearchConfig | None = None, logger: SearchLogger | None = None) -> None:
        self.cfg = config or SearchConfig()
        self.logger = logger or get_logger()
        self.error_collector = ErrorCollector()
        self.exclusions = ExclusionFilter(self.cfg.exclude)
        self.container_scanner = ContainerScanner(self.logger)
        self.parallel_manager = ParallelSearchManager(self.cfg, self.logger)

    # ------------------------------------------------------------------
    # Unit admission
    # ------------------------------------------------------------------

    def _admit(self, path: Path) -> UnitOutcome | None:
        """Second exclusion check and size threshold, right before opening."""
        excluded_by = self.exclusions.matching(path)
        if excluded_by is not None:
            self.logger.debug(f"Excluding path: {path} (matches: {excluded_by})")
            return UnitOutcome.skip(path, f"excluded by {excluded_by!r}")
        if not passes_size_threshold(path, self.cfg.min_size):
            self.logger.debug(f"Skipping small file: {path} (< {self.cfg.min_size} bytes)")
            return UnitOutcome.skip(path, f"smaller than {self.cfg.min_size} bytes")
        return None

    def _walk(self, stats: RunStatistics) -> list[ClassifiedFile]:
        files = list(
            iter_classified_files(
                self.cfg.root_path(),
                self.exclusions,
                follow_symlinks=self.cfg.follow_symlinks,
                prune_excluded_dirs=self.cfg.dir_prune_exclude,
            )
        )
        counts = Counter(f.category for f in files)
        stats.files_visited = len(files)
        stats.category_counts = {cat: counts.get(cat, 0) for cat in FileCategory}
        return files

    # ------------------------------------------------------------------
    # Per-unit functions (run on worker threads)
    # ------------------------------------------------------------------

    def _class_unit(self, query: str, exact: bool) -> UnitFunction:
        def search(path: Path) -> UnitOutcome:
            return self._admit(path) or self.container_scanner.scan_class_names(path, query, exact)

        return search

    def _package_unit(self, package: str) -> UnitFunction:
        prefix = package_prefix(package)

        def search(path: Path) -> UnitOutcome:
            return self._admit(path) or self.container_scanner.scan_package(path, prefix)

        return search

    def _content_unit(self, pattern: regex_mod.Pattern, kinds: frozenset[EntryKind]) -> UnitFunction:
        def search(path: Path) -> UnitOutcome:
            return self._admit(path) or self.container_scanner.scan_content(path, pattern, kinds)

        return search

    def _scan_loose(self, path: Path, pattern: regex_mod.Pattern) -> UnitOutcome:
        outcome = UnitOutcome(unit=path)
        try:
            scan = scan_loose_file(path, pattern, file_type_label(path))
        except OSError as e:
            return UnitOutcome.skip(path, f"cannot read file: {e}", error=e)
        if scan.fell_back:
            self.logger.debug(
                f"Text read failed for {path} at line {scan.decode_error_line}, "
                "searched binary strings instead"
            )
        outcome.processed = True
        outcome.matches = scan.matches
        return outcome

    def _master_unit(self, pattern: regex_mod.Pattern) -> UnitFunction:
        def search(path: Path) -> UnitOutcome:
            skipped = self._admit(path)
            if skipped is not None:
                return skipped
            category = classify_path(path)
            if category is FileCategory.ARCHIVE_JAR:
                return self.container_scanner.scan_content(path, pattern)
            if category is FileCategory.ARCHIVE_ZIP_FAMILY:
                return self.container_scanner.scan_text_only(path, pattern)
            return self._scan_loose(path, pattern)

        return search

    # ------------------------------------------------------------------
    # Planning
    # ------------------------------------------------------------------

    def _plan(
        self,
        query: Query,
        pattern: regex_mod.Pattern | None,
        files: Sequence[ClassifiedFile],
        stats: RunStatistics,
    ) -> tuple[list[Path], UnitFunction]:
        by_category: dict[FileCategory, list[Path]] = {cat: [] for cat in FileCategory}
        for f in files:
            by_category[f.category].append(f.path)
        for paths in by_category.values():
            paths.sort()

        jars = by_category[FileCategory.ARCHIVE_JAR]
        stats.archives = len(jars)

        if query.mode is SearchMode.EXACT_CLASS:
            return jars, self._class_unit(query.pattern, exact=True)
        if query.mode is SearchMode.CLASS_SUBSTRING:
            return jars, self._class_unit(query.pattern, exact=False)
        if query.mode is SearchMode.PACKAGE:
            return jars, self._package_unit(query.pattern)

        assert pattern is not None
        if query.mode is SearchMode.CONTENT:
            return jars, self._content_unit(pattern, query.effective_entry_kinds())

        zips = by_category[FileCategory.ARCHIVE_ZIP_FAMILY]
        loose = [p for cat in _LOOSE_ORDER for p in by_category[cat]]
        stats.zip_containers = len(zips)
        stats.source_files += len(by_category[FileCategory.SOURCE])
        stats.other_files += len(loose) - len(by_category[FileCategory.SOURCE])

        self.logger.log_unit_counts(
            {cat.value: len(paths) for cat, paths in by_category.items()},
            total=len(jars) + len(zips) + len(loose),
        )
        return jars + zips + loose, self._master_unit(pattern)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self, query: Query) -> SearchResult:
        """
        Execute a search query and return results.

        Args:
            query: Mode, pattern and (content mode) entry type filter

        Returns:
            SearchResult with the match collection and run statistics

        Raises:
            PatternError: if a content or master pattern is not a valid regex;
                raised before any file is touched.
            ConfigurationError: if the configuration is invalid.
        """
        self.cfg.validate()
        pattern = compile_pattern(query.pattern) if query.mode.uses_pattern else None

        self.error_collector.clear()
        self.logger.log_search_start(
            mode=query.mode.value,
            pattern=query.pattern,
            root=str(self.cfg.root),
            mini=self.cfg.mini,
        )

        t0 = time.perf_counter()
        aggregator = Aggregator(mini=self.cfg.mini)
        files = self._walk(aggregator.stats)
        units, search_function = self._plan(query, pattern, files, aggregator.stats)
        self.logger.debug(
            f"Processing {len(units)} units with "
            f"{self.parallel_manager.get_worker_count(len(units))} workers"
        )

        for outcome in self.parallel_manager.process_units(units, search_function):
            if outcome.error is not None:
                handle_file_error(outcome.unit, "open", outcome.error, self.error_collector, self.logger)
            aggregator.merge(outcome)

        elapsed_ms = (time.perf_counter() - t0) * 1000.0
        aggregator.set_elapsed(elapsed_ms)

        self.logger.log_search_complete(
            pattern=query.pattern,
            results_count=len(aggregator.results),
            elapsed_ms=elapsed_ms,
            matches_found=aggregator.stats.matches_found,
            files_processed=aggregator.stats.files_processed,
        )
        return SearchResult(items=aggregator.results, stats=aggregator.stats)

    def search(
        self,
        mode: SearchMode | str,
        pattern: str,
        entry_kinds: Iterable[EntryKind | str] | None = None,
    ) -> SearchResult:
        """Convenience wrapper building a Query from plain values."""
        kinds = frozenset(EntryKind(k) for k in entry_kinds) if entry_kinds else None
        return self.run(Query(mode=SearchMode(mode), pattern=pattern, entry_kinds=kinds))

    def list_archives(self) -> list[ArchiveSummary]:
        """Entry counts and sizes for every JAR under the root, sorted by path."""
        self.cfg.validate()
        summaries: list[ArchiveSummary] = []
        jars = sorted(
            f.path
            for f in iter_classified_files(
                self.cfg.root_path(),
                self.exclusions,
                follow_symlinks=self.cfg.follow_symlinks,
                prune_excluded_dirs=self.cfg.dir_prune_exclude,
            )
            if f.category is FileCategory.ARCHIVE_JAR
        )
        for jar in jars:
            summary = self.container_scanner.summarize(jar)
            if summary is not None:
                summaries.append(summary)
        return summaries

    def get_error_summary(self) -> dict[str, Any]:
        return self.error_collector.get_summary()

    def get_error_report(self) -> str:
        return create_error_report(self.error_collector)

    def has_errors(self) -> bool:
        return bool(self.error_collector.errors)


def run(
    mode: SearchMode | str,
    pattern_or_query: str,
    root: str | Path = ".",
    exclusions: Iterable[str] = (),
    size_threshold: int = 0,
    parallelism: int = 0,
    mini_mode: bool = False,
    *,
    entry_kinds: Iterable[EntryKind | str] | None = None,
    logger: SearchLogger | None = None,
) -> tuple[list[Match], RunStatistics]:
    """
    Run one search and return ``(matches, statistics)``.

    Raises:
        PatternError: before any traversal, if the pattern does not compile.
    """
    config = SearchConfig(
        root=root,
        exclude=list(exclusions),
        min_size=size_threshold,
        workers=parallelism,
        mini=mini_mode,
    )
    result = JarSearch(config, logger=logger).search(mode, pattern_or_query, entry_kinds)
    return result.items, result.stats
