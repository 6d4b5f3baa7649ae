"""
Basic type definitions for jarsearch core functionality.

This module contains the data types, enumerations, and data classes shared by
the walker, the scanners, the aggregator and the reporting layer.

Key Types:
    FileCategory: Semantic category of a file on disk
    EntryKind: Statistics bucket of an entry inside a container
    SearchMode: The five mutually exclusive operation modes
    OutputFormat: Enumeration of supported output formats
    Match: One located occurrence (immutable)
    RunStatistics: Aggregate counters for one run
    UnitOutcome: Typed result of processing one unit of work
    SearchResult: Matches plus statistics
    Query: Search query specification
    ArchiveSummary: One row of the archive listing report

Example:
    Creating a query:
        >>> from jarsearch.core.types.basic_types import Query, SearchMode
        >>> query = Query(mode=SearchMode.EXACT_CLASS, pattern="StringUtils")
        >>> query = Query(mode=SearchMode.CONTENT, pattern=r"jdbc:\\w+",
        ...               entry_kinds=frozenset({EntryKind.OTHER}))

    Working with results:
        >>> items, stats = engine.run(query)
        >>> for match in items:
        ...     print(f"{match.location}:{match.line or ''} [{match.category}] {match.content}")
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class FileCategory(str, Enum):
    """Category assigned to every file the walker visits."""

    ARCHIVE_JAR = "archive-jar"
    ARCHIVE_ZIP_FAMILY = "archive-zip-family"
    SOURCE = "source"
    CONFIG = "config"
    SCRIPT = "script"
    MARKUP = "markup"
    TEXT = "text"
    OTHER = "other"

    @property
    def is_archive(self) -> bool:
        return self in (FileCategory.ARCHIVE_JAR, FileCategory.ARCHIVE_ZIP_FAMILY)


class EntryKind(str, Enum):
    """Statistics bucket for an entry inside a container."""

    CLASS = "class"
    SOURCE = "source"
    OTHER = "other"


class SearchMode(str, Enum):
    """Operation modes, mutually exclusive per invocation."""

    EXACT_CLASS = "exact-class"
    CLASS_SUBSTRING = "class-substring"
    PACKAGE = "package"
    CONTENT = "content"
    MASTER = "master"

    @property
    def uses_pattern(self) -> bool:
        """True for modes that compile the query as a regular expression."""
        return self in (SearchMode.CONTENT, SearchMode.MASTER)


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


ALL_ENTRY_KINDS: frozenset[EntryKind] = frozenset(EntryKind)

MINI_MODE_CONTENT = "Found matches"


@dataclass(frozen=True, slots=True)
class Match:
    """
    One located occurrence of the query.

    Attributes:
        location: Filesystem path, or ``archive:entry`` for container entries
        line: 1-based line number, None for name and binary-string matches
        content: The matched line or extracted string, trimmed
        category: Semantic tag such as ``class``, ``package`` or ``class_bytecode``

    Example:
        >>> Match("lib/app.jar:com/foo/Bar.class", None, "com.foo.Bar", "class")
    """

    location: str
    line: int | None
    content: str
    category: str

    def __post_init__(self) -> None:
        if not self.location:
            raise ValueError("Match location must be non-empty")
        if self.line is not None and self.line < 1:
            raise ValueError(f"Match line must be positive, got {self.line}")


@dataclass(slots=True)
class RunStatistics:
    """
    Aggregate counters for one search run.

    Attributes:
        archives: JAR containers found under the root
        zip_containers: ZIP/WAR/EAR containers found under the root
        class_entries: Compiled-class entries seen inside containers
        source_files: Source files seen, loose or inside containers
        other_files: Other files seen, loose or inside containers
        files_processed: Units that were opened and fully scanned
        matches_found: Raw occurrences, including those suppressed by mini mode
        elapsed_ms: Wall-clock duration of the run in milliseconds
        files_visited: Files yielded by the walker
        category_counts: Walked files per FileCategory
        units_skipped: Units that were filtered or could not be opened
        entries_skipped: Container entries that could not be read or decoded
    """

    archives: int = 0
    zip_containers: int = 0
    class_entries: int = 0
    source_files: int = 0
    other_files: int = 0
    files_processed: int = 0
    matches_found: int = 0
    elapsed_ms: float = 0.0
    files_visited: int = 0
    category_counts: dict[FileCategory, int] = field(default_factory=dict)
    units_skipped: int = 0
    entries_skipped: int = 0

    @property
    def elapsed_seconds(self) -> float:
        return self.elapsed_ms / 1000.0

    @property
    def files_per_second(self) -> float:
        if self.elapsed_ms <= 0:
            return 0.0
        return self.files_processed / self.elapsed_seconds

    @property
    def classes_per_second(self) -> float:
        if self.elapsed_ms <= 0:
            return 0.0
        return self.class_entries / self.elapsed_seconds


@dataclass(slots=True)
class UnitOutcome:
    """
    Result of processing one unit of work (one container or one loose file).

    Workers build these locally and hand them back to the orchestrator, which
    merges them into the shared aggregator after fan-in.
    """

    unit: Path
    matches: list[Match] = field(default_factory=list)
    processed: bool = False
    skipped_reason: str | None = None
    # set when the unit was skipped because it could not be read, not filtered
    error: Exception | None = None
    class_entries: int = 0
    source_entries: int = 0
    other_entries: int = 0
    entries_skipped: int = 0

    @property
    def skipped(self) -> bool:
        return self.skipped_reason is not None

    @classmethod
    def skip(cls, unit: Path, reason: str, error: Exception | None = None) -> UnitOutcome:
        return cls(unit=unit, skipped_reason=reason, error=error)

    def count_entry(self, kind: EntryKind) -> None:
        if kind is EntryKind.CLASS:
            self.class_entries += 1
        elif kind is EntryKind.SOURCE:
            self.source_entries += 1
        else:
            self.other_entries += 1


@dataclass(slots=True)
class SearchResult:
    """
    Complete search results: the match collection and its statistics.

    Unpacks as ``(items, stats)``.
    """

    items: list[Match] = field(default_factory=list)
    stats: RunStatistics = field(default_factory=RunStatistics)

    def __iter__(self) -> Iterator[object]:
        yield self.items
        yield self.stats

    def __len__(self) -> int:
        return len(self.items)


@dataclass(slots=True)
class Query:
    r"""
    Search query specification.

    Attributes:
        mode: Operation mode
        pattern: Class name, class-name substring, package name, or regex
        entry_kinds: Entry types searched in content mode; None means all

    Examples:
        >>> Query(mode=SearchMode.PACKAGE, pattern="org.apache.commons")
        >>> Query(mode=SearchMode.MASTER, pattern=r"password\s*=")
    """

    mode: SearchMode
    pattern: str
    entry_kinds: frozenset[EntryKind] | None = None

    def effective_entry_kinds(self) -> frozenset[EntryKind]:
        return self.entry_kinds if self.entry_kinds else ALL_ENTRY_KINDS


@dataclass(frozen=True, slots=True)
class ArchiveSummary:
    """One row of the archive listing report."""

    path: Path
    class_entries: int
    source_entries: int
    file_entries: int
    size_bytes: int

    @property
    def size_mb(self) -> float:
        return self.size_bytes / (1024.0 * 1024.0)
