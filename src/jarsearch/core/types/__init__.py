"""
Core type definitions for jarsearch.

All types live in ``basic_types`` and are re-exported here.
"""

from .basic_types import (
    ALL_ENTRY_KINDS,
    MINI_MODE_CONTENT,
    ArchiveSummary,
    EntryKind,
    FileCategory,
    Match,
    OutputFormat,
    Query,
    RunStatistics,
    SearchMode,
    SearchResult,
    UnitOutcome,
)

__all__ = [
    "ALL_ENTRY_KINDS",
    "MINI_MODE_CONTENT",
    "ArchiveSummary",
    "EntryKind",
    "FileCategory",
    "Match",
    "OutputFormat",
    "Query",
    "RunStatistics",
    "SearchMode",
    "SearchResult",
    "UnitOutcome",
]
