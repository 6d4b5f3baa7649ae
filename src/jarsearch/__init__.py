"""
jarsearch: parallel, archive-aware search over JAR/WAR/EAR/ZIP files and loose files.

jarsearch locates classes, packages and text inside Java archives without
extracting them, and in master mode searches everything under a directory:
archives, Java sources, configuration files, scripts and markup. Units of work
(one container or one loose file) are processed in parallel and merged into a
single, ordered result list with run statistics.

Search Modes:
    - **exact-class**: class whose dotted name equals, or ends with ``.<name>``
    - **class-substring**: class whose dotted name contains a substring
    - **package**: classes under a package (``com.foo`` never matches ``com.foobar``)
    - **content**: regex over JAR entries; printable strings of class bytecode
    - **master**: regex over every JAR, ZIP-family container and loose file

Main Classes:
    JarSearch: Search engine that orchestrates walking, fan-out and merging
    SearchConfig: Root, exclusions, size threshold, worker count, mini mode
    Query: Mode, pattern and optional entry type filter
    SearchResult: Match list plus RunStatistics

Example Usage:
    API:
        >>> from jarsearch import run
        >>> items, stats = run("exact-class", "StringUtils", "/opt/app/lib")
        >>> for m in items:
        ...     print(m.location, m.content)

    CLI:
        $ jarsearch find -c StringUtils -d /opt/app/lib
        $ jarsearch find -m "jdbc:oracle" -d /opt/app --mini --export hits.csv
        $ jarsearch list -d /opt/app/lib
"""

from .core.api import JarSearch, run
from .core.config import SearchConfig
from .core.types import (
    ArchiveSummary,
    EntryKind,
    FileCategory,
    Match,
    OutputFormat,
    Query,
    RunStatistics,
    SearchMode,
    SearchResult,
)
from .utils.error_handling import ConfigurationError, PatternError, SearchError
from .utils.formatter import export_csv, read_csv

__version__ = "0.1.0"

__all__ = [
    "ArchiveSummary",
    "ConfigurationError",
    "EntryKind",
    "FileCategory",
    "JarSearch",
    "Match",
    "OutputFormat",
    "PatternError",
    "Query",
    "RunStatistics",
    "SearchConfig",
    "SearchError",
    "SearchMode",
    "SearchResult",
    "__version__",
    "export_csv",
    "read_csv",
    "run",
]
