"""
Utility modules for jarsearch.

- error_handling: exception hierarchy, ErrorCollector and error reports
- logging_config: SearchLogger and global logging configuration
- formatter: text, JSON, rich console and CSV output
"""

from .error_handling import (
    ArchiveError,
    ConfigurationError,
    ErrorCollector,
    PatternError,
    SearchError,
    create_error_report,
    handle_file_error,
)
from .formatter import export_csv, format_result, read_csv, to_json_bytes
from .logging_config import SearchLogger, configure_logging, get_logger

__all__ = [
    "ArchiveError",
    "ConfigurationError",
    "ErrorCollector",
    "PatternError",
    "SearchError",
    "SearchLogger",
    "configure_logging",
    "create_error_report",
    "export_csv",
    "format_result",
    "get_logger",
    "handle_file_error",
    "read_csv",
    "to_json_bytes",
]
