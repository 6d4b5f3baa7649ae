"""
Error handling and reporting for jarsearch.

This module defines the exception hierarchy raised by the search engine and a
collector for the non-fatal problems met while walking a tree, such as
unreadable files or containers that are not zip archives. Only an invalid
pattern or an invalid configuration is fatal; everything else is recorded and
the run continues.

Error Categories:
    - FILE_ACCESS: A file could not be opened or read
    - PERMISSION: The process lacks rights to read a file
    - ARCHIVE: A container is not a readable zip archive
    - PATTERN: The search pattern does not compile
    - CONFIGURATION: Invalid engine settings

Classes:
    ErrorSeverity: Error severity levels (LOW, MEDIUM, HIGH, CRITICAL)
    ErrorCategory: Error classification categories
    ErrorInfo: Detailed error information container
    ErrorCollector: Batch error collection and analysis
    SearchError: Base exception class for jarsearch errors

Functions:
    handle_file_error: Classify and record a per-unit failure
    create_error_report: Generate a human-readable error report

Example:
    >>> from jarsearch.utils.error_handling import ErrorCollector, handle_file_error
    >>> collector = ErrorCollector()
    >>> try:
    ...     Path("lib/app.jar").read_bytes()
    ... except OSError as e:
    ...     handle_file_error(Path("lib/app.jar"), "open", e, collector)
    >>> print(create_error_report(collector))
"""

from __future__ import annotations

# Import built-in exceptions before defining custom ones
import builtins
import time
import zipfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

BuiltinPermissionError = builtins.PermissionError


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Error categories for classification."""

    FILE_ACCESS = "file_access"
    PERMISSION = "permission"
    ARCHIVE = "archive"
    PATTERN = "pattern"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


@dataclass
class ErrorInfo:
    """Detailed error information."""

    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    file_path: Path | None = None
    exception_type: str | None = None
    timestamp: float = field(default_factory=time.time)
    context: dict[str, Any] = field(default_factory=dict)
    suggestions: list[str] = field(default_factory=list)


class SearchError(Exception):
    """Base exception for search-related errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        file_path: Path | None = None,
        suggestions: list[str] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message: str = message
        self.category: ErrorCategory = category
        self.severity: ErrorSeverity = severity
        self.file_path: Path | None = file_path
        self.suggestions: list[str] = suggestions or []
        self.context: dict[str, Any] = context or {}
        self.timestamp: float = time.time()


class FileAccessError(SearchError):
    """Error accessing files."""

    def __init__(
        self, message: str, file_path: Path, context: dict[str, Any] | None = None
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.FILE_ACCESS,
            severity=ErrorSeverity.MEDIUM,
            file_path=file_path,
            context=context,
        )


class PermissionError(SearchError):
    """Permission-related errors."""

    def __init__(
        self, message: str, file_path: Path, context: dict[str, Any] | None = None
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.PERMISSION,
            severity=ErrorSeverity.HIGH,
            file_path=file_path,
            suggestions=[
                "Check file permissions",
                "Exclude the directory with --exclude",
            ],
            context=context,
        )


class ArchiveError(SearchError):
    """A container could not be opened as a zip archive."""

    def __init__(
        self, message: str, file_path: Path, context: dict[str, Any] | None = None
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.ARCHIVE,
            severity=ErrorSeverity.LOW,
            file_path=file_path,
            suggestions=[
                "Verify the archive is not truncated",
                "Test it with `unzip -t`",
            ],
            context=context,
        )


class PatternError(SearchError):
    """The search pattern is not a valid regular expression."""

    def __init__(self, message: str, pattern: str) -> None:
        super().__init__(
            message,
            category=ErrorCategory.PATTERN,
            severity=ErrorSeverity.CRITICAL,
            suggestions=["Escape regex metacharacters or fix the expression"],
            context={"pattern": pattern},
        )
        self.pattern = pattern


class ConfigurationError(SearchError):
    """Configuration-related errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.HIGH,
            suggestions=["Verify all required settings"],
            context=context,
        )


class ErrorCollector:
    """Collects and manages errors during search operations."""

    def __init__(self, max_errors: int = 100) -> None:
        self.max_errors = max_errors
        self.errors: list[ErrorInfo] = []
        self.error_counts: dict[ErrorCategory, int] = {}

    def add_error(
        self,
        exception: Exception | SearchError,
        category: ErrorCategory | None = None,
        severity: ErrorSeverity | None = None,
        file_path: Path | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Add an error to the collection."""
        if isinstance(exception, SearchError):
            error_category = exception.category
            error_severity = exception.severity
            error_file_path = exception.file_path or file_path
            error_suggestions = exception.suggestions
            error_context = {**exception.context, **(context or {})}
        else:
            error_category = category or self._classify_exception(exception)
            error_severity = severity or ErrorSeverity.MEDIUM
            error_file_path = file_path
            error_suggestions = []
            error_context = context or {}

        error_info = ErrorInfo(
            category=error_category,
            severity=error_severity,
            message=str(exception),
            file_path=error_file_path,
            exception_type=type(exception).__name__,
            context=error_context,
            suggestions=error_suggestions,
        )

        if len(self.errors) < self.max_errors:
            self.errors.append(error_info)

        self.error_counts[error_category] = self.error_counts.get(error_category, 0) + 1

    def _classify_exception(self, exception: Exception) -> ErrorCategory:
        """Classify exception into error category."""
        if isinstance(exception, zipfile.BadZipFile):
            return ErrorCategory.ARCHIVE
        if isinstance(exception, BuiltinPermissionError):
            return ErrorCategory.PERMISSION
        if isinstance(exception, OSError):
            return ErrorCategory.FILE_ACCESS
        return ErrorCategory.UNKNOWN

    def get_errors_by_severity(self, severity: ErrorSeverity) -> list[ErrorInfo]:
        return [error for error in self.errors if error.severity == severity]

    def has_critical_errors(self) -> bool:
        return bool(self.get_errors_by_severity(ErrorSeverity.CRITICAL))

    def get_summary(self) -> dict[str, Any]:
        """Get error summary statistics."""
        return {
            "total_errors": sum(self.error_counts.values()),
            "by_category": {cat.value: n for cat, n in self.error_counts.items()},
            "by_severity": {
                severity.value: len(self.get_errors_by_severity(severity))
                for severity in ErrorSeverity
            },
            "has_critical": self.has_critical_errors(),
        }

    def clear(self) -> None:
        """Clear all collected errors."""
        self.errors.clear()
        self.error_counts.clear()


def handle_file_error(
    file_path: Path,
    operation: str,
    exception: Exception,
    error_collector: ErrorCollector | None = None,
    logger: Any | None = None,
) -> SearchError:
    """
    Classify a per-unit failure, record it and log it.

    Args:
        file_path: Path to the file or container that caused the error
        operation: Operation being performed (e.g., "open", "read", "decode")
        exception: The exception that occurred
        error_collector: Optional error collector to add the error to
        logger: Optional SearchLogger to log the error

    Returns:
        The classified SearchError
    """
    error: SearchError
    if isinstance(exception, SearchError):
        error = exception
    elif isinstance(exception, zipfile.BadZipFile):
        error = ArchiveError(f"Cannot {operation} archive: {exception}", file_path)
    elif isinstance(exception, BuiltinPermissionError):
        error = PermissionError(f"Permission denied during {operation}: {exception}", file_path)
    elif isinstance(exception, OSError):
        error = FileAccessError(f"Cannot {operation} file: {exception}", file_path)
    else:
        error = SearchError(
            f"Unexpected error during {operation}: {exception}", file_path=file_path
        )

    if error_collector:
        error_collector.add_error(error)

    if logger:
        logger.log_file_error(str(file_path), error.message, operation=operation)

    return error


def create_error_report(error_collector: ErrorCollector) -> str:
    """Create a human-readable error report."""
    if not error_collector.errors:
        return "No errors occurred during the search operation."

    summary = error_collector.get_summary()

    report = ["Search Error Report", "=" * 50, ""]
    report.append(f"Total errors: {summary['total_errors']}")
    report.append("")

    report.append("Errors by category:")
    for category, count in summary["by_category"].items():
        report.append(f"  {category}: {count}")
    report.append("")

    report.append("Skipped files:")
    for error in error_collector.errors:
        report.append(f"  - {error.message}")
        if error.file_path:
            report.append(f"    File: {error.file_path}")
    report.append("")

    report.append("General Suggestions:")
    report.append("  - Check file permissions and accessibility")
    report.append("  - Consider excluding problematic directories with --exclude")
    report.append("  - Use --verbose for per-file diagnostics")

    return "\n".join(report)
