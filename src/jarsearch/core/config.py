"""
Configuration module for jarsearch.

This module defines the SearchConfig class, the central configuration object
for a search run: where to search, what to skip, how many workers to use and
whether results are reduced to one per location.

Example:
    >>> from jarsearch.core.config import SearchConfig
    >>> config = SearchConfig(
    ...     root="/opt/app",
    ...     exclude=["/backup/", "-sources.jar"],
    ...     min_size=1024,
    ...     workers=8,
    ...     mini=True,
    ... )
    >>> config.validate()
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from ..utils.error_handling import ConfigurationError
from .types import OutputFormat


@dataclass(slots=True)
class SearchConfig:
    # Scope
    root: str | Path = "."
    # plain substrings, case-sensitive; a path containing any of them is skipped
    exclude: list[str] = field(default_factory=list)
    follow_symlinks: bool = False
    # if True, prune excluded directories during traversal
    dir_prune_exclude: bool = True

    # Filtering
    min_size: int = 0  # bytes; 0 = no threshold, applies to top-level files only

    # Performance
    workers: int = 0  # 0 = auto(cpu_count)

    # Output
    mini: bool = False  # one result per location
    output_format: OutputFormat = OutputFormat.TEXT

    def root_path(self) -> Path:
        return Path(self.root)

    def resolve_workers(self) -> int:
        """Effective worker pool size."""
        return self.workers or os.cpu_count() or 4

    def validate(self) -> None:
        """Validate configuration and raise ConfigurationError on issues.

        Raises:
            ConfigurationError: If the configuration is invalid.
        """
        if self.root is None or str(self.root) == "":
            raise ConfigurationError(
                "A search root must be specified",
                context={"field": "root"},
            )

        if self.workers < 0:
            raise ConfigurationError(
                "Worker count must be non-negative (0 = auto-detect CPU count)",
                context={"field": "workers", "value": self.workers},
            )

        if self.min_size < 0:
            raise ConfigurationError(
                "Size threshold must be non-negative (0 = disabled)",
                context={"field": "min_size", "value": self.min_size},
            )

        empty = [i for i, ex in enumerate(self.exclude) if not ex]
        if empty:
            raise ConfigurationError(
                "Exclusion substrings must be non-empty",
                context={"field": "exclude", "indexes": empty},
            )
