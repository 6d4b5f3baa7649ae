"""
Directory traversal and unit filtering.

Functions:
    iter_classified_files: Lazily walk a root, yielding classified, filtered files
    passes_size_threshold: Minimum-size check for top-level files

Classes:
    ExclusionFilter: Substring-based path rejection
    ClassifiedFile: A walked file with its category
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from ..core.types import FileCategory
from .classifier import classify_path


@dataclass(frozen=True, slots=True)
class ClassifiedFile:
    path: Path
    category: FileCategory


class ExclusionFilter:
    """
    Rejects any path whose string form contains one of the configured substrings.

    Matching is plain, case-sensitive containment. No globbing.

    Example:
        >>> f = ExclusionFilter(["/backup/", "-sources.jar"])
        >>> f.is_excluded(Path("lib/foo-sources.jar"))
        True
    """

    def __init__(self, substrings: Iterable[str] = ()) -> None:
        self.substrings: tuple[str, ...] = tuple(dict.fromkeys(substrings))

    def __bool__(self) -> bool:
        return bool(self.substrings)

    def matching(self, path: Path | str) -> str | None:
        """Return the first substring contained in ``path``, or None."""
        text = str(path)
        for sub in self.substrings:
            if sub in text:
                return sub
        return None

    def is_excluded(self, path: Path | str) -> bool:
        return self.matching(path) is not None


def passes_size_threshold(path: Path, min_size: int) -> bool:
    """True if ``path`` should be opened. 0 disables the check.

    A file whose size cannot be read passes; opening it reports the problem.
    """
    if min_size <= 0:
        return True
    try:
        return path.stat().st_size >= min_size
    except OSError:
        return True


def _is_regular_file(path: Path, follow_symlinks: bool) -> bool:
    if not follow_symlinks and path.is_symlink():
        return False
    return path.is_file()


def iter_classified_files(
    root: Path | str,
    exclusions: ExclusionFilter | None = None,
    follow_symlinks: bool = False,
    *,
    prune_excluded_dirs: bool = True,
) -> Iterator[ClassifiedFile]:
    """
    Walk ``root`` and yield every regular file not rejected by ``exclusions``.

    The sequence is lazy and single-use; order follows ``os.walk`` and carries
    no meaning. A root that is itself a file yields that file alone. A missing
    root yields nothing.
    """
    exclusions = exclusions or ExclusionFilter()
    root_path = Path(root)

    if root_path.is_file():
        if not exclusions.is_excluded(root_path):
            yield ClassifiedFile(root_path, classify_path(root_path))
        return
    if not root_path.is_dir():
        return

    for dirpath, dirnames, filenames in os.walk(root_path, followlinks=follow_symlinks):
        # every file below an excluded directory would be excluded anyway
        if prune_excluded_dirs and exclusions and dirnames:
            dirnames[:] = [
                d for d in dirnames if not exclusions.is_excluded(os.path.join(dirpath, d))
            ]

        for name in filenames:
            p = Path(dirpath) / name
            if exclusions.is_excluded(p):
                continue
            if not _is_regular_file(p, follow_symlinks):
                continue
            yield ClassifiedFile(p, classify_path(p))
