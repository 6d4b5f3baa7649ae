"""
Zip-format container scanning (JAR, ZIP, WAR, EAR).

Containers are read in place with ``zipfile``: entries are listed from the
central directory and streamed into memory one at a time, never extracted to
disk. A container that cannot be opened is skipped as a whole; an entry that
cannot be read or decoded is skipped on its own.

Classes:
    ContainerScanner: Per-container search operations returning UnitOutcome

Example:
    >>> scanner = ContainerScanner()
    >>> outcome = scanner.scan_class_names(Path("lib/app.jar"), "Bar", exact=True)
    >>> [m.content for m in outcome.matches]
    ['com.foo.Bar']
"""

from __future__ import annotations

import zipfile
import zlib
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import regex as regex_mod

from ..core.types import ALL_ENTRY_KINDS, ArchiveSummary, EntryKind, Match, UnitOutcome
from ..utils.logging_config import SearchLogger, get_logger
from .classifier import (
    CLASS_BYTECODE_LABEL,
    classify_entry,
    entry_type_label,
    is_class_entry,
    is_directory_entry,
)
from .extractors import search_binary
from .matchers import dotted_class_name, matches_exact, matches_package, matches_substring
from .text_scanner import scan_text

# Failures that make a whole container unreadable
_OPEN_ERRORS = (zipfile.BadZipFile, zipfile.LargeZipFile, OSError, EOFError, ValueError)
# Failures confined to one entry (CRC mismatch, bad deflate stream,
# unsupported compression, encryption, truncated data)
_ENTRY_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    NotImplementedError,
    RuntimeError,
    OSError,
    EOFError,
    ValueError,
)


class _ContainerOpenError(Exception):
    pass


def entry_location(container: Path, entry_name: str) -> str:
    return f"{container}:{entry_name}"


class ContainerScanner:
    """Search operations over a single zip-format container."""

    def __init__(self, logger: SearchLogger | None = None) -> None:
        self.logger = logger or get_logger()

    @contextmanager
    def _open(self, path: Path) -> Iterator[zipfile.ZipFile]:
        try:
            zf = zipfile.ZipFile(path)
        except _OPEN_ERRORS as e:
            raise _ContainerOpenError(f"cannot open container: {e}") from e
        with zf:
            yield zf

    def _file_entries(self, zf: zipfile.ZipFile) -> Iterator[zipfile.ZipInfo]:
        for info in zf.infolist():
            if not is_directory_entry(info.filename):
                yield info

    def _read_entry(
        self, zf: zipfile.ZipFile, info: zipfile.ZipInfo, outcome: UnitOutcome
    ) -> bytes | None:
        try:
            return zf.read(info)
        except _ENTRY_ERRORS as e:
            outcome.entries_skipped += 1
            self.logger.log_file_error(
                entry_location(outcome.unit, info.filename), str(e), operation="read_entry"
            )
            return None

    def scan_content(
        self,
        path: Path,
        pattern: regex_mod.Pattern,
        kinds: frozenset[EntryKind] = ALL_ENTRY_KINDS,
        *,
        bytecode: bool = True,
        count_entries: bool = True,
    ) -> UnitOutcome:
        """
        Search entry payloads for ``pattern``.

        Args:
            path: Container on disk
            pattern: Compiled regular expression
            kinds: Entry kinds to search; others are only counted
            bytecode: Route class entries to the binary string extractor;
                when False every entry is scanned as text
            count_entries: Record per-kind entry counts in the outcome
        """
        outcome = UnitOutcome(unit=path)
        try:
            with self._open(path) as zf:
                outcome.processed = True
                for info in self._file_entries(zf):
                    name = info.filename
                    kind = classify_entry(name)
                    if count_entries:
                        outcome.count_entry(kind)
                    if kind not in kinds:
                        continue

                    data = self._read_entry(zf, info, outcome)
                    if data is None:
                        continue

                    location = entry_location(path, name)
                    if bytecode and kind is EntryKind.CLASS:
                        outcome.matches.extend(
                            search_binary(data, pattern, location, CLASS_BYTECODE_LABEL)
                        )
                        continue
                    try:
                        outcome.matches.extend(
                            scan_text(data, pattern, location, entry_type_label(name))
                        )
                    except UnicodeDecodeError as e:
                        outcome.entries_skipped += 1
                        self.logger.log_file_error(location, str(e), operation="decode_entry")
        except _ContainerOpenError as e:
            return UnitOutcome.skip(path, str(e), error=e.__cause__ or e)
        return outcome

    def scan_text_only(self, path: Path, pattern: regex_mod.Pattern) -> UnitOutcome:
        """Text scan of every entry, without bytecode extraction or entry counts."""
        return self.scan_content(path, pattern, bytecode=False, count_entries=False)

    def scan_class_names(self, path: Path, query: str, exact: bool) -> UnitOutcome:
        """Match class entry names against ``query`` (exact or substring)."""
        matcher = matches_exact if exact else matches_substring
        outcome = UnitOutcome(unit=path)
        try:
            with self._open(path) as zf:
                outcome.processed = True
                for info in self._file_entries(zf):
                    name = info.filename
                    if not is_class_entry(name):
                        continue
                    outcome.count_entry(EntryKind.CLASS)
                    class_name = dotted_class_name(name)
                    if matcher(class_name, query):
                        outcome.matches.append(
                            Match(entry_location(path, name), None, class_name, "class")
                        )
        except _ContainerOpenError as e:
            return UnitOutcome.skip(path, str(e), error=e.__cause__ or e)
        return outcome

    def scan_package(self, path: Path, prefix: str) -> UnitOutcome:
        """Match class entries whose path lies under ``prefix`` (slash form)."""
        outcome = UnitOutcome(unit=path)
        try:
            with self._open(path) as zf:
                outcome.processed = True
                for info in self._file_entries(zf):
                    name = info.filename
                    if not is_class_entry(name):
                        continue
                    outcome.count_entry(EntryKind.CLASS)
                    if matches_package(name, prefix):
                        outcome.matches.append(
                            Match(entry_location(path, name), None, dotted_class_name(name), "package")
                        )
        except _ContainerOpenError as e:
            return UnitOutcome.skip(path, str(e), error=e.__cause__ or e)
        return outcome

    def summarize(self, path: Path) -> ArchiveSummary | None:
        """Entry counts and size for the listing report; None if unreadable."""
        class_count = source_count = file_count = 0
        try:
            size = path.stat().st_size
            with self._open(path) as zf:
                for info in self._file_entries(zf):
                    file_count += 1
                    kind = classify_entry(info.filename)
                    if kind is EntryKind.CLASS:
                        class_count += 1
                    elif kind is EntryKind.SOURCE:
                        source_count += 1
        except (_ContainerOpenError, OSError) as e:
            self.logger.log_file_error(str(path), str(e), operation="summarize")
            return None
        return ArchiveSummary(
            path=path,
            class_entries=class_count,
            source_entries=source_count,
            file_entries=file_count,
            size_bytes=size,
        )
