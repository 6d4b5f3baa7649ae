"""
Line-oriented text scanning.

Functions:
    scan_text: Decode a whole payload as UTF-8 and test it line by line
    scan_loose_file: Stream a file from disk line by line, with a one-shot
        binary fallback on the first undecodable line
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import regex as regex_mod

from ..core.types import Match
from .classifier import binary_label
from .extractors import search_binary

ENCODING = "utf-8"


@dataclass(slots=True)
class LooseFileScan:
    matches: list[Match] = field(default_factory=list)
    # line number of the first undecodable line, if any
    decode_error_line: int | None = None

    @property
    def fell_back(self) -> bool:
        return self.decode_error_line is not None


def _strip_eol(raw: bytes) -> bytes:
    if raw.endswith(b"\n"):
        raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
    return raw


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` dropping one trailing ``\\r`` per line; no phantom last line."""
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [ln[:-1] if ln.endswith("\r") else ln for ln in lines]


def scan_text(data: bytes, pattern: regex_mod.Pattern, location: str, category: str) -> list[Match]:
    """
    Test every line of ``data`` against ``pattern``.

    Raises:
        UnicodeDecodeError: if ``data`` is not valid UTF-8; no partial results.
    """
    text = data.decode(ENCODING)
    return [
        Match(location, lineno, line.strip(), category)
        for lineno, line in enumerate(split_lines(text), start=1)
        if pattern.search(line)
    ]


def scan_loose_file(path: Path, pattern: regex_mod.Pattern, category: str) -> LooseFileScan:
    """
    Scan a file on disk line by line.

    On the first line that is not valid UTF-8, line scanning stops and the
    whole file is searched once with the binary string extractor. Matches found
    before the decode error are kept.

    Raises:
        OSError: if the file cannot be opened or read.
    """
    result = LooseFileScan()
    location = str(path)

    with path.open("rb") as fh:
        for lineno, raw in enumerate(fh, start=1):
            try:
                line = _strip_eol(raw).decode(ENCODING)
            except UnicodeDecodeError:
                result.decode_error_line = lineno
                break
            if pattern.search(line):
                result.matches.append(Match(location, lineno, line.strip(), category))

    if result.fell_back:
        result.matches.extend(search_binary(path.read_bytes(), pattern, location, binary_label(path)))

    return result
