"""
Printable-string extraction from binary payloads.

A coarse ``strings(1)``: compiled class files and other non-text payloads are
treated as opaque bytes, and every maximal run of printable ASCII (graphic
characters, space, tab) of at least ``MIN_RUN_LENGTH`` bytes becomes a
candidate string. Each candidate that the pattern matches yields exactly one
Match, however many times the pattern occurs inside it.
"""

from __future__ import annotations

from collections.abc import Iterator

import regex as regex_mod

from ..core.types import Match

MIN_RUN_LENGTH = 4

_PRINTABLE_RUN = regex_mod.compile(rb"[\x20-\x7e\t]{%d,}" % MIN_RUN_LENGTH)


def iter_printable_runs(data: bytes) -> Iterator[str]:
    """Yield maximal printable ASCII runs of at least MIN_RUN_LENGTH bytes."""
    for m in _PRINTABLE_RUN.finditer(data):
        yield m.group().decode("ascii")


def search_binary(
    data: bytes, pattern: regex_mod.Pattern, location: str, category: str
) -> list[Match]:
    """Return one Match per printable run of ``data`` that ``pattern`` matches."""
    matches: list[Match] = []
    for run in iter_printable_runs(data):
        if pattern.search(run):
            content = run.strip()
            matches.append(Match(location, None, content or run, category))
    return matches
