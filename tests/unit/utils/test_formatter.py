"""Tests for jarsearch.utils.formatter module."""

from __future__ import annotations

import io
from pathlib import Path

import orjson
import pytest
from rich.console import Console

from jarsearch.core.types import (
    ArchiveSummary,
    FileCategory,
    Match,
    OutputFormat,
    RunStatistics,
    SearchResult,
)
from jarsearch.utils.formatter import (
    CSV_HEADER,
    export_csv,
    format_result,
    format_text,
    read_csv,
    render_archive_listing,
    render_results,
    render_stats,
    to_json_bytes,
)

MATCHES = [
    Match("lib/a.jar:com/foo/Bar.class", None, "com.foo.Bar", "class"),
    Match("conf/db.properties", 2, "url=jdbc:oracle:thin:@db", "properties_config"),
    Match("notes.txt", 1, 'say "hi", then, leave', "text_file"),
]


def _result(items=MATCHES) -> SearchResult:
    stats = RunStatistics(
        archives=1,
        class_entries=10,
        files_processed=3,
        matches_found=len(items),
        elapsed_ms=250.0,
        category_counts={FileCategory.ARCHIVE_JAR: 1, FileCategory.CONFIG: 1},
    )
    return SearchResult(items=list(items), stats=stats)


def _console() -> tuple[Console, io.StringIO]:
    buf = io.StringIO()
    return Console(file=buf, width=120, color_system=None), buf


class TestToJsonBytes:
    def test_payload(self):
        data = orjson.loads(to_json_bytes(_result()))
        assert data["items"][0] == {
            "location": "lib/a.jar:com/foo/Bar.class",
            "line": None,
            "content": "com.foo.Bar",
            "category": "class",
        }
        assert data["stats"]["matches_found"] == 3
        assert data["stats"]["category_counts"] == {"archive-jar": 1, "config": 1}

    def test_format_result_json(self):
        text = format_result(_result(), OutputFormat.JSON)
        assert orjson.loads(text)["items"][1]["line"] == 2


class TestFormatText:
    def test_full_layout(self):
        text = format_text(_result())
        lines = text.splitlines()
        assert lines[0] == "Found 3 matches"
        assert "  1. lib/a.jar:com/foo/Bar.class class: com.foo.Bar" in lines
        assert "  2. conf/db.properties line:2" in lines
        assert "     properties_config: url=jdbc:oracle:thin:@db" in lines

    def test_mini_layout(self):
        text = format_text(_result(), mini=True)
        assert text.splitlines()[0] == "Found 3 unique files with matches"
        assert "  2. conf/db.properties" in text.splitlines()

    def test_empty(self):
        assert format_text(_result([])) == "No matches found"


class TestRichRendering:
    def test_render_results(self):
        console, buf = _console()
        render_results(_result(), console)
        out = buf.getvalue()
        assert "Found 3 matches" in out
        assert "conf/db.properties line:2" in out

    def test_render_results_empty(self):
        console, buf = _console()
        render_results(_result([]), console)
        assert "No matches found" in buf.getvalue()

    def test_render_stats_mini(self):
        console, buf = _console()
        render_stats(_result(), console, mini=True, workers=4, exclusions=["/backup/"])
        out = buf.getvalue()
        assert "SEARCH STATISTICS" in out
        assert "Unique files w/ matches:" in out
        assert "Total matches found:" in out
        assert "Mini (unique files)" in out
        assert "/backup/" in out

    def test_render_archive_listing(self):
        console, buf = _console()
        summaries = [
            ArchiveSummary(Path("lib/app.jar"), 4, 1, 7, 1024 * 1024),
            ArchiveSummary(Path("lib/" + "x" * 60 + ".jar"), 2, 0, 2, 1024 * 1024),
        ]
        render_archive_listing(summaries, "lib", console)
        out = buf.getvalue()
        assert "Found 2 JAR files" in out
        assert "app.jar" in out
        assert "TOTAL" in out
        assert "2.00" in out
        assert "x" * 44 + "..." in out

    def test_render_archive_listing_empty(self):
        console, buf = _console()
        render_archive_listing([], "lib", console)
        assert "No JAR files found in lib" in buf.getvalue()


class TestCsv:
    """Tests for CSV export and import."""

    def test_round_trip(self, tmp_path):
        path = tmp_path / "out.csv"
        assert export_csv(MATCHES, path) == 3
        assert read_csv(path) == MATCHES

    def test_header_and_empty_line_field(self, tmp_path):
        path = tmp_path / "out.csv"
        export_csv(MATCHES[:1], path)
        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[0] == ",".join(CSV_HEADER)
        assert lines[1] == "lib/a.jar:com/foo/Bar.class,,com.foo.Bar,class"

    def test_quoting(self, tmp_path):
        path = tmp_path / "out.csv"
        export_csv(MATCHES[2:], path)
        assert '"say ""hi"", then, leave"' in path.read_text(encoding="utf-8")

    def test_empty(self, tmp_path):
        path = tmp_path / "out.csv"
        assert export_csv([], path) == 0
        assert read_csv(path) == []

    def test_overwrites(self, tmp_path):
        path = tmp_path / "out.csv"
        path.write_text("old content\n")
        export_csv(MATCHES[:1], path)
        assert read_csv(path) == MATCHES[:1]

    def test_bad_header(self, tmp_path):
        path = tmp_path / "other.csv"
        path.write_text("a,b\n1,2\n")
        with pytest.raises(ValueError):
            read_csv(path)

    def test_unwritable(self, tmp_path):
        with pytest.raises(OSError):
            export_csv(MATCHES, tmp_path / "missing-dir" / "out.csv")
