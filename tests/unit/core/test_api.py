"""Tests for jarsearch.core.api module."""

from __future__ import annotations

import os

import pytest

from conftest import make_zip, write_file
from jarsearch.core.api import JarSearch, compile_pattern, run
from jarsearch.core.config import SearchConfig
from jarsearch.core.types import EntryKind, FileCategory, Query, SearchMode
from jarsearch.utils.error_handling import ConfigurationError, ErrorCategory, PatternError


class TestCompilePattern:
    def test_valid(self):
        assert compile_pattern(r"jdbc:\w+").search("jdbc:oracle")

    def test_invalid(self):
        with pytest.raises(PatternError) as exc:
            compile_pattern("[unclosed")
        assert exc.value.pattern == "[unclosed"
        assert exc.value.category == ErrorCategory.PATTERN


class TestJarSearchRun:
    """Unit-level behavior of the engine."""

    def test_invalid_pattern_before_traversal(self, tmp_path, monkeypatch):
        engine = JarSearch(SearchConfig(root=tmp_path))
        walked = []
        monkeypatch.setattr(engine, "_walk", lambda stats: walked.append(stats) or [])
        with pytest.raises(PatternError):
            engine.run(Query(SearchMode.MASTER, "(unbalanced"))
        assert walked == []

    def test_class_modes_do_not_compile_pattern(self, sample_tree):
        # "[" would be an invalid regex; class modes treat it as a plain name
        result = JarSearch(SearchConfig(root=sample_tree)).run(Query(SearchMode.EXACT_CLASS, "["))
        assert result.items == []

    def test_invalid_config(self, tmp_path):
        with pytest.raises(ConfigurationError):
            JarSearch(SearchConfig(root=tmp_path, workers=-2)).run(Query(SearchMode.PACKAGE, "com"))

    def test_category_counts_sum_to_files_visited(self, sample_tree):
        result = JarSearch(SearchConfig(root=sample_tree)).run(Query(SearchMode.MASTER, "x"))
        s = result.stats
        assert sum(s.category_counts.values()) == s.files_visited == 8
        assert set(s.category_counts) == set(FileCategory)
        assert s.category_counts[FileCategory.ARCHIVE_JAR] == 3

    def test_size_threshold_skips_small_units(self, tmp_path):
        make_zip(tmp_path / "big.jar", {"com/foo/Bar.class": os.urandom(4096)})
        make_zip(tmp_path / "tiny.jar", {"Bar.class": b"\x00"})
        result = JarSearch(SearchConfig(root=tmp_path, min_size=1024)).run(
            Query(SearchMode.EXACT_CLASS, "Bar")
        )
        assert [m.content for m in result.items] == ["com.foo.Bar"]
        assert result.stats.files_processed == 1
        assert result.stats.units_skipped == 1

    def test_size_filtered_units_are_not_errors(self, tmp_path):
        make_zip(tmp_path / "tiny.jar", {"Bar.class": b"\x00"})
        engine = JarSearch(SearchConfig(root=tmp_path, min_size=10_000))
        engine.run(Query(SearchMode.EXACT_CLASS, "Bar"))
        assert not engine.has_errors()

    def test_excluded_unit_skipped_before_open(self, sample_tree):
        engine = JarSearch(SearchConfig(root=sample_tree, exclude=["app.jar"]))
        outcome = engine._class_unit("Bar", True)(sample_tree / "lib" / "app.jar")
        assert outcome.skipped
        assert outcome.skipped_reason == "excluded by 'app.jar'"
        assert outcome.matches == []
        assert outcome.error is None
        assert not engine.has_errors()

    def test_excluded_loose_file_skipped_in_master_unit(self, sample_tree):
        engine = JarSearch(SearchConfig(root=sample_tree, exclude=["/conf/"]))
        unit = engine._master_unit(compile_pattern("jdbc"))
        outcome = unit(sample_tree / "conf" / "db.properties")
        assert outcome.skipped
        assert not outcome.processed
        assert outcome.matches == []

    def test_unreadable_container_recorded(self, tmp_path, broken_jar, app_jar):
        engine = JarSearch(SearchConfig(root=tmp_path))
        result = engine.run(Query(SearchMode.EXACT_CLASS, "Bar"))
        assert [m.content for m in result.items] == ["com.foo.Bar"]
        assert result.stats.units_skipped == 1
        assert engine.has_errors()
        summary = engine.get_error_summary()
        assert summary["total_errors"] == 1
        assert summary["by_category"] == {"archive": 1}
        assert "broken.jar" in engine.get_error_report()

    def test_errors_reset_between_runs(self, tmp_path, broken_jar):
        engine = JarSearch(SearchConfig(root=tmp_path))
        engine.run(Query(SearchMode.PACKAGE, "com"))
        broken_jar.unlink()
        engine.run(Query(SearchMode.PACKAGE, "com"))
        assert not engine.has_errors()

    def test_search_wrapper(self, app_jar):
        result = JarSearch(SearchConfig(root=app_jar)).search("content", "jdbc:oracle", ["other"])
        assert [m.category for m in result.items] == ["properties"]

    def test_entry_kind_filter(self, app_jar):
        result = JarSearch(SearchConfig(root=app_jar)).run(
            Query(SearchMode.CONTENT, "jdbc:oracle", frozenset({EntryKind.CLASS}))
        )
        assert [m.category for m in result.items] == ["class_bytecode"]


class TestListArchives:
    def test_sorted_summaries(self, sample_tree):
        summaries = JarSearch(SearchConfig(root=sample_tree)).list_archives()
        names = [s.path.relative_to(sample_tree).as_posix() for s in summaries]
        assert names == ["backup/old.jar", "lib/app.jar", "lib/other.jar"]
        assert summaries[2].class_entries == 2

    def test_excluded_and_broken(self, sample_tree):
        write_file(sample_tree / "lib" / "broken.jar", b"garbage")
        summaries = JarSearch(SearchConfig(root=sample_tree, exclude=["/backup/"])).list_archives()
        assert [s.path.name for s in summaries] == ["app.jar", "other.jar"]


class TestRunFunction:
    def test_returns_pair(self, app_jar):
        items, stats = run("exact-class", "Bar", app_jar)
        assert [m.content for m in items] == ["com.foo.Bar"]
        assert stats.archives == 1
        assert stats.class_entries == 4

    def test_mode_enum(self, app_jar):
        items, _ = run(SearchMode.PACKAGE, "com.foo", app_jar)
        assert len(items) == 3

    def test_invalid_pattern(self, tmp_path):
        with pytest.raises(PatternError):
            run("content", "(", tmp_path)
