"""Tests for jarsearch.core.config module."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from jarsearch.core.config import SearchConfig
from jarsearch.core.types import OutputFormat
from jarsearch.utils.error_handling import ConfigurationError


class TestSearchConfigDefaults:
    """Tests for SearchConfig default values."""

    def test_defaults(self):
        cfg = SearchConfig()
        assert cfg.root == "."
        assert cfg.exclude == []
        assert cfg.min_size == 0
        assert cfg.workers == 0
        assert cfg.mini is False
        assert cfg.follow_symlinks is False
        assert cfg.dir_prune_exclude is True
        assert cfg.output_format == OutputFormat.TEXT

    def test_root_path(self):
        assert SearchConfig(root="/opt/app").root_path() == Path("/opt/app")

    def test_resolve_workers(self):
        assert SearchConfig(workers=3).resolve_workers() == 3
        assert SearchConfig().resolve_workers() == (os.cpu_count() or 4)


class TestSearchConfigValidate:
    def test_valid(self):
        SearchConfig(root="/tmp", exclude=["/backup/"], min_size=10, workers=2).validate()

    def test_empty_root(self):
        with pytest.raises(ConfigurationError):
            SearchConfig(root="").validate()

    def test_negative_workers(self):
        with pytest.raises(ConfigurationError) as exc:
            SearchConfig(workers=-1).validate()
        assert exc.value.context["field"] == "workers"

    def test_negative_min_size(self):
        with pytest.raises(ConfigurationError) as exc:
            SearchConfig(min_size=-5).validate()
        assert exc.value.context["field"] == "min_size"

    def test_empty_exclusion(self):
        with pytest.raises(ConfigurationError):
            SearchConfig(exclude=[""]).validate()
