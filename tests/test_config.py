"""Tests for config module."""

import pytest
from pathlib import Path

from pollwatch.config import WatcherConfig


class TestWatcherConfig:
    """Tests for WatcherConfig class."""

    def test_default_values(self):
        config = WatcherConfig()
        assert config.poll_interval_ms == 250
        assert config.poll_interval == 0.25
        assert config.event_buffer == 0
        assert config.error_buffer == 0
        assert config.follow_symlinks is False
        assert config.ignore_patterns == []

    def test_custom_values(self):
        config = WatcherConfig(
            poll_interval_ms=50,
            event_buffer=10,
            ignore_patterns=["*.tmp"],
        )
        assert config.poll_interval == 0.05
        assert config.event_buffer == 10
        assert config.ignore_patterns == ["*.tmp"]

    def test_rejects_non_positive_interval(self):
        with pytest.raises(ValueError, match="poll_interval_ms"):
            WatcherConfig(poll_interval_ms=0)

    def test_rejects_negative_buffer(self):
        with pytest.raises(ValueError):
            WatcherConfig(error_buffer=-1)

    def test_nothing_ignored_by_default(self):
        config = WatcherConfig()
        assert config.should_ignore(Path("/path/to/file.tmp")) is False

    def test_should_ignore_by_name(self):
        config = WatcherConfig(ignore_patterns=["*.swp"])
        assert config.should_ignore(Path("/path/to/.file.swp")) is True
        assert config.should_ignore(Path("/path/to/file.txt")) is False

    def test_should_ignore_nested_pattern(self):
        config = WatcherConfig(ignore_patterns=[".git/*"])
        assert config.should_ignore(Path("/repo/.git/config")) is True
        assert config.should_ignore(Path("/repo/src/config")) is False
