"""Shared test fixtures for the mdsurface test suite."""

from __future__ import annotations

import pytest

from mdsurface.config import EditorConfig
from mdsurface.converter.md_to_markup import MarkdownToMarkupConverter
from mdsurface.editor import MarkdownEditor


class RecordingMetricsHook:
    """MetricsHook that keeps every data point for assertions."""

    def __init__(self) -> None:
        self.counters: dict[str, int] = {}
        self.timings: list[tuple[str, float]] = []
        self.gauges: dict[str, float] = {}

    def increment(self, name, value=1, tags=None):
        self.counters[name] = self.counters.get(name, 0) + value

    def timing(self, name, ms, tags=None):
        self.timings.append((name, ms))

    def gauge(self, name, value, tags=None):
        self.gauges[name] = value


@pytest.fixture
def config() -> EditorConfig:
    """Default configuration."""
    return EditorConfig()


@pytest.fixture
def metrics() -> RecordingMetricsHook:
    return RecordingMetricsHook()


@pytest.fixture
def converter(config: EditorConfig) -> MarkdownToMarkupConverter:
    """Markdown-to-markup converter using the default config."""
    return MarkdownToMarkupConverter(config)


@pytest.fixture
def editor(config: EditorConfig) -> MarkdownEditor:
    """An empty, focused editing session."""
    session = MarkdownEditor(config)
    session.focus()
    return session
