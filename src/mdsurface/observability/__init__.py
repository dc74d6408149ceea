"""Observability: structured logging and metrics hooks for mdsurface."""

from __future__ import annotations

from .logger import StructuredFormatter, get_logger, set_level
from .metrics import MetricsHook, NoopMetricsHook, resolve_metrics

__all__ = [
    "MetricsHook",
    "NoopMetricsHook",
    "StructuredFormatter",
    "get_logger",
    "resolve_metrics",
    "set_level",
]
