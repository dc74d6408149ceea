"""Metrics hook protocol and no-op default implementation.

mdsurface emits counters and timings from the conversion pipeline and
the editing session.  By default a :class:`NoopMetricsHook` is used.
Supply any object satisfying :class:`MetricsHook` through
``EditorConfig(metrics=...)`` to route them elsewhere.

Emitted metric names:

* ``mdsurface.conversions_total``        -- counter
* ``mdsurface.blocks_total``             -- counter (blocks classified)
* ``mdsurface.conversion_duration_ms``   -- timing
* ``mdsurface.surface_renders_total``    -- counter (tree replacements)
* ``mdsurface.saves_total``              -- counter
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy.

    All methods accept an optional *tags* dict of string keys and values.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment a counter metric by *value*."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration in milliseconds."""
        ...

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Set a gauge metric to an absolute value."""
        ...


class NoopMetricsHook:
    """Metrics implementation that discards every data point.

    Used when no backend is configured, so call-sites never need
    ``if self._metrics is not None`` guards.
    """

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass


def resolve_metrics(hook: object | None) -> MetricsHook:
    """Return *hook*, or a :class:`NoopMetricsHook` when it is ``None``."""
    return hook if hook is not None else NoopMetricsHook()  # type: ignore[return-value]
