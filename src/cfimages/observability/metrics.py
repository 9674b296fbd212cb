"""Metrics hook protocol and no-op default implementation.

The SDK reports a handful of counters and timings.  Unless a backend is
passed as ``CFImagesConfig(metrics=...)`` a :class:`NoopMetricsHook` is
used and every call-site is free.

Emitted metric names:

* ``cfimages.requests_total``          -- counter, tagged with ``method`` and ``status``
* ``cfimages.request_duration_ms``     -- timing, tagged with ``method`` and ``status``
* ``cfimages.upload_success_total``    -- counter, tagged with ``source``
* ``cfimages.upload_failure_total``    -- counter, tagged with ``source`` and ``error``
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy.

    *tags* maps string keys to string values; backends translate them into
    their own labelling scheme.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment a counter metric."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a request duration in milliseconds."""
        ...


class NoopMetricsHook:
    """Default backend; drops every counter and timing."""

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
