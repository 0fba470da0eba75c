from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from keypager.core.plan import Plan

logger = logging.getLogger("keypager")


@dataclass(frozen=True)
class FetchEvent:
    """One executed page fetch.

    ``limit`` is the fetch size handed to the store (page size plus the
    lookahead row); ``result_count`` counts fetched rows, lookahead included.
    """

    operation: str
    collection: str
    filter: dict[str, Any] | None = None
    sort: list[tuple[str, int]] | None = None
    limit: int = 0
    page_size: int = 0
    flipped: bool = False
    has_prior_boundary: bool = False
    duration_ms: float = 0.0
    result_count: int | None = None

    @property
    def direction(self) -> str:
        return "backward" if self.flipped else "forward"

    @property
    def has_more(self) -> bool | None:
        """Whether the lookahead row came back, None when unknown or unbounded."""
        if self.result_count is None or not self.page_size:
            return None
        return self.result_count > self.page_size


class _TracingState:
    """Process-wide tracing switches, listeners and captured events."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.enabled: bool = False
        self.slow_fetch_ms: float = 100.0
        self.listeners: list[Callable[[FetchEvent], Any]] = []
        self.events: list[FetchEvent] = []
        self.capture_events: bool = False


_state = _TracingState()


def enable_tracing(slow_query_ms: float = 100.0, capture_events: bool = False) -> None:
    """Enable page fetch tracing."""
    _state.enabled = True
    _state.slow_fetch_ms = slow_query_ms
    _state.capture_events = capture_events


def disable_tracing() -> None:
    """Disable tracing and clear all state."""
    _state.reset()


def get_events() -> list[FetchEvent]:
    return list(_state.events)


def clear_events() -> None:
    _state.events.clear()


def add_listener(callback: Callable[[FetchEvent], Any]) -> None:
    """Register a listener that receives a FetchEvent on each fetch."""
    _state.listeners.append(callback)


def remove_listener(callback: Callable[[FetchEvent], Any]) -> None:
    _state.listeners.remove(callback)


def emit_event(event: FetchEvent) -> None:
    """Record a fetch: capture it, log it if slow, notify listeners."""
    if not _state.enabled:
        return

    if _state.capture_events:
        _state.events.append(event)

    if event.duration_ms > _state.slow_fetch_ms:
        logger.warning(
            "Slow page fetch: %s %s page of %d on %s took %.1fms (threshold: %.1fms)",
            event.operation,
            event.direction,
            event.page_size,
            event.collection,
            event.duration_ms,
            _state.slow_fetch_ms,
        )
    else:
        logger.debug(
            "Page fetch on %s: %s rows of limit %d, has_more=%s",
            event.collection,
            event.result_count,
            event.limit,
            event.has_more,
        )

    for listener in _state.listeners:
        listener(event)

    _try_emit_otel_span(event)


def _try_emit_otel_span(event: FetchEvent) -> None:
    """Emit an OpenTelemetry span when the optional dependency is installed."""
    try:
        from opentelemetry import trace
    except ImportError:
        return

    tracer = trace.get_tracer("keypager")
    with tracer.start_as_current_span(f"keypager.{event.operation}") as span:
        span.set_attribute("db.collection", event.collection)
        span.set_attribute("keypager.page_size", event.page_size)
        span.set_attribute("keypager.fetch_limit", event.limit)
        span.set_attribute("keypager.direction", event.direction)
        span.set_attribute("keypager.has_prior_boundary", event.has_prior_boundary)
        if event.result_count is not None:
            span.set_attribute("keypager.result_count", event.result_count)
        if event.has_more is not None:
            span.set_attribute("keypager.has_more", event.has_more)


@asynccontextmanager
async def track_query(
    operation: str,
    collection: str,
    plan: Plan | None = None,
    filter: dict | None = None,
    sort: list | None = None,
):
    """Time a fetch executing ``plan`` and emit a FetchEvent.

    Set ``ctx["result_count"]`` inside the block to the number of fetched rows.
    """
    ctx: dict[str, Any] = {"result_count": None}
    if not _state.enabled:
        yield ctx
        return

    start = time.perf_counter()
    try:
        yield ctx
    finally:
        event = FetchEvent(
            operation=operation,
            collection=collection,
            filter=filter,
            sort=sort,
            limit=plan.limit if plan else 0,
            page_size=plan.page_size if plan else 0,
            flipped=plan.flipped if plan else False,
            has_prior_boundary=plan.has_prior_boundary if plan else False,
            duration_ms=(time.perf_counter() - start) * 1000,
            result_count=ctx.get("result_count"),
        )
        emit_event(event)
