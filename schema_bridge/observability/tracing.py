"""Minimal tracing primitives.

Log lines are single JSON objects on stdout, so they can be shipped to any
collector without an extra dependency.
"""

from __future__ import annotations

import json
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator

from schema_bridge.errors import SchemaError


@dataclass
class Span:
    name: str
    trace_id: str
    span_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    start_ns: int = field(default_factory=time.time_ns)
    end_ns: int | None = None
    attributes: dict[str, Any] = field(default_factory=dict)

    def end(self) -> None:
        if self.end_ns is None:
            self.end_ns = time.time_ns()

    @property
    def duration_ms(self) -> float | None:
        if self.end_ns is None:
            return None
        return (self.end_ns - self.start_ns) / 1_000_000.0


def new_trace_id() -> str:
    return uuid.uuid4().hex


def log_event(event: str, *, trace_id: str, span: Span | None = None, **fields: Any) -> None:
    payload: dict[str, Any] = {'event': event, 'trace_id': trace_id, **fields}
    if span is not None:
        payload['span'] = {
            'name': span.name,
            'span_id': span.span_id,
            'duration_ms': span.duration_ms,
            'attributes': span.attributes,
        }
    print(json.dumps(payload, ensure_ascii=False, default=str))


@contextmanager
def traced(name: str, *, trace_id: str, **attributes: Any) -> Iterator[Span]:
    """Open a span, yield it, and log `<name>.end` when the block exits (even on error)."""
    span = Span(name=name, trace_id=trace_id, attributes=dict(attributes))
    try:
        yield span
    finally:
        span.end()
        log_event(f'{name}.end', trace_id=trace_id, span=span)


def log_schema_error(exc: SchemaError, *, trace_id: str, **fields: Any) -> None:
    """Log a SchemaError with its path and reason."""
    log_event(
        'schema.conversion_failed',
        trace_id=trace_id,
        reason=exc.reason.value,
        path=list(exc.path),
        detail=exc.detail,
        **fields,
    )
