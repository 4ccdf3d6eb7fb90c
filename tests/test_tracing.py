from __future__ import annotations

import json

import pytest

from schema_bridge.errors import SchemaError, SchemaErrorReason
from schema_bridge.observability.tracing import Span, log_schema_error, traced


def test_span_duration_is_set_once_ended() -> None:
    span = Span(name='s', trace_id='t')
    assert span.duration_ms is None
    span.end()
    assert span.duration_ms is not None and span.duration_ms >= 0


def test_traced_logs_span_even_when_block_fails(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(RuntimeError):
        with traced('llm.call', trace_id='abc', attempt=0):
            raise RuntimeError('boom')

    logged = json.loads(capsys.readouterr().out.strip())
    assert logged['event'] == 'llm.call.end'
    assert logged['trace_id'] == 'abc'
    assert logged['span']['attributes'] == {'attempt': 0}
    assert logged['span']['duration_ms'] is not None


def test_log_schema_error_includes_path_and_reason(capsys: pytest.CaptureFixture[str]) -> None:
    exc = SchemaError(SchemaErrorReason.EMPTY_ENUM, ('a', '[]', 'b'))
    log_schema_error(exc, trace_id='t1')

    logged = json.loads(capsys.readouterr().out.strip())
    assert logged['reason'] == 'empty enum'
    assert logged['path'] == ['a', '[]', 'b']
    assert str(exc) == 'empty enum at a.[].b'
