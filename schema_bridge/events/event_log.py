"""Append-only log of custom run events.

One JSON record per line:

    {"timestamp": "...", "eventName": "...", "runId": "...", "data": ..., "tags": [...], "metadata": {...}}

`tags` and `metadata` are written only when non-empty. The file is opened in
append mode, so records accumulate across runs; the caller flushes and closes
it explicitly (or uses the log as a context manager).
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator, Mapping, Sequence

from schema_bridge.observability.tracing import log_event


class EventLog:
    """Write custom events to a JSON-lines file."""

    name = 'custom_event_log'

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._fh = self._path.open('a', encoding='utf-8')

    @property
    def path(self) -> Path:
        return self._path

    @property
    def closed(self) -> bool:
        return self._fh.closed

    def on_custom_event(
        self,
        name: str,
        data: Any,
        *,
        run_id: str,
        tags: Sequence[str] | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Record one custom event.

        Args:
            name: Event name chosen by the dispatcher.
            data: JSON-serializable payload.
            run_id: Id of the run that dispatched the event.
            tags: Optional run tags.
            metadata: Optional run metadata.

        Returns:
            The record that was written.

        Raises:
            ValueError: If the log has been closed.
            TypeError: If `data` or `metadata` is not JSON-serializable.
        """
        if self._fh.closed:
            raise ValueError(f'Event log {self._path} is closed.')

        record: dict[str, Any] = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'eventName': name,
            'runId': str(run_id),
            'data': data,
        }
        if tags:
            record['tags'] = list(tags)
        if metadata:
            record['metadata'] = dict(metadata)

        self._fh.write(json.dumps(record, ensure_ascii=False) + '\n')
        log_event('custom_event', trace_id=str(run_id), event_name=name)
        return record

    def flush(self) -> None:
        self._fh.flush()

    def close(self) -> None:
        if not self._fh.closed:
            self._fh.flush()
            self._fh.close()

    def __enter__(self) -> 'EventLog':
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def read_events(path: str | Path) -> Iterator[dict[str, Any]]:
    """Yield the records of an event log, skipping blank lines."""
    with Path(path).open(encoding='utf-8') as fh:
        for line in fh:
            if line.strip():
                yield json.loads(line)
