"""Mock LLM adapter for deterministic tests and offline development."""

from __future__ import annotations

import json
from typing import Any, Callable, Sequence

from schema_bridge.llm.base import LLMClient, LLMRequest, LLMResponse


class MockLLMClient(LLMClient):
    """A mock model that returns pre-canned outputs.

    Provide one of:
    - `output`: a static payload (dicts are JSON-serialized, strings returned as-is),
    - `fn`: a callable mapping request -> payload,
    - `outputs`: a sequence of payloads consumed one per call (the last one repeats).

    Every request received is kept in `requests`.
    """

    def __init__(
        self,
        output: dict[str, Any] | str | None = None,
        fn: Callable[[LLMRequest], dict[str, Any] | str] | None = None,
        outputs: Sequence[dict[str, Any] | str] | None = None,
    ) -> None:
        self._output = output
        self._fn = fn
        self._outputs = list(outputs or [])
        self.requests: list[LLMRequest] = []

    async def generate(self, request: LLMRequest) -> LLMResponse:
        self.requests.append(request)

        payload: dict[str, Any] | str
        if self._fn is not None:
            payload = self._fn(request)
        elif self._outputs:
            payload = self._outputs.pop(0) if len(self._outputs) > 1 else self._outputs[0]
        else:
            payload = self._output if self._output is not None else {}

        text = payload if isinstance(payload, str) else json.dumps(payload)
        return LLMResponse(output_text=text, raw={'mock': True, 'payload': payload})
