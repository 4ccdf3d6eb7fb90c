"""Structured output: prompt -> LLM -> JSON -> schema validation -> repair.

The JSON Schema is converted once, when the runner is built. A schema that
cannot be converted is a definition-time bug, so it is logged and raised
immediately instead of being retried.
"""

from __future__ import annotations

import json
import re
from typing import Any, Mapping

from pydantic import BaseModel, ValidationError

from schema_bridge.errors import LLMParseError, OrchestrationError, SchemaError
from schema_bridge.json_schema import UnknownFieldPolicy, build_model, convert_json_schema
from schema_bridge.llm.base import LLMClient, LLMRequest
from schema_bridge.observability.tracing import log_event, log_schema_error, new_trace_id, traced
from schema_bridge.runtime.repair import build_repair_prompt

_FENCE_START = re.compile(r'^```(?:json)?\s*', flags=re.IGNORECASE)
_FENCE_END = re.compile(r'\s*```$')


class StructuredOutputRunner:
    """Request output matching a JSON Schema and validate it with a generated Pydantic model.

    Args:
        llm: Model adapter.
        schema: Root JSON Schema (mapping or JSON text); must be an object schema.
        name: Schema name sent to the provider and used for the model class name.
        max_retries: Number of repair attempts after the first call.
        unknown_fields: Policy for undeclared keys in the model output. Under `strict`, the schema
            sent to the provider gets `additionalProperties: false` on every object.

    Providers with a strict structured-output mode (OpenAI `strict: true`) also require every
    property to be listed in `required`; optional properties are rejected by the provider.

    Raises:
        SchemaError: If the schema cannot be converted.
    """

    def __init__(
        self,
        *,
        llm: LLMClient,
        schema: Mapping[str, Any] | str,
        name: str = 'structured_output',
        max_retries: int = 1,
        unknown_fields: UnknownFieldPolicy | str = UnknownFieldPolicy.STRICT,
    ) -> None:
        self._llm = llm
        self._name = name
        self._max_retries = max_retries

        try:
            root = convert_json_schema(schema, unknown_fields=unknown_fields)
        except SchemaError as exc:
            log_schema_error(exc, trace_id=new_trace_id(), schema_name=name)
            raise

        self._json_schema: dict[str, Any] = json.loads(schema) if isinstance(schema, str) else dict(schema)
        self._request_schema: dict[str, Any] = (
            _close_objects(self._json_schema)
            if root.unknown_fields == UnknownFieldPolicy.STRICT
            else self._json_schema
        )
        self.model: type[BaseModel] = build_model(root, name=name)

    @property
    def json_schema(self) -> dict[str, Any]:
        return self._json_schema

    @property
    def request_schema(self) -> dict[str, Any]:
        """Schema sent to the provider."""
        return self._request_schema

    async def run(
        self,
        prompt: str,
        *,
        metadata: dict[str, Any] | None = None,
        safety_identifier: str | None = None,
    ) -> BaseModel:
        """Generate, validate and (if needed) repair structured output.

        Returns:
            An instance of `self.model`.

        Raises:
            OrchestrationError: If the output is still invalid after all repair attempts.
        """
        trace_id = new_trace_id()
        meta = metadata or {}
        current_prompt = prompt
        last_error: Exception | None = None

        log_event('structured_output.start', trace_id=trace_id, schema_name=self._name)

        for attempt in range(self._max_retries + 1):
            with traced('llm.structured_output', trace_id=trace_id, attempt=attempt):
                llm_resp = await self._llm.generate(
                    LLMRequest(
                        prompt=current_prompt,
                        metadata={
                            **meta,
                            'trace_id': trace_id,
                            'schema_name': self._name,
                            'attempt': attempt,
                        },
                        safety_identifier=safety_identifier,
                        json_schema=self._request_schema,
                    )
                )

            try:
                payload = parse_json_object(llm_resp.output_text)
                result = self.model.model_validate(payload)
            except (LLMParseError, ValidationError) as exc:
                last_error = exc
                log_event(
                    'structured_output.invalid',
                    trace_id=trace_id,
                    attempt=attempt,
                    error=str(exc),
                )
                if attempt >= self._max_retries:
                    break
                current_prompt = build_repair_prompt(
                    original_prompt=prompt,
                    invalid_output_text=llm_resp.output_text,
                    error_message=str(exc),
                    json_schema=self._request_schema,
                    attempt=attempt,
                    max_retries=self._max_retries,
                )
                continue

            log_event('structured_output.ok', trace_id=trace_id, attempt=attempt)
            return result

        raise OrchestrationError(f'Structured output failed after retries: {last_error}') from last_error


def parse_json_object(text: str) -> dict[str, Any]:
    """Parse a single JSON object from model output, tolerating a ```json fence.

    Raises:
        LLMParseError: If the text is not a JSON object.
    """
    cleaned = _FENCE_START.sub('', text.strip())
    cleaned = _FENCE_END.sub('', cleaned)
    try:
        obj = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise LLMParseError(f'Model output is not valid JSON: {exc.msg}') from exc
    if not isinstance(obj, dict):
        raise LLMParseError('Model output must be a single JSON object.')
    return obj


def _close_objects(schema: Mapping[str, Any]) -> dict[str, Any]:
    """Copy `schema` with `additionalProperties: false` on every object node."""
    closed = dict(schema)
    if closed.get('type') == 'object':
        closed['additionalProperties'] = False
        closed['properties'] = {
            key: _close_objects(value) for key, value in (closed.get('properties') or {}).items()
        }
    elif closed.get('type') == 'array' and isinstance(closed.get('items'), Mapping):
        closed['items'] = _close_objects(closed['items'])
    return closed
