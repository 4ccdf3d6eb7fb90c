"""OpenAI Responses API LLM adapter (HTTP-based).

Talks to the REST endpoint with httpx instead of the SDK, which keeps the
adapter explicit and easy to mock with `httpx.MockTransport`.

Structured outputs are requested with
`text: { format: { type: "json_schema", name, strict: true, schema } }`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from schema_bridge.config import Settings
from schema_bridge.llm.base import LLMClient, LLMRequest, LLMResponse, LLMUsage

DEFAULT_SCHEMA_NAME = 'structured_output'


@dataclass(frozen=True)
class OpenAIResponsesConfig:
    """Configuration for the OpenAI Responses API adapter."""

    api_key: str
    base_url: str = 'https://api.openai.com/v1'
    model: str = 'gpt-4.1-mini'
    temperature: float | None = None
    timeout: float = 60.0


class OpenAIResponsesLLMClient(LLMClient):
    """LLM adapter that calls OpenAI's Responses API."""

    def __init__(self, config: OpenAIResponsesConfig, client: httpx.AsyncClient | None = None) -> None:
        self._cfg = config
        self._client = client

    @staticmethod
    def from_env(
            *,
            model: str | None = None,
            temperature: float | None = None,
            settings: Settings | None = None,
    ) -> 'OpenAIResponsesLLMClient':
        settings = settings or Settings()
        api_key = settings.openai_api_key.strip()
        if not api_key:
            raise RuntimeError('APP_OPENAI_API_KEY is required to use OpenAIResponsesLLMClient.')
        cfg = OpenAIResponsesConfig(
            api_key=api_key,
            base_url=settings.openai_base_url,
            model=model or settings.openai_model,
            temperature=temperature,
        )
        return OpenAIResponsesLLMClient(cfg)

    def build_body(self, request: LLMRequest) -> dict[str, Any]:
        body: dict[str, Any] = {
            'model': self._cfg.model,
            'input': request.prompt,
        }

        if self._cfg.temperature is not None:
            body['temperature'] = self._cfg.temperature

        if request.json_schema is not None:
            body['text'] = {
                'format': {
                    'type': 'json_schema',
                    'name': request.metadata.get('schema_name', DEFAULT_SCHEMA_NAME),
                    'schema': request.json_schema,
                    'strict': True,
                }
            }

        if request.safety_identifier:
            body['safety_identifier'] = request.safety_identifier
        return body

    async def generate(self, request: LLMRequest) -> LLMResponse:
        url = f'{self._cfg.base_url.rstrip("/")}/responses'
        headers = {
            'Authorization': f'Bearer {self._cfg.api_key}',
            'Content-Type': 'application/json',
        }
        body = self.build_body(request)

        if self._client is not None:
            return await self._post(self._client, url, body, headers)

        async with httpx.AsyncClient() as client:
            return await self._post(client, url, body, headers)

    async def _post(
        self,
        client: httpx.AsyncClient,
        url: str,
        body: dict[str, Any],
        headers: dict[str, str],
    ) -> LLMResponse:
        resp = await client.post(url, json=body, headers=headers, timeout=self._cfg.timeout)
        resp.raise_for_status()
        data = resp.json()
        return LLMResponse(
            output_text=_extract_output_text(data),
            raw=data,
            usage=_extract_usage(data),
        )


def _extract_output_text(payload: dict[str, Any]) -> str:
    """Return the first non-empty text output of a Responses API payload."""
    output = payload.get('output')
    if isinstance(output, list):
        for item in output:
            if not isinstance(item, dict):
                continue
            content = item.get('content')
            if isinstance(content, list):
                for c in content:
                    if isinstance(c, dict) and c.get('type') in ('output_text', 'text'):
                        text = c.get('text')
                        if isinstance(text, str) and text.strip():
                            return text

    # SDKs expose output_text; REST payloads may not.
    direct = payload.get('output_text')
    if isinstance(direct, str) and direct.strip():
        return direct

    raise ValueError('Unable to extract output text from Responses API payload.')


def _extract_usage(payload: dict[str, Any]) -> LLMUsage:
    usage = payload.get('usage')
    if not isinstance(usage, dict):
        return LLMUsage()

    def _int(key: str) -> int | None:
        value = usage.get(key)
        return value if isinstance(value, int) else None

    return LLMUsage(
        input_tokens=_int('input_tokens'),
        output_tokens=_int('output_tokens'),
        total_tokens=_int('total_tokens'),
    )
