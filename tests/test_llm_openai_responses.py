from __future__ import annotations

import json

import httpx
import pytest

from schema_bridge.config import Settings
from schema_bridge.llm import LLMRequest, OpenAIResponsesConfig, OpenAIResponsesLLMClient


@pytest.mark.asyncio
async def test_openai_responses_adapter_extracts_output_text() -> None:
    # Arrange: mock Responses API payload with a typical output_text item.
    fake_payload = {
        "id": "resp_test",
        "output": [
            {
                "type": "message",
                "content": [{"type": "output_text", "text": "{\"title\":\"The Matrix\"}"}],
            }
        ],
        "usage": {"input_tokens": 12, "output_tokens": 5, "total_tokens": 17},
    }
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path.endswith("/v1/responses")
        seen["body"] = json.loads(request.content)
        seen["auth"] = request.headers["Authorization"]
        return httpx.Response(200, json=fake_payload)

    schema = {
        "type": "object",
        "properties": {"title": {"type": "string"}},
        "required": ["title"],
        "additionalProperties": False,
    }
    transport = httpx.MockTransport(handler)
    async with httpx.AsyncClient(transport=transport) as client:
        cfg = OpenAIResponsesConfig(api_key="test-key", model="gpt-4.1-mini")
        llm = OpenAIResponsesLLMClient(cfg, client=client)

        # Act
        resp = await llm.generate(
            LLMRequest(prompt="PROMPT", metadata={"schema_name": "movie_review"}, json_schema=schema)
        )

    # Assert
    assert json.loads(resp.output_text) == {"title": "The Matrix"}
    assert resp.raw["id"] == "resp_test"
    assert resp.usage.total_tokens == 17
    assert seen["auth"] == "Bearer test-key"
    assert seen["body"]["input"] == "PROMPT"
    assert seen["body"]["text"]["format"] == {
        "type": "json_schema",
        "name": "movie_review",
        "schema": schema,
        "strict": True,
    }


def test_body_omits_text_format_without_schema() -> None:
    llm = OpenAIResponsesLLMClient(OpenAIResponsesConfig(api_key="k", temperature=0.7))
    body = llm.build_body(LLMRequest(prompt="hi", safety_identifier="user-1"))
    assert "text" not in body
    assert body["temperature"] == 0.7
    assert body["safety_identifier"] == "user-1"


@pytest.mark.asyncio
async def test_adapter_raises_on_http_error() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(500, json={"error": "boom"}))
    async with httpx.AsyncClient(transport=transport) as client:
        llm = OpenAIResponsesLLMClient(OpenAIResponsesConfig(api_key="k"), client=client)
        with pytest.raises(httpx.HTTPStatusError):
            await llm.generate(LLMRequest(prompt="X"))


@pytest.mark.asyncio
async def test_adapter_rejects_payload_without_text() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"output": []}))
    async with httpx.AsyncClient(transport=transport) as client:
        llm = OpenAIResponsesLLMClient(OpenAIResponsesConfig(api_key="k"), client=client)
        with pytest.raises(ValueError):
            await llm.generate(LLMRequest(prompt="X"))


def test_from_env_requires_api_key() -> None:
    with pytest.raises(RuntimeError):
        OpenAIResponsesLLMClient.from_env(settings=Settings(openai_api_key=""))


def test_from_env_uses_settings() -> None:
    llm = OpenAIResponsesLLMClient.from_env(settings=Settings(openai_api_key="sk-test", openai_model="gpt-test"))
    body = llm.build_body(LLMRequest(prompt="X"))
    assert body["model"] == "gpt-test"
