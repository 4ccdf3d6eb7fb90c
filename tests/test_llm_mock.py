from __future__ import annotations

import json

import pytest

from schema_bridge.llm import LLMRequest, MockLLMClient


@pytest.mark.asyncio
async def test_mock_llm_returns_json_text() -> None:
    llm = MockLLMClient(output={'title': 'Alien', 'rating': 8})
    resp = await llm.generate(LLMRequest(prompt='X', metadata={}))
    payload = json.loads(resp.output_text)
    assert payload['title'] == 'Alien'
    assert resp.raw['mock'] is True


@pytest.mark.asyncio
async def test_mock_llm_consumes_outputs_in_order() -> None:
    llm = MockLLMClient(outputs=['not json', {'ok': True}])
    first = await llm.generate(LLMRequest(prompt='1'))
    second = await llm.generate(LLMRequest(prompt='2'))
    third = await llm.generate(LLMRequest(prompt='3'))
    assert first.output_text == 'not json'
    assert json.loads(second.output_text) == {'ok': True}
    assert json.loads(third.output_text) == {'ok': True}
    assert [r.prompt for r in llm.requests] == ['1', '2', '3']
