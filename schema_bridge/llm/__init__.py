"""LLM adapters.

This package contains ONLY model inference adapters.

Rules:
- No schema validation here.
- No retries/repair logic here.

Those belong in `schema_bridge.runtime`.
"""
from .base import LLMClient, LLMRequest, LLMResponse, LLMUsage
from .mock import MockLLMClient
from .openai_responses import OpenAIResponsesConfig, OpenAIResponsesLLMClient
