"""Repair prompt builder.

Used when model output fails validation (invalid JSON, missing or extra
fields, wrong types). The repair prompt carries the validation error, the
invalid output, the expected schema and the original prompt.
"""

from __future__ import annotations

import json
from typing import Any


def build_repair_prompt(
    original_prompt: str,
    invalid_output_text: str,
    error_message: str,
    json_schema: dict[str, Any],
    attempt: int,
    max_retries: int,
) -> str:
    """Construct a repair prompt to fix invalid structured output.

    Args:
        original_prompt: The original prompt.
        invalid_output_text: The model's invalid output (raw text).
        error_message: Parse or validation error details.
        json_schema: Schema the output must satisfy.
        attempt: Zero-based index of the attempt that failed.
        max_retries: Maximum number of repair attempts.

    Returns:
        A new prompt instructing the model to return a corrected JSON object.
    """
    schema_text = json.dumps(json_schema, indent=2, ensure_ascii=False)
    return f"""
You previously produced output that does not match the required JSON schema.

ERROR:
{error_message}

INVALID OUTPUT (RAW TEXT):
{invalid_output_text}

ATTEMPTS:
This is repair attempt #{attempt + 1} of {max_retries}.

REQUIRED JSON SCHEMA:
{schema_text}

INSTRUCTIONS:
- Return ONLY ONE valid JSON object matching the schema
- Include every required field and no undeclared fields
- Use only the listed values for enum fields
- Do not include prose or code fences

ORIGINAL PROMPT:
{original_prompt}
""".strip()
