"""JSON Schema to Pydantic conversion plus small LLM structured-output utilities."""

from schema_bridge.errors import SchemaError, SchemaErrorReason
from schema_bridge.json_schema import convert, convert_json_schema, json_schema_to_model

__all__ = ['SchemaError', 'SchemaErrorReason', 'convert', 'convert_json_schema', 'json_schema_to_model']
