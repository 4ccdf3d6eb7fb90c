"""JSON Schema -> validation schema conversion.

Pipeline:
    raw JSON Schema (dict or text)
      -> JsonSchemaNode tree       (nodes.parse_json_schema)
      -> ValidationNode tree       (converter.convert)
      -> Pydantic model / adapter  (pydantic_builder.build_model)
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel

from .converter import convert, convert_json_schema
from .nodes import (
    ArraySchema,
    BooleanSchema,
    JsonSchemaNode,
    NullSchema,
    NumberSchema,
    ObjectSchema,
    StringSchema,
    parse_json_schema,
)
from .pydantic_builder import build_model, build_type_adapter
from .validation_nodes import (
    ArrayNode,
    BooleanNode,
    EnumNode,
    NullNode,
    NumberNode,
    ObjectNode,
    OptionalNode,
    StringNode,
    UnknownFieldPolicy,
    ValidationNode,
)


def json_schema_to_model(
    schema: Mapping[str, Any] | str,
    *,
    name: str = 'Root',
    unknown_fields: UnknownFieldPolicy | str = UnknownFieldPolicy.STRICT,
) -> type[BaseModel]:
    """Convert a root JSON Schema straight into a Pydantic model class.

    Raises:
        SchemaError: If the schema cannot be converted.
    """
    return build_model(convert_json_schema(schema, unknown_fields=unknown_fields), name=name)


__all__ = [
    'ArrayNode',
    'ArraySchema',
    'BooleanNode',
    'BooleanSchema',
    'EnumNode',
    'JsonSchemaNode',
    'NullNode',
    'NullSchema',
    'NumberNode',
    'NumberSchema',
    'ObjectNode',
    'ObjectSchema',
    'OptionalNode',
    'StringNode',
    'StringSchema',
    'UnknownFieldPolicy',
    'ValidationNode',
    'build_model',
    'build_type_adapter',
    'convert',
    'convert_json_schema',
    'json_schema_to_model',
    'parse_json_schema',
]
