"""JSON Schema -> validation schema conversion.

The conversion is pure and all-or-nothing: it either returns a complete
ValidationNode tree or raises SchemaError naming the offending node's path.
"""

from __future__ import annotations

import json
from typing import Any, Mapping, cast

from schema_bridge.errors import ARRAY_ITEM, SchemaError, SchemaErrorReason
from schema_bridge.json_schema.nodes import (
    ArraySchema,
    BooleanSchema,
    JsonSchemaNode,
    NullSchema,
    NumberSchema,
    ObjectSchema,
    StringSchema,
    parse_json_schema,
)
from schema_bridge.json_schema.validation_nodes import (
    ArrayNode,
    BooleanNode,
    EnumNode,
    NullNode,
    NumberNode,
    ObjectNode,
    StringNode,
    UnknownFieldPolicy,
    ValidationNode,
    optional,
)

_LEAF_NODES: dict[type[JsonSchemaNode], type[ValidationNode]] = {
    StringSchema: StringNode,
    NumberSchema: NumberNode,
    BooleanSchema: BooleanNode,
    NullSchema: NullNode,
}


def convert(
    node: JsonSchemaNode,
    *,
    unknown_fields: UnknownFieldPolicy | str = UnknownFieldPolicy.STRICT,
) -> ValidationNode:
    """Convert a JSON Schema node tree into a validation node tree.

    Args:
        node: Root of the JSON Schema tree (any node type).
        unknown_fields: Policy applied to every object in the tree.

    Returns:
        The equivalent ValidationNode tree.

    Raises:
        SchemaError: If any node violates the supported schema shape.
    """
    return _convert(node, (), UnknownFieldPolicy(unknown_fields))


def convert_json_schema(
    schema: Mapping[str, Any] | str,
    *,
    unknown_fields: UnknownFieldPolicy | str = UnknownFieldPolicy.STRICT,
) -> ObjectNode:
    """Convert a root JSON Schema document (mapping or JSON text).

    The root must be an object schema.

    Raises:
        SchemaError: If the text is not JSON, the root is not an object, or conversion fails.
    """
    if isinstance(schema, str):
        try:
            schema = json.loads(schema)
        except json.JSONDecodeError as exc:
            raise SchemaError(SchemaErrorReason.UNKNOWN_TYPE, (), f'invalid JSON: {exc.msg}') from exc

    if not isinstance(schema, Mapping):
        raise SchemaError(SchemaErrorReason.UNKNOWN_TYPE, (), 'root schema must be a JSON object')
    if schema.get('type') != 'object':
        raise SchemaError(SchemaErrorReason.UNKNOWN_TYPE, (), 'top level schema must be an object type')

    # The root type check above guarantees an object node.
    return cast(ObjectNode, convert(parse_json_schema(schema), unknown_fields=unknown_fields))


def _convert(node: JsonSchemaNode, path: tuple[str, ...], policy: UnknownFieldPolicy) -> ValidationNode:
    leaf_cls = _LEAF_NODES.get(type(node))
    if leaf_cls is not None:
        if node.enum is not None:
            if not node.enum:
                raise SchemaError(SchemaErrorReason.EMPTY_ENUM, path)
            # Enum is more specific than the base type.
            return EnumNode(description=node.description, values=tuple(node.enum))
        return leaf_cls(description=node.description)

    if isinstance(node, ObjectSchema):
        return _convert_object(node, path, policy)

    if isinstance(node, ArraySchema):
        if node.items is None:
            raise SchemaError(SchemaErrorReason.MISSING_ITEMS, path)
        item = _convert(node.items, (*path, ARRAY_ITEM), policy)
        return ArrayNode(description=node.description, item=item)

    raise SchemaError(SchemaErrorReason.UNKNOWN_TYPE, path, f'unsupported node {type(node).__name__}')


def _convert_object(node: ObjectSchema, path: tuple[str, ...], policy: UnknownFieldPolicy) -> ObjectNode:
    if node.properties is None:
        raise SchemaError(SchemaErrorReason.MISSING_PROPERTIES, path)

    for name in node.required:
        if name not in node.properties:
            raise SchemaError(SchemaErrorReason.REQUIRED_NOT_DECLARED, (*path, name))

    required = set(node.required)
    fields: dict[str, ValidationNode] = {}
    for name, prop in node.properties.items():
        converted = _convert(prop, (*path, name), policy)
        fields[name] = converted if name in required else optional(converted)

    return ObjectNode(description=node.description, fields=fields, unknown_fields=policy)
