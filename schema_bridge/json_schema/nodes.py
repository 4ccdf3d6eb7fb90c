"""JSON Schema input nodes (draft-07 subset).

Supported shapes:
- leaf types: string, number, boolean, null (optionally restricted by `enum`)
- object: `properties` plus optional `required`
- array: a single `items` schema (no tuple typing)

`parse_json_schema` turns an already-deserialized JSON mapping into these nodes.
It only checks structure; semantic checks (required names, empty enums) belong
to the converter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal, Mapping, Sequence

from schema_bridge.errors import ARRAY_ITEM, SchemaError, SchemaErrorReason

JsonSchemaType = Literal['string', 'number', 'boolean', 'null', 'object', 'array']

LEAF_TYPES: frozenset[str] = frozenset({'string', 'number', 'boolean', 'null'})


@dataclass(frozen=True)
class JsonSchemaNode:
    """Fields shared by every node.

    Attributes:
        description: Free text, carried through as metadata.
        enum: Allowed literal values, or None when unrestricted.
    """

    description: str | None = None
    enum: tuple[str, ...] | None = None

    @property
    def type(self) -> JsonSchemaType:
        raise NotImplementedError


@dataclass(frozen=True)
class StringSchema(JsonSchemaNode):
    @property
    def type(self) -> JsonSchemaType:
        return 'string'


@dataclass(frozen=True)
class NumberSchema(JsonSchemaNode):
    @property
    def type(self) -> JsonSchemaType:
        return 'number'


@dataclass(frozen=True)
class BooleanSchema(JsonSchemaNode):
    @property
    def type(self) -> JsonSchemaType:
        return 'boolean'


@dataclass(frozen=True)
class NullSchema(JsonSchemaNode):
    @property
    def type(self) -> JsonSchemaType:
        return 'null'


@dataclass(frozen=True)
class ObjectSchema(JsonSchemaNode):
    """An object node.

    `properties` may be None only for nodes built by hand; the converter rejects that.
    """

    properties: Mapping[str, JsonSchemaNode] | None = field(default=None, hash=False)
    required: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.properties is not None and not isinstance(self.properties, MappingProxyType):
            object.__setattr__(self, 'properties', MappingProxyType(dict(self.properties)))
        object.__setattr__(self, 'required', tuple(self.required))

    @property
    def type(self) -> JsonSchemaType:
        return 'object'


@dataclass(frozen=True)
class ArraySchema(JsonSchemaNode):
    items: JsonSchemaNode | None = None

    @property
    def type(self) -> JsonSchemaType:
        return 'array'


_LEAF_CLASSES: dict[str, type[JsonSchemaNode]] = {
    'string': StringSchema,
    'number': NumberSchema,
    'boolean': BooleanSchema,
    'null': NullSchema,
}


def parse_json_schema(payload: Mapping[str, Any]) -> JsonSchemaNode:
    """Parse a JSON Schema mapping into JsonSchemaNode objects.

    Args:
        payload: Parsed JSON (e.g. the result of json.loads).

    Returns:
        The root node.

    Raises:
        SchemaError: If any node is structurally malformed.
    """
    return _parse_node(payload, ())


def _parse_node(payload: Any, path: tuple[str, ...]) -> JsonSchemaNode:
    if not isinstance(payload, Mapping):
        raise SchemaError(
            SchemaErrorReason.UNKNOWN_TYPE,
            path,
            f'expected a JSON object, got {type(payload).__name__}',
        )

    node_type = payload.get('type')
    description = _parse_description(payload, path)
    enum = _parse_string_list(payload, 'enum', path, SchemaErrorReason.UNKNOWN_TYPE)

    if isinstance(node_type, str) and node_type in LEAF_TYPES:
        return _LEAF_CLASSES[node_type](description=description, enum=enum)

    if node_type in ('object', 'array') and enum is not None:
        raise SchemaError(SchemaErrorReason.UNKNOWN_TYPE, path, f'enum is not supported on {node_type} nodes')

    if node_type == 'object':
        raw_properties = payload.get('properties')
        if not isinstance(raw_properties, Mapping):
            raise SchemaError(SchemaErrorReason.MISSING_PROPERTIES, path)
        properties = MappingProxyType({
            str(key): _parse_node(value, (*path, str(key)))
            for key, value in raw_properties.items()
        })
        required = _parse_string_list(payload, 'required', path, SchemaErrorReason.REQUIRED_NOT_DECLARED) or ()
        return ObjectSchema(
            description=description,
            properties=properties,
            required=tuple(dict.fromkeys(required)),
        )

    if node_type == 'array':
        raw_items = payload.get('items')
        if raw_items is None:
            raise SchemaError(SchemaErrorReason.MISSING_ITEMS, path)
        if isinstance(raw_items, Sequence) and not isinstance(raw_items, str):
            raise SchemaError(SchemaErrorReason.MISSING_ITEMS, path, 'tuple-typed items are not supported')
        return ArraySchema(description=description, items=_parse_node(raw_items, (*path, ARRAY_ITEM)))

    raise SchemaError(SchemaErrorReason.UNKNOWN_TYPE, path, f'unsupported type {node_type!r}')


def _parse_description(payload: Mapping[str, Any], path: tuple[str, ...]) -> str | None:
    description = payload.get('description')
    if description is not None and not isinstance(description, str):
        raise SchemaError(SchemaErrorReason.UNKNOWN_TYPE, path, 'description must be a string')
    return description


def _parse_string_list(
    payload: Mapping[str, Any],
    key: str,
    path: tuple[str, ...],
    reason: SchemaErrorReason,
) -> tuple[str, ...] | None:
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise SchemaError(reason, path, f'{key} must be a list of strings')
    if not all(isinstance(item, str) for item in value):
        raise SchemaError(reason, path, f'{key} must contain only strings')
    return tuple(value)
