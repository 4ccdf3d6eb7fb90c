from __future__ import annotations

import pytest

from schema_bridge.errors import ARRAY_ITEM, SchemaError, SchemaErrorReason
from schema_bridge.json_schema import ArraySchema, NumberSchema, ObjectSchema, StringSchema, parse_json_schema


def test_parse_object_schema() -> None:
    # Arrange
    payload = {
        'type': 'object',
        'properties': {
            'name': {'type': 'string', 'description': 'Name'},
            'scores': {'type': 'array', 'items': {'type': 'number'}},
        },
        'required': ['name', 'name'],
        'additionalProperties': False,
    }

    # Act
    node = parse_json_schema(payload)

    # Assert
    assert isinstance(node, ObjectSchema)
    assert node.type == 'object'
    assert node.required == ('name',)
    assert node.properties['name'] == StringSchema(description='Name')
    assert isinstance(node.properties['scores'], ArraySchema)
    assert node.properties['scores'].items == NumberSchema()


@pytest.mark.parametrize(
    ('payload', 'reason', 'path'),
    [
        ({'type': 'integer'}, SchemaErrorReason.UNKNOWN_TYPE, ()),
        ({'properties': {}}, SchemaErrorReason.UNKNOWN_TYPE, ()),
        ({'type': 'object'}, SchemaErrorReason.MISSING_PROPERTIES, ()),
        ({'type': 'array'}, SchemaErrorReason.MISSING_ITEMS, ()),
        (
            {'type': 'array', 'items': [{'type': 'string'}]},
            SchemaErrorReason.MISSING_ITEMS,
            (),
        ),
        (
            {'type': 'object', 'properties': {'a': {'type': 'array', 'items': {'type': 'date'}}}},
            SchemaErrorReason.UNKNOWN_TYPE,
            ('a', ARRAY_ITEM),
        ),
        ({'type': 'string', 'enum': [1, 2]}, SchemaErrorReason.UNKNOWN_TYPE, ()),
        ({'type': 'string', 'enum': 'a'}, SchemaErrorReason.UNKNOWN_TYPE, ()),
        ({'type': 'string', 'description': 3}, SchemaErrorReason.UNKNOWN_TYPE, ()),
        (
            {'type': 'object', 'properties': {}, 'enum': ['a']},
            SchemaErrorReason.UNKNOWN_TYPE,
            (),
        ),
        (
            {'type': 'object', 'properties': {'p': 'string'}},
            SchemaErrorReason.UNKNOWN_TYPE,
            ('p',),
        ),
        (
            {'type': 'object', 'properties': {'a': {'type': 'string'}}, 'required': 'a'},
            SchemaErrorReason.REQUIRED_NOT_DECLARED,
            (),
        ),
    ],
)
def test_parse_rejects_malformed_nodes(payload: dict, reason: SchemaErrorReason, path: tuple) -> None:
    with pytest.raises(SchemaError) as exc_info:
        parse_json_schema(payload)

    assert exc_info.value.reason == reason
    assert exc_info.value.path == path


def test_every_error_reason_belongs_to_the_fixed_set() -> None:
    assert {reason.value for reason in SchemaErrorReason} == {
        'unknown type',
        'required field not declared in properties',
        'empty enum',
        'missing items for array type',
        'missing properties for object type',
    }


def test_parsed_object_properties_are_read_only() -> None:
    # Arrange
    node = parse_json_schema({'type': 'object', 'properties': {'a': {'type': 'string'}}})

    # Act / Assert
    with pytest.raises(TypeError):
        node.properties['b'] = StringSchema()
    assert list(node.properties) == ['a']
    assert hash(node) == hash(parse_json_schema({'type': 'object', 'properties': {'a': {'type': 'string'}}}))


def test_empty_enum_is_kept_for_the_converter() -> None:
    node = parse_json_schema({'type': 'string', 'enum': []})
    assert node.enum == ()
