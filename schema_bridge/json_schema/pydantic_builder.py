"""Materialise validation nodes as Pydantic models.

- ObjectNode  -> a BaseModel subclass built with `create_model`
- EnumNode    -> Literal[...]
- ArrayNode   -> list[...]
- leaf nodes  -> strict scalar types (no coercion from strings)
- OptionalNode -> a field that may be absent
"""

from __future__ import annotations

import keyword
import re
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr, TypeAdapter, create_model

from schema_bridge.json_schema.validation_nodes import (
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

_EXTRA_BY_POLICY: dict[UnknownFieldPolicy, str] = {
    UnknownFieldPolicy.STRICT: 'forbid',
    UnknownFieldPolicy.STRIP: 'ignore',
    UnknownFieldPolicy.PASSTHROUGH: 'allow',
}

_SCALARS: dict[type[ValidationNode], Any] = {
    StringNode: StrictStr,
    NumberNode: Union[StrictInt, StrictFloat],
    BooleanNode: StrictBool,
    NullNode: None,
}


def build_model(node: ObjectNode, name: str = 'Root') -> type[BaseModel]:
    """Build a Pydantic model class from an ObjectNode.

    Nested objects become nested models named after their path (e.g. `Root_Address`).

    Args:
        node: Object node to materialise.
        name: Class name of the returned model.

    Returns:
        A BaseModel subclass. Validate with `model_validate`, dump with `model_dump(by_alias=True)`.
    """
    if not isinstance(node, ObjectNode):
        raise TypeError(f'build_model expects an ObjectNode, got {type(node).__name__}')

    field_definitions: dict[str, Any] = {}
    used: set[str] = set()
    for index, (key, child) in enumerate((node.fields or {}).items()):
        is_optional = isinstance(child, OptionalNode)
        inner = child.inner if is_optional else child
        annotation = _annotation(inner, f'{name}_{_pascal(key)}', describe=False)
        attr = _attribute_name(key, index, used)
        default = None if is_optional else ...
        field_definitions[attr] = (
            annotation,
            Field(default, alias=key, description=inner.description),
        )

    return create_model(
        _class_name(name),
        __config__=ConfigDict(extra=_EXTRA_BY_POLICY[node.unknown_fields]),
        __doc__=node.description,
        **field_definitions,
    )


def build_type_adapter(node: ValidationNode, name: str = 'Root') -> TypeAdapter:
    """Build a TypeAdapter validating values against any validation node."""
    if isinstance(node, OptionalNode):
        return TypeAdapter(Union[_annotation(node.inner, name), None])
    return TypeAdapter(_annotation(node, name))


def _annotation(node: ValidationNode | None, name: str, describe: bool = True) -> Any:
    if node is None:
        raise TypeError(f'missing validation node for {name}')

    if type(node) in _SCALARS:
        annotation = _SCALARS[type(node)]
    elif isinstance(node, EnumNode):
        annotation = Literal[node.values]
    elif isinstance(node, ArrayNode):
        annotation = list[_annotation(node.item, f'{name}_Item')]
    elif isinstance(node, ObjectNode):
        # Nested model carries its own docstring.
        return build_model(node, name)
    elif isinstance(node, OptionalNode):
        return Union[_annotation(node.inner, name), None]
    else:
        raise TypeError(f'unsupported validation node {type(node).__name__}')

    if describe and node.description:
        return Annotated[annotation, Field(description=node.description)]
    return annotation


def _attribute_name(key: str, index: int, used: set[str]) -> str:
    """Pick a Python attribute name for a property key; the key itself stays the alias."""
    candidate = key
    unsafe = (
        not key.isidentifier()
        or keyword.iskeyword(key)
        or key.startswith('_')
        or key.startswith('model_')
        or hasattr(BaseModel, key)
    )
    if unsafe:
        candidate = f'field_{index}'
    while candidate in used:
        candidate = f'{candidate}_'
    used.add(candidate)
    return candidate


def _pascal(key: str) -> str:
    parts = [p for p in re.split(r'[^0-9A-Za-z]+', key) if p]
    return ''.join(p[:1].upper() + p[1:] for p in parts) or 'Field'


def _class_name(name: str) -> str:
    cleaned = re.sub(r'[^0-9A-Za-z_]', '_', name)
    if not cleaned or cleaned[0].isdigit():
        cleaned = f'Model_{cleaned}'
    return cleaned
