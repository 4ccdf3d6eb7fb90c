"""Validation schema nodes produced by the converter.

Each node describes what a runtime validator must accept. The tree is
materialised into Pydantic types by `pydantic_builder`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class UnknownFieldPolicy(str, Enum):
    """What an object validator does with keys it does not declare."""

    STRICT = 'strict'
    STRIP = 'strip'
    PASSTHROUGH = 'passthrough'


@dataclass(frozen=True)
class ValidationNode:
    description: str | None = None

    kind = 'node'

    def describe(self) -> dict[str, Any]:
        """Return a plain-data structural description of this subtree."""
        out: dict[str, Any] = {'kind': self.kind}
        if self.description is not None:
            out['description'] = self.description
        return out


@dataclass(frozen=True)
class StringNode(ValidationNode):
    kind = 'string'


@dataclass(frozen=True)
class NumberNode(ValidationNode):
    kind = 'number'


@dataclass(frozen=True)
class BooleanNode(ValidationNode):
    kind = 'boolean'


@dataclass(frozen=True)
class NullNode(ValidationNode):
    kind = 'null'


@dataclass(frozen=True)
class EnumNode(ValidationNode):
    values: tuple[str, ...] = ()

    kind = 'enum'

    def describe(self) -> dict[str, Any]:
        return {**super().describe(), 'values': list(self.values)}


@dataclass(frozen=True)
class ArrayNode(ValidationNode):
    item: ValidationNode | None = None

    kind = 'array'

    def describe(self) -> dict[str, Any]:
        return {**super().describe(), 'item': self.item.describe() if self.item else None}


@dataclass(frozen=True)
class ObjectNode(ValidationNode):
    """Object validator.

    Attributes:
        fields: Field name -> node, in declaration order. Optional fields are OptionalNode.
        unknown_fields: Policy for undeclared keys.
    """

    fields: Mapping[str, ValidationNode] | None = field(default=None, hash=False)
    unknown_fields: UnknownFieldPolicy = UnknownFieldPolicy.STRICT

    kind = 'object'

    def __post_init__(self) -> None:
        if self.fields is not None and not isinstance(self.fields, MappingProxyType):
            object.__setattr__(self, 'fields', MappingProxyType(dict(self.fields)))

    def describe(self) -> dict[str, Any]:
        return {
            **super().describe(),
            'unknown_fields': self.unknown_fields.value,
            'fields': {name: node.describe() for name, node in (self.fields or {}).items()},
        }


@dataclass(frozen=True)
class OptionalNode(ValidationNode):
    """Marks a field as allowed to be absent. Wraps any other node exactly once."""

    inner: ValidationNode | None = None

    kind = 'optional'

    def describe(self) -> dict[str, Any]:
        return {'kind': self.kind, 'inner': self.inner.describe() if self.inner else None}


def optional(node: ValidationNode) -> ValidationNode:
    """Wrap `node` in OptionalNode unless it already is one."""
    if isinstance(node, OptionalNode):
        return node
    return OptionalNode(inner=node)
