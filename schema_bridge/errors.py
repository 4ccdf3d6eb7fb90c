# ---------------------------------
# TYPED EXCEPTIONS
# ---------------------------------
from __future__ import annotations

from enum import Enum
from typing import Sequence

ARRAY_ITEM = '[]'


class SchemaErrorReason(str, Enum):
    """Reason codes carried by every SchemaError."""

    UNKNOWN_TYPE = 'unknown type'
    REQUIRED_NOT_DECLARED = 'required field not declared in properties'
    EMPTY_ENUM = 'empty enum'
    MISSING_ITEMS = 'missing items for array type'
    MISSING_PROPERTIES = 'missing properties for object type'


class SchemaError(ValueError):
    """Raised when a JSON Schema cannot be converted.

    Args:
        reason: One of SchemaErrorReason.
        path: Property names (and ARRAY_ITEM markers) leading from the root to the offending node.
        detail: Optional human-readable detail.

    Examples:
        >>> str(SchemaError(SchemaErrorReason.EMPTY_ENUM, ('status',)))
        'empty enum at status'
    """

    def __init__(
        self,
        reason: SchemaErrorReason,
        path: Sequence[str] = (),
        detail: str | None = None,
    ) -> None:
        self.reason = SchemaErrorReason(reason)
        self.path: tuple[str, ...] = tuple(path)
        self.detail = detail
        super().__init__(self._format())

    @property
    def pointer(self) -> str:
        return '.'.join(self.path) if self.path else '<root>'

    def _format(self) -> str:
        message = f'{self.reason.value} at {self.pointer}'
        if self.detail:
            message = f'{message}: {self.detail}'
        return message


class LLMParseError(Exception):
    pass


class OrchestrationError(RuntimeError):
    """Raised when orchestration fails after retries."""
    pass
