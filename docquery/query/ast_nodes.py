"""Data classes for parsed content queries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

INSENSITIVE_SUFFIX = "-insensitive"


class Operator(Enum):
    """Base comparison operators, without the ``-insensitive`` suffix."""

    EQUALS = "equals"
    NOT_EQUALS = "notequals"
    GREATER_THAN = "greaterthan"
    LESS_THAN = "lessthan"
    GREATER_THAN_OR_EQUALS = "greaterthanorequals"
    LESS_THAN_OR_EQUALS = "lessthanorequals"
    CONTAINS = "contains"
    STARTS_WITH = "startswith"
    ENDS_WITH = "endswith"

    @property
    def supports_insensitive(self) -> bool:
        return self in STRING_OPERATORS

    def display(self, insensitive: bool = False) -> str:
        """Operator name as written in a query."""
        return self.value + INSENSITIVE_SUFFIX if insensitive else self.value


# Operators that make sense on strings; also the only ones allowed on plain text.
STRING_OPERATORS: frozenset[Operator] = frozenset(
    {
        Operator.EQUALS,
        Operator.NOT_EQUALS,
        Operator.CONTAINS,
        Operator.STARTS_WITH,
        Operator.ENDS_WITH,
    }
)

NUMERIC_OPERATORS: frozenset[Operator] = frozenset(
    {
        Operator.EQUALS,
        Operator.NOT_EQUALS,
        Operator.GREATER_THAN,
        Operator.LESS_THAN,
        Operator.GREATER_THAN_OR_EQUALS,
        Operator.LESS_THAN_OR_EQUALS,
    }
)

BOOLEAN_OPERATORS: frozenset[Operator] = frozenset({Operator.EQUALS, Operator.NOT_EQUALS})

# Every spelling accepted at the operator position, lower-cased.
OPERATOR_NAMES: frozenset[str] = frozenset(
    [op.value for op in Operator]
    + [op.value + INSENSITIVE_SUFFIX for op in Operator if op.supports_insensitive]
)


class LogicalOperator(Enum):
    """Joins two adjacent conditions."""

    AND = "and"
    OR = "or"


class ValueType(Enum):
    """Type tag of a parsed literal, mirroring JSON's type categories."""

    STRING = "String"
    NUMBER = "Number"
    TRUE = "True"
    FALSE = "False"
    NULL = "Null"
    JSON = "JSON"

    @property
    def is_bool(self) -> bool:
        return self in (ValueType.TRUE, ValueType.FALSE)


LiteralValue = Union[str, float, bool, None]


@dataclass(frozen=True)
class QueryCondition:
    """A single ``path operator value`` predicate.

    ``path`` is empty when the condition targets the whole document content.
    ``original_text`` is the condition as the caller wrote it and is used in
    error messages.
    """

    path: str
    operator: Operator
    is_insensitive: bool
    value: LiteralValue
    value_type: ValueType
    original_text: str

    @property
    def operator_display(self) -> str:
        return self.operator.display(self.is_insensitive)


@dataclass(frozen=True)
class ParsedQuery:
    """Conditions joined left to right by logic operators.

    ``logic[i]`` joins ``conditions[i]`` and ``conditions[i + 1]``.
    """

    conditions: tuple[QueryCondition, ...] = ()
    logic: tuple[LogicalOperator, ...] = ()

    def __post_init__(self) -> None:
        expected = max(len(self.conditions) - 1, 0)
        if len(self.logic) != expected:
            raise ValueError(
                f"{len(self.conditions)} conditions need {expected} "
                f"logic operators, got {len(self.logic)}"
            )

    @property
    def is_empty(self) -> bool:
        return not self.conditions
