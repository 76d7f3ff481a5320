"""Apply one condition to a resolved value.

Dispatch is on the JSON type of the target value, then on the operator.
A literal of the wrong type never matches: ``notequals`` against it is
true, every other operator raises ``TypeMismatchError`` (null literals and
array membership have their own rules).
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from docquery.exceptions import PathNotFoundError, TypeMismatchError, UnsupportedOperatorError
from docquery.query.ast_nodes import (
    BOOLEAN_OPERATORS,
    NUMERIC_OPERATORS,
    STRING_OPERATORS,
    Operator,
    QueryCondition,
    ValueType,
)
from docquery.query.navigator import DocumentContent, JsonType, JsonValue, resolve_path
from docquery.query.values import format_value

log = logging.getLogger(__name__)

_STRING_TESTS: dict[Operator, Callable[[str, str], bool]] = {
    Operator.EQUALS: lambda target, value: target == value,
    Operator.NOT_EQUALS: lambda target, value: target != value,
    Operator.CONTAINS: lambda target, value: value in target,
    Operator.STARTS_WITH: lambda target, value: target.startswith(value),
    Operator.ENDS_WITH: lambda target, value: target.endswith(value),
}

_NUMBER_TESTS: dict[Operator, Callable[[float, float], bool]] = {
    Operator.EQUALS: lambda target, value: target == value,
    Operator.NOT_EQUALS: lambda target, value: target != value,
    Operator.GREATER_THAN: lambda target, value: target > value,
    Operator.LESS_THAN: lambda target, value: target < value,
    Operator.GREATER_THAN_OR_EQUALS: lambda target, value: target >= value,
    Operator.LESS_THAN_OR_EQUALS: lambda target, value: target <= value,
}


def compare_content(content: DocumentContent, cond: QueryCondition) -> bool:
    """Evaluate a condition against prepared document content.

    Args:
        content: Content from ``load_content``.
        cond: The parsed condition.

    Returns:
        True if the content satisfies the condition.

    Raises:
        UnsupportedOperatorError: Operator not allowed on plain text.
        PathNotFoundError: Path does not resolve against JSON content.
        TypeMismatchError: Operator or literal incompatible with the target.
    """
    if content.root is None:
        return compare_plain_text(content.text or "", cond)

    target = resolve_path(content.root, cond.path)
    if target is None:
        raise PathNotFoundError(cond.path)

    return compare_value(target, cond)


def compare_plain_text(text: str, cond: QueryCondition) -> bool:
    """Compare the whole plain-text content as one string."""
    if cond.operator not in STRING_OPERATORS:
        raise UnsupportedOperatorError(cond.operator_display)
    return _compare_strings(text, cond, target_description="plain text")


def compare_value(target: JsonValue, cond: QueryCondition) -> bool:
    """Evaluate a condition against a resolved JSON value."""
    op = cond.operator

    # A scalar at the root behaves like plain text.
    if (
        cond.path == ""
        and target.type in (JsonType.STRING, JsonType.NUMBER, JsonType.BOOL)
        and op not in STRING_OPERATORS
    ):
        raise UnsupportedOperatorError(cond.operator_display)

    if target.type is JsonType.ARRAY and op is Operator.CONTAINS:
        return _array_contains(target, cond)

    if target.type is JsonType.NULL or cond.value_type is ValueType.NULL:
        return _compare_with_null(target, cond)

    handler = _TYPE_HANDLERS[target.type]
    result = handler(target, cond)
    log.debug("%s -> %s", cond.original_text, result)
    return result


def _compare_strings(target: str, cond: QueryCondition, target_description: str) -> bool:
    if cond.value_type is not ValueType.STRING:
        if cond.operator is Operator.NOT_EQUALS:
            return True
        raise TypeMismatchError(
            f"type mismatch: cannot compare {target_description} with "
            f"{cond.value_type.value} using operator '{cond.operator_display}'"
        )

    value = str(cond.value)
    if cond.is_insensitive:
        target = target.lower()
        value = value.lower()
    return _STRING_TESTS[cond.operator](target, value)


def _compare_string(target: JsonValue, cond: QueryCondition) -> bool:
    if cond.operator not in STRING_OPERATORS:
        raise TypeMismatchError(
            f"type mismatch: cannot apply numeric operator '{cond.operator_display}' "
            "to string value"
        )
    return _compare_strings(target.value, cond, target_description="string")


def _compare_number(target: JsonValue, cond: QueryCondition) -> bool:
    if cond.operator not in NUMERIC_OPERATORS:
        raise TypeMismatchError(
            f"type mismatch: cannot apply string operator '{cond.operator_display}' "
            "to numeric value"
        )
    if cond.is_insensitive:
        raise TypeMismatchError(
            f"operator '{cond.operator_display}' cannot be case-insensitive for numeric comparison"
        )
    if cond.value_type is not ValueType.NUMBER:
        if cond.operator is Operator.NOT_EQUALS:
            return True
        raise TypeMismatchError(
            f"type mismatch: value '{format_value(cond.value)}' is not a valid number "
            f"for comparison with operator '{cond.operator_display}'"
        )
    literal = float(cond.value)  # type: ignore[arg-type]
    return _NUMBER_TESTS[cond.operator](target.as_float(), literal)


def _compare_bool(target: JsonValue, cond: QueryCondition) -> bool:
    if cond.operator not in BOOLEAN_OPERATORS:
        raise TypeMismatchError(
            f"operator '{cond.operator_display}' is invalid for boolean comparison"
        )
    if cond.is_insensitive:
        raise TypeMismatchError(
            f"operator '{cond.operator_display}' cannot be case-insensitive for boolean comparison"
        )
    if not cond.value_type.is_bool:
        if cond.operator is Operator.NOT_EQUALS:
            return True
        raise TypeMismatchError(
            f"type mismatch: value '{format_value(cond.value)}' is not a valid boolean "
            f"for comparison with operator '{cond.operator_display}'"
        )
    equal = target.value is cond.value
    return equal if cond.operator is Operator.EQUALS else not equal


def _compare_array(target: JsonValue, cond: QueryCondition) -> bool:
    # contains is handled before dispatch
    if cond.operator in (Operator.EQUALS, Operator.NOT_EQUALS):
        raise TypeMismatchError(
            f"operator '{cond.operator_display}' cannot directly compare arrays/objects"
        )
    raise TypeMismatchError(f"operator '{cond.operator_display}' is invalid for array comparison")


def _compare_object(target: JsonValue, cond: QueryCondition) -> bool:
    if cond.path == "" and cond.operator in (Operator.EQUALS, Operator.NOT_EQUALS):
        return False
    raise TypeMismatchError(
        f"operator '{cond.operator_display}' cannot directly compare JSON objects"
    )


_TYPE_HANDLERS: dict[JsonType, Callable[[JsonValue, QueryCondition], bool]] = {
    JsonType.STRING: _compare_string,
    JsonType.NUMBER: _compare_number,
    JsonType.BOOL: _compare_bool,
    JsonType.ARRAY: _compare_array,
    JsonType.OBJECT: _compare_object,
}


def _compare_with_null(target: JsonValue, cond: QueryCondition) -> bool:
    """Null target or null literal (array membership excluded)."""
    op = cond.operator
    both_null = target.type is JsonType.NULL and cond.value_type is ValueType.NULL

    if both_null:
        if op is Operator.EQUALS:
            return True
        if op is Operator.NOT_EQUALS:
            return False
        raise TypeMismatchError(f"operator '{cond.operator_display}' invalid for null comparison")

    if op is Operator.EQUALS or op is Operator.CONTAINS:
        return False
    if op is Operator.NOT_EQUALS:
        return True
    raise TypeMismatchError(
        f"operator '{cond.operator_display}' invalid for comparing null with non-null value"
    )


def _array_contains(target: JsonValue, cond: QueryCondition) -> bool:
    """Membership test: an element matches only with the same JSON type and value."""
    for element in target.items():
        if _element_matches(element, cond):
            return True
    return False


def _element_matches(element: JsonValue, cond: QueryCondition) -> bool:
    if element.type is JsonType.STRING:
        if cond.value_type is not ValueType.STRING:
            return False
        if cond.is_insensitive:
            return element.value.lower() == str(cond.value).lower()
        return element.value == cond.value
    if element.type is JsonType.NUMBER:
        return cond.value_type is ValueType.NUMBER and element.as_float() == cond.value
    if element.type is JsonType.BOOL:
        return cond.value_type.is_bool and element.value is cond.value
    if element.type is JsonType.NULL:
        return cond.value_type is ValueType.NULL
    # nested arrays and objects never match a scalar literal
    return False
