"""Parse content query tokens into a ParsedQuery."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from importlib import resources
from typing import Any

from lark import Lark, Token, Transformer, UnexpectedInput

from docquery.exceptions import QuerySyntaxError
from docquery.query.ast_nodes import (
    INSENSITIVE_SUFFIX,
    OPERATOR_NAMES,
    LogicalOperator,
    Operator,
    ParsedQuery,
    QueryCondition,
)
from docquery.query.values import parse_value

log = logging.getLogger(__name__)

_LOGIC_WORDS: frozenset[str] = frozenset(op.value for op in LogicalOperator)
_BASE_OPERATORS: dict[str, Operator] = {op.value: op for op in Operator}


def _load_grammar() -> str:
    """Load the Lark grammar from the package resources."""
    return resources.files("docquery.query").joinpath("grammar.lark").read_text()


_expression_parser = Lark(
    _load_grammar(),
    parser="lalr",
    lexer="basic",
)


def parse_condition(condition_text: str) -> QueryCondition:
    """Parse one ``path operator value`` condition.

    The path is optional: when the first word is itself an operator name the
    condition applies to the whole document content. Everything after the
    operator is the literal, with its internal spacing preserved.

    Args:
        condition_text: The condition as written by the caller.

    Returns:
        The parsed QueryCondition.

    Raises:
        QuerySyntaxError: If the condition is malformed or the operator unknown.
    """
    text = condition_text.strip()
    parts = text.split()

    if len(parts) < 2:
        raise QuerySyntaxError(
            "invalid condition format: condition must have at least an operator "
            f"and a value (condition: '{text}')"
        )

    first = parts[0].lower()
    if first in OPERATOR_NAMES:
        path = ""
        operator_name = first
        raw_value = text.split(None, 1)[1]
    elif len(parts) >= 3:
        path = parts[0]
        operator_name = parts[1].lower()
        raw_value = text.split(None, 2)[2]
        if operator_name not in OPERATOR_NAMES and not operator_name.endswith(INSENSITIVE_SUFFIX):
            raise QuerySyntaxError(
                f"invalid condition format: invalid operator '{operator_name}' "
                f"(condition: '{text}')"
            )
    elif parts[1].lower() in OPERATOR_NAMES:
        # "path operator" with nothing after it
        raise QuerySyntaxError(
            "invalid condition format: condition must have at least an operator "
            f"and a value (condition: '{text}')"
        )
    else:
        raise QuerySyntaxError(f"invalid condition format (condition: '{text}')")

    is_insensitive = operator_name.endswith(INSENSITIVE_SUFFIX)
    if is_insensitive:
        base_name = operator_name[: -len(INSENSITIVE_SUFFIX)]
        base = _BASE_OPERATORS.get(base_name)
        if base is None or not base.supports_insensitive:
            raise QuerySyntaxError(
                f"invalid base operator for insensitive matching '{base_name}' "
                f"(condition: '{text}')"
            )
        operator = base
    else:
        operator = Operator(operator_name)

    value, value_type = parse_value(raw_value)

    return QueryCondition(
        path=path,
        operator=operator,
        is_insensitive=is_insensitive,
        value=value,
        value_type=value_type,
        original_text=condition_text,
    )


def parse_content_query(tokens: Sequence[str] | None) -> ParsedQuery | None:
    """Parse an ordered list of condition and logic tokens.

    Tokens must alternate condition, logic, condition, ... and end with a
    condition. Logic tokens are ``and`` / ``or`` in any case.

    Args:
        tokens: Raw tokens, e.g. ``['type equals "report"', 'and', 'year lessthan 2000']``.

    Returns:
        The ParsedQuery, or None when no tokens were given (no filtering).

    Raises:
        QuerySyntaxError: Naming the index of the first offending token.
    """
    if not tokens:
        return None

    conditions: list[QueryCondition] = []
    logic: list[LogicalOperator] = []
    expecting_condition = True

    for index, raw in enumerate(tokens):
        part = raw.strip()
        if not part:
            raise QuerySyntaxError(f"query part at index {index} is empty")

        if expecting_condition:
            if part.lower() in _LOGIC_WORDS:
                raise QuerySyntaxError(
                    f"invalid condition at index {index}: expected a condition, "
                    f"got logical operator '{part}'"
                )
            try:
                conditions.append(parse_condition(part))
            except QuerySyntaxError as e:
                raise QuerySyntaxError(f"invalid condition at index {index}: {e.detail}") from e
        else:
            try:
                logic.append(LogicalOperator(part.lower()))
            except ValueError:
                raise QuerySyntaxError(
                    f"invalid logical operator at index {index}: '{part}', "
                    "expected 'and' or 'or'"
                ) from None

        expecting_condition = not expecting_condition

    if expecting_condition:
        raise QuerySyntaxError(
            f"query must end with a condition, not a logical operator (index {len(tokens) - 1})"
        )

    log.debug("Parsed content query: %d conditions, logic=%s", len(conditions), logic)
    return ParsedQuery(conditions=tuple(conditions), logic=tuple(logic))


class _ExpressionTransformer(Transformer):
    """Turn the expression parse tree into the flat token list."""

    def __init__(self, text: str) -> None:
        super().__init__()
        self._text = text

    def start(self, items: list[Any]) -> list[str]:
        return [str(item) for item in items]

    def condition(self, items: list[Token]) -> str:
        # Slice the source so spacing inside the condition survives.
        return self._text[items[0].start_pos : items[-1].end_pos]

    def LOGIC(self, token: Token) -> str:
        return token.lower()


def split_query_expression(expression: str) -> list[str]:
    """Split a one-line query expression into condition and logic tokens.

    ``type equals "report" and year lessthan 2000`` becomes
    ``['type equals "report"', 'and', 'year lessthan 2000']``. Quoted strings
    are never split, so ``"rock and roll"`` stays inside its condition.

    Args:
        expression: The expression text.

    Returns:
        Token list suitable for parse_content_query (empty for a blank expression).

    Raises:
        QuerySyntaxError: If the expression cannot be tokenized.
    """
    if not expression.strip():
        return []

    try:
        tree = _expression_parser.parse(expression)
    except UnexpectedInput as e:
        raise QuerySyntaxError(
            f"cannot split query expression at column {e.column}: '{expression}'"
        ) from e

    return _ExpressionTransformer(expression).transform(tree)
