"""Classify the literal text of a condition into a typed value."""

from __future__ import annotations

import re

from docquery.query.ast_nodes import LiteralValue, ValueType

_NUMBER_RE = re.compile(r"-?[0-9]+(\.[0-9]+)?")


def parse_value(text: str) -> tuple[LiteralValue, ValueType]:
    """Convert literal text into a typed value.

    Rules are tried in order and the first match wins:

    1. ``"..."`` -- string, quotes stripped, no escape processing
    2. ``null`` -- null
    3. signed integer or decimal -- number (before booleans, so ``0``/``1``
       stay numeric)
    4. ``true`` / ``false`` -- boolean (case-sensitive)
    5. anything else -- the bare text as a string

    Never fails.

    Args:
        text: Literal text following the operator.

    Returns:
        Tuple of (value, value type).
    """
    text = text.strip()

    if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
        return text[1:-1], ValueType.STRING

    if text == "null":
        return None, ValueType.NULL

    if _NUMBER_RE.fullmatch(text):
        return float(text), ValueType.NUMBER

    if text == "true":
        return True, ValueType.TRUE
    if text == "false":
        return False, ValueType.FALSE

    return text, ValueType.STRING


def format_value(value: LiteralValue) -> str:
    """Render a literal the way a user would have typed it (for messages)."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
