"""Resolve dot paths against document content.

Document content is either a JSON value or arbitrary plain text. A ``str``
payload is parsed as JSON text; anything else is taken as an already-decoded
JSON value. Resolved values come back as a :class:`JsonValue` so the
comparator can dispatch on an explicit type tag.

Numbers outside the float range are kept: ``1e400`` decodes to ``inf`` and
an integer too long for ``int()`` is read as a signed infinity.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

log = logging.getLogger(__name__)


class JsonType(Enum):
    """JSON type of a resolved value."""

    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    NULL = "null"
    ARRAY = "array"
    OBJECT = "object"


@dataclass(frozen=True)
class JsonValue:
    """A JSON value paired with its type tag."""

    type: JsonType
    value: Any

    @classmethod
    def of(cls, value: Any) -> JsonValue:
        """Tag a decoded JSON value.

        Raises:
            TypeError: If the value is not representable as JSON.
        """
        # bool before int: bool is an int subclass
        if value is None:
            return cls(JsonType.NULL, None)
        if isinstance(value, bool):
            return cls(JsonType.BOOL, value)
        if isinstance(value, (int, float)):
            if isinstance(value, float) and math.isnan(value):
                raise TypeError("NaN is not a JSON number")
            return cls(JsonType.NUMBER, value)
        if isinstance(value, str):
            return cls(JsonType.STRING, value)
        if isinstance(value, (list, tuple)):
            return cls(JsonType.ARRAY, value)
        if isinstance(value, dict):
            return cls(JsonType.OBJECT, value)
        raise TypeError(f"{type(value).__name__} is not a JSON type")

    def items(self) -> list[JsonValue]:
        """Tagged elements of an array value."""
        return [JsonValue.of(element) for element in self.value]

    def as_float(self) -> float:
        """Numeric value as a float; integers past the float range become +/-inf."""
        try:
            return float(self.value)
        except OverflowError:
            return math.inf if self.value > 0 else -math.inf


@dataclass(frozen=True)
class DocumentContent:
    """Document content prepared for evaluation.

    Exactly one of ``root`` (JSON content) or ``text`` (plain text) is set.
    """

    root: JsonValue | None = None
    text: str | None = None

    @property
    def is_plain_text(self) -> bool:
        return self.root is None


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _parse_int(text: str) -> int | float:
    try:
        return int(text)
    except ValueError:
        # past the interpreter's int digit limit
        return float(text)


def load_content(content: Any) -> DocumentContent:
    """Classify a document payload as JSON or plain text.

    Args:
        content: The stored payload: JSON text, a decoded JSON value, or plain text.

    Returns:
        DocumentContent holding either the JSON root or the plain text.
    """
    if isinstance(content, str):
        try:
            decoded = json.loads(content, parse_int=_parse_int, parse_constant=_reject_constant)
        except (ValueError, RecursionError):
            return DocumentContent(text=content)
        return DocumentContent(root=JsonValue.of(decoded))

    try:
        return DocumentContent(root=_tag_tree(content))
    except (TypeError, ValueError, RecursionError) as e:
        log.debug("Content is not representable as JSON, treating as plain text: %s", e)
        return DocumentContent(text=str(content))


def _tag_tree(value: Any) -> JsonValue:
    """Tag a decoded value after checking the whole tree is JSON-representable."""
    _check_tree(value, ())
    return JsonValue.of(value)


def _check_tree(value: Any, parents: tuple[int, ...]) -> None:
    if isinstance(value, dict):
        if not all(isinstance(key, str) for key in value):
            raise TypeError("object keys must be strings")
        children = list(value.values())
    elif isinstance(value, (list, tuple)):
        children = list(value)
    else:
        JsonValue.of(value)
        return
    if id(value) in parents:
        raise ValueError("circular reference")
    for child in children:
        _check_tree(child, (*parents, id(value)))


def split_path(path: str) -> list[str]:
    """Split a dot path into components; ``\\.`` is a literal dot."""
    components: list[str] = []
    current: list[str] = []
    chars = iter(path)
    for ch in chars:
        if ch == "\\":
            escaped = next(chars, "")
            current.append(escaped)
        elif ch == ".":
            components.append("".join(current))
            current = []
        else:
            current.append(ch)
    components.append("".join(current))
    return components


def resolve_path(root: JsonValue, path: str) -> JsonValue | None:
    """Resolve a dot path against a JSON root.

    An empty path resolves to the root. Object components are key lookups;
    array components are non-negative decimal indices, and ``#`` yields the
    array length.

    Returns:
        The resolved value (possibly JSON null), or None when the path does
        not exist.
    """
    if path == "":
        return root

    current = root
    for component in split_path(path):
        if current.type is JsonType.OBJECT:
            if component not in current.value:
                return None
            current = JsonValue.of(current.value[component])
        elif current.type is JsonType.ARRAY:
            if component == "#":
                current = JsonValue(JsonType.NUMBER, len(current.value))
            elif component.isdecimal() and component.isascii():
                index = int(component)
                if index >= len(current.value):
                    return None
                current = JsonValue.of(current.value[index])
            else:
                return None
        else:
            return None
    return current
