"""Exception hierarchy for docquery."""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class DocQueryError(Exception):
    """Base exception for all docquery errors.

    All exceptions in this package inherit from this class,
    allowing callers to catch all docquery errors with
    a single except clause.
    """

    pass


# Configuration Errors
class ConfigError(DocQueryError):
    """Configuration-related errors."""

    pass


class ConfigParseError(ConfigError):
    """Configuration file has invalid syntax."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config at {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# Query Errors
class QueryErrorKind(Enum):
    """Category of a query failure, used by callers to branch without parsing messages."""

    SYNTAX = "syntax"
    PATH = "path"
    TYPE_MISMATCH = "type_mismatch"
    UNSUPPORTED = "unsupported"
    VALIDATION = "validation"


class QueryError(DocQueryError):
    """A content query could not be parsed, validated or evaluated."""

    kind: QueryErrorKind = QueryErrorKind.SYNTAX

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)


class QuerySyntaxError(QueryError):
    """Malformed condition, unknown operator or broken condition/logic alternation."""

    kind = QueryErrorKind.SYNTAX


class PathNotFoundError(QueryError):
    """A condition path does not resolve against JSON content."""

    kind = QueryErrorKind.PATH

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"path '{path}' does not exist in document content")


class TypeMismatchError(QueryError):
    """Operator or literal is incompatible with the target value's JSON type."""

    kind = QueryErrorKind.TYPE_MISMATCH


class UnsupportedOperatorError(QueryError):
    """Operator is outside the restricted set allowed for plain-text content."""

    kind = QueryErrorKind.UNSUPPORTED

    def __init__(self, operator: str) -> None:
        self.operator = operator
        super().__init__(f"content is plain text, and operator '{operator}' is not supported")


class QueryValidationError(QueryError):
    """Invalid scope, sort field or sort order."""

    kind = QueryErrorKind.VALIDATION


class ConditionEvaluationError(QueryError):
    """Evaluating one condition against a document failed.

    Keeps the kind of the underlying error so bulk scans can decide
    whether to skip the document.
    """

    def __init__(self, condition_text: str, cause: QueryError) -> None:
        self.condition_text = condition_text
        self.cause = cause
        self.kind = cause.kind
        super().__init__(f"error evaluating condition '{condition_text}': {cause}")


# Store Errors
class StoreError(DocQueryError):
    """Document store errors."""

    pass


class StoreNotFoundError(StoreError):
    """Store database file doesn't exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Document store not found: {path}")


class SnapshotError(StoreError):
    """A docserver database snapshot could not be imported."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid snapshot at {path}: {detail}")
