"""Content query parsing and evaluation."""

from docquery.query.ast_nodes import (
    LogicalOperator,
    Operator,
    ParsedQuery,
    QueryCondition,
    ValueType,
)
from docquery.query.evaluator import evaluate_content_query
from docquery.query.navigator import JsonType, JsonValue, load_content, resolve_path
from docquery.query.parser import parse_condition, parse_content_query, split_query_expression
from docquery.query.values import parse_value

__all__ = [
    "JsonType",
    "JsonValue",
    "LogicalOperator",
    "Operator",
    "ParsedQuery",
    "QueryCondition",
    "ValueType",
    "evaluate_content_query",
    "load_content",
    "parse_condition",
    "parse_content_query",
    "parse_value",
    "resolve_path",
    "split_query_expression",
]
