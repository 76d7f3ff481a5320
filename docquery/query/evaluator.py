"""Evaluate a parsed content query against one document."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from docquery.exceptions import ConditionEvaluationError, QueryError
from docquery.query.ast_nodes import LogicalOperator, ParsedQuery, QueryCondition
from docquery.query.comparator import compare_content
from docquery.query.navigator import DocumentContent, load_content

if TYPE_CHECKING:
    from docquery.documents.models import Document

log = logging.getLogger(__name__)


def evaluate_content_query(document: Document, query: ParsedQuery | None) -> bool:
    """Check whether a document matches a parsed query.

    Conditions are combined strictly left to right with no precedence:
    ``A and B or C`` is ``(A and B) or C``. Every condition is evaluated,
    so an error in any of them fails the document even when the result is
    already decided.

    Args:
        document: The document to test.
        query: Parsed query, or None for no filtering.

    Returns:
        True if the document matches (always True for an empty query).

    Raises:
        ConditionEvaluationError: If any condition fails to evaluate; the
            message names the condition text.
    """
    if query is None or query.is_empty:
        return True

    content = load_content(document.content)

    result = _evaluate_condition(content, query.conditions[0])
    for logic, cond in zip(query.logic, query.conditions[1:]):
        next_result = _evaluate_condition(content, cond)
        if logic is LogicalOperator.AND:
            result = result and next_result
        else:
            result = result or next_result

    log.debug("Document %s matched=%s", document.id, result)
    return result


def _evaluate_condition(content: DocumentContent, cond: QueryCondition) -> bool:
    try:
        return compare_content(content, cond)
    except QueryError as e:
        raise ConditionEvaluationError(cond.original_text, e) from e
