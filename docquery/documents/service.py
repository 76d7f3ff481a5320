"""Scope filtering, content filtering, sorting and pagination in one call."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from docquery.documents.models import Document, QueryDocumentsParams, QueryResult, Scope
from docquery.documents.shaping import (
    normalize_page,
    paginate_documents,
    sort_documents,
    validate_sort,
)
from docquery.exceptions import QueryError, QuerySyntaxError
from docquery.query.evaluator import evaluate_content_query
from docquery.query.parser import parse_content_query

if TYPE_CHECKING:
    from docquery.store.base import DocumentStore

log = logging.getLogger(__name__)


def in_scope(store: DocumentStore, document: Document, user_id: str, scope: Scope) -> bool:
    """Check whether a document is visible to a user under a scope."""
    is_owned = document.owner_id == user_id
    if scope is Scope.OWNED:
        return is_owned
    if is_owned and scope is Scope.ALL:
        return True

    record = store.share_record(document.id)
    return not is_owned and record is not None and user_id in record.shared_with


def query_documents(store: DocumentStore, params: QueryDocumentsParams) -> QueryResult:
    """Run a document query.

    Parses the content query once, keeps the documents in scope that match
    it, then sorts and paginates them. A document whose content makes a
    condition fail is logged and skipped; it never aborts the scan.

    Args:
        store: Source of documents and share records.
        params: Caller identity, scope, content query, sorting and paging.

    Returns:
        QueryResult with the requested page and the total match count.

    Raises:
        QuerySyntaxError: If the content query is malformed.
        QueryValidationError: If scope, sort field or order is invalid.
    """
    try:
        parsed = parse_content_query(params.content_query)
    except QuerySyntaxError as e:
        raise QuerySyntaxError(f"invalid content_query: {e.detail}") from e

    scope = Scope.parse(params.scope)
    validate_sort(params.sort_by, params.order)

    if scope is Scope.OWNED:
        candidates = store.documents_by_owner(params.auth_user_id)
    else:
        candidates = store.all_documents()

    matched: list[Document] = []
    skipped = 0
    for document in candidates:
        if not in_scope(store, document, params.auth_user_id, scope):
            continue
        try:
            if not evaluate_content_query(document, parsed):
                continue
        except QueryError as e:
            skipped += 1
            log.warning(
                "Error evaluating content query for document %s, skipping document: %s",
                document.id,
                e,
            )
            continue
        matched.append(document)

    if skipped:
        log.info("Skipped %d documents with evaluation errors", skipped)

    sort_documents(matched, params.sort_by, params.order)
    page, limit = normalize_page(params.page, params.limit)
    return QueryResult(
        documents=paginate_documents(matched, page, limit),
        total=len(matched),
        page=page,
        limit=limit,
    )
