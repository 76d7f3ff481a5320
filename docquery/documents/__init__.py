"""Documents, scope filtering and result shaping."""

from docquery.documents.models import (
    Document,
    QueryDocumentsParams,
    QueryResult,
    Scope,
    ShareRecord,
)
from docquery.documents.service import query_documents
from docquery.documents.shaping import paginate_documents, sort_documents

__all__ = [
    "Document",
    "QueryDocumentsParams",
    "QueryResult",
    "Scope",
    "ShareRecord",
    "paginate_documents",
    "query_documents",
    "sort_documents",
]
