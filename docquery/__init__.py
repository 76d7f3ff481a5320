"""docquery: filter, sort and page JSON documents with a small content query language."""

from docquery.documents import (
    Document,
    QueryDocumentsParams,
    QueryResult,
    Scope,
    ShareRecord,
    paginate_documents,
    query_documents,
    sort_documents,
)
from docquery.query import (
    evaluate_content_query,
    parse_condition,
    parse_content_query,
    parse_value,
    split_query_expression,
)

__version__ = "0.1.0"

__all__ = [
    "Document",
    "QueryDocumentsParams",
    "QueryResult",
    "Scope",
    "ShareRecord",
    "__version__",
    "evaluate_content_query",
    "paginate_documents",
    "parse_condition",
    "parse_content_query",
    "parse_value",
    "query_documents",
    "sort_documents",
    "split_query_expression",
]
