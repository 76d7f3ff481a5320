"""Sort and paginate matched documents."""

from __future__ import annotations

from operator import attrgetter
from typing import TYPE_CHECKING

from docquery.exceptions import QueryValidationError

if TYPE_CHECKING:
    from docquery.documents.models import Document

DEFAULT_LIMIT = 20
MAX_LIMIT = 100

SORT_FIELDS: tuple[str, ...] = ("creation_date", "last_modified_date")
SORT_ORDERS: tuple[str, ...] = ("asc", "desc")


def validate_sort(sort_by: str | None, order: str | None) -> tuple[str, str]:
    """Normalize sort field and direction.

    Empty values fall back to ``creation_date`` / ``asc``.

    Returns:
        Tuple of (field, order), lower-cased.

    Raises:
        QueryValidationError: If either value is not recognized.
    """
    order_name = (order or "asc").lower()
    if order_name not in SORT_ORDERS:
        raise QueryValidationError(f"invalid order value: '{order}', expected 'asc' or 'desc'")

    field_name = (sort_by or "creation_date").lower()
    if field_name not in SORT_FIELDS:
        raise QueryValidationError(
            f"invalid sort_by value: '{sort_by}', expected 'creation_date' or 'last_modified_date'"
        )
    return field_name, order_name


def sort_documents(documents: list[Document], sort_by: str | None, order: str | None) -> None:
    """Stable in-place sort by a timestamp field.

    Documents with equal timestamps keep their relative order in both
    directions.

    Raises:
        QueryValidationError: If ``sort_by`` or ``order`` is invalid.
    """
    field_name, order_name = validate_sort(sort_by, order)
    documents.sort(key=attrgetter(field_name), reverse=order_name == "desc")


def normalize_page(page: int, limit: int) -> tuple[int, int]:
    """Apply pagination defaults: page >= 1, limit in 1..MAX_LIMIT."""
    if page <= 0:
        page = 1
    if limit <= 0:
        limit = DEFAULT_LIMIT
    if limit > MAX_LIMIT:
        limit = MAX_LIMIT
    return page, limit


def paginate_documents(documents: list[Document], page: int, limit: int) -> list[Document]:
    """Return one page of documents. Never fails; out-of-range pages are empty."""
    page, limit = normalize_page(page, limit)
    start = (page - 1) * limit
    if start >= len(documents):
        return []
    end = min(start + limit, len(documents))
    return documents[start:end]
