"""Documents and the parameters of a document query."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from docquery.exceptions import QueryValidationError


@dataclass(frozen=True)
class Document:
    """A stored document.

    Attributes:
        id: Document identifier.
        owner_id: Identifier of the owning profile.
        content: Payload of unknown shape: JSON text, a decoded JSON value,
            or plain text.
        creation_date: Creation timestamp (UTC).
        last_modified_date: Last modification timestamp (UTC).
    """

    id: str
    owner_id: str
    content: Any
    creation_date: datetime
    last_modified_date: datetime


@dataclass(frozen=True)
class ShareRecord:
    """Profiles a document is shared with."""

    document_id: str
    shared_with: tuple[str, ...] = ()


class Scope(Enum):
    """Which documents a caller sees before content filtering."""

    OWNED = "owned"
    SHARED = "shared"
    ALL = "all"

    @classmethod
    def parse(cls, value: str | None) -> Scope:
        """Parse a scope name (case-insensitive, empty means ``all``)."""
        if not value:
            return cls.ALL
        try:
            return cls(value.lower())
        except ValueError:
            raise QueryValidationError(
                f"invalid scope value: '{value}', expected 'owned', 'shared', or 'all'"
            ) from None


@dataclass
class QueryDocumentsParams:
    """Everything needed to run one document query."""

    auth_user_id: str
    scope: str = Scope.ALL.value
    content_query: list[str] = field(default_factory=list)
    sort_by: str = "creation_date"
    order: str = "asc"
    page: int = 1
    limit: int = 20


@dataclass
class QueryResult:
    """One page of matching documents.

    ``total`` counts all matches before pagination; ``page`` and ``limit``
    are the effective values after defaulting and clamping.
    """

    documents: list[Document]
    total: int
    page: int
    limit: int
