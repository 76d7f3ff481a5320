"""DocumentStore backed by the SQLite store."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from docquery.documents.models import Document, ShareRecord
from docquery.store.models import DocumentRow, DocumentShare

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


class SqlDocumentStore:
    """Read-only DocumentStore over an open store session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def all_documents(self) -> list[Document]:
        rows = self.session.scalars(select(DocumentRow).order_by(DocumentRow.id))
        return [row.to_document() for row in rows]

    def documents_by_owner(self, owner_id: str) -> list[Document]:
        rows = self.session.scalars(
            select(DocumentRow).where(DocumentRow.owner_id == owner_id).order_by(DocumentRow.id)
        )
        return [row.to_document() for row in rows]

    def share_record(self, document_id: str) -> ShareRecord | None:
        profile_ids = self.session.scalars(
            select(DocumentShare.profile_id)
            .where(DocumentShare.document_id == document_id)
            .order_by(DocumentShare.profile_id)
        ).all()
        if not profile_ids:
            return None
        return ShareRecord(document_id=document_id, shared_with=tuple(profile_ids))
