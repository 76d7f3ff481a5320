"""SQLAlchemy ORM models for the document store."""

from __future__ import annotations

import json
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from docquery.documents.models import Document


class StoreBase(DeclarativeBase):
    """Base class for store ORM models."""

    pass


def _as_utc(value: datetime) -> datetime:
    """SQLite drops tzinfo; stored timestamps are always UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class DocumentRow(StoreBase):
    """A stored document. Content is kept as JSON text."""

    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    creation_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    last_modified_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("ix_documents_owner_id", "owner_id"),
        Index("ix_documents_creation_date", "creation_date"),
    )

    @classmethod
    def from_document(cls, doc: Document) -> DocumentRow:
        return cls(
            id=doc.id,
            owner_id=doc.owner_id,
            content=json.dumps(doc.content),
            creation_date=_as_utc(doc.creation_date),
            last_modified_date=_as_utc(doc.last_modified_date),
        )

    def to_document(self) -> Document:
        return Document(
            id=self.id,
            owner_id=self.owner_id,
            content=json.loads(self.content),
            creation_date=_as_utc(self.creation_date),
            last_modified_date=_as_utc(self.last_modified_date),
        )

    def __repr__(self) -> str:
        return f"<DocumentRow(id='{self.id}', owner='{self.owner_id}')>"


class DocumentShare(StoreBase):
    """One profile a document is shared with."""

    __tablename__ = "document_shares"

    document_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    profile_id: Mapped[str] = mapped_column(String(64), primary_key=True)

    __table_args__ = (Index("ix_document_shares_profile_id", "profile_id"),)

    def __repr__(self) -> str:
        return f"<DocumentShare(document='{self.document_id}', profile='{self.profile_id}')>"
