"""Document store interface and an in-memory implementation."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from docquery.documents.models import Document, ShareRecord


class DocumentStore(Protocol):
    """Read access to documents and their share records."""

    def all_documents(self) -> list[Document]:
        """Snapshot of every stored document."""
        ...

    def documents_by_owner(self, owner_id: str) -> list[Document]:
        """Snapshot of the documents owned by one profile."""
        ...

    def share_record(self, document_id: str) -> ShareRecord | None:
        """Share record for a document, or None if it is not shared."""
        ...


class InMemoryDocumentStore:
    """DocumentStore over plain Python collections."""

    def __init__(
        self,
        documents: Iterable[Document] = (),
        share_records: Iterable[ShareRecord] = (),
    ) -> None:
        self._documents: dict[str, Document] = {doc.id: doc for doc in documents}
        self._shares: dict[str, ShareRecord] = {rec.document_id: rec for rec in share_records}

    def all_documents(self) -> list[Document]:
        return list(self._documents.values())

    def documents_by_owner(self, owner_id: str) -> list[Document]:
        return [doc for doc in self._documents.values() if doc.owner_id == owner_id]

    def share_record(self, document_id: str) -> ShareRecord | None:
        return self._shares.get(document_id)
