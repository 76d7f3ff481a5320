"""Document store: the collaborator the query engine reads documents from."""

from docquery.store.base import DocumentStore, InMemoryDocumentStore
from docquery.store.loader import load_snapshot, read_snapshot
from docquery.store.models import DocumentRow, DocumentShare, StoreBase
from docquery.store.repository import SqlDocumentStore
from docquery.store.session import get_store_session

__all__ = [
    "DocumentRow",
    "DocumentShare",
    "DocumentStore",
    "InMemoryDocumentStore",
    "SqlDocumentStore",
    "StoreBase",
    "get_store_session",
    "load_snapshot",
    "read_snapshot",
]
