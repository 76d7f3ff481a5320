"""Shared pytest fixtures."""

from __future__ import annotations

import json
import shutil
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest

from docquery.documents.models import Document, ShareRecord
from docquery.store.base import InMemoryDocumentStore

if TYPE_CHECKING:
    from collections.abc import Generator

BASE_TIME = datetime(2024, 1, 1, 9, 0, 0, tzinfo=timezone.utc)

# (id, owner, content, days after BASE_TIME created, days after that modified)
DOCUMENT_ROWS: list[tuple[str, str, Any, int, int]] = [
    (
        "doc-1",
        "alice",
        {
            "type": "report",
            "title": "Quarterly Report",
            "year": 2021,
            "tags": ["urgent", "finance"],
            "meta": {"author": {"name": "Ada"}},
            "draft": False,
        },
        0,
        5,
    ),
    (
        "doc-2",
        "alice",
        {
            "type": "memo",
            "title": "Team Memo",
            "year": 1999,
            "tags": ["internal"],
            "draft": True,
            "reviewer": None,
        },
        1,
        1,
    ),
    (
        "doc-3",
        "bob",
        {"type": "report", "title": "Annual report", "year": 2020, "tags": [], "score": 7.5},
        2,
        0,
    ),
    ("doc-4", "bob", "plain text notes about the Report", 3, 0),
    ("doc-5", "carol", '{"type": "invoice", "amount": 120}', 4, 2),
    ("doc-6", "alice", {"type": "report", "year": "unknown"}, 5, 0),
]

SHARES: dict[str, list[str]] = {
    "doc-3": ["alice"],
    "doc-5": ["alice", "bob"],
}


def make_document(
    doc_id: str,
    owner_id: str = "alice",
    content: Any = None,
    created_offset: int = 0,
    modified_offset: int = 0,
) -> Document:
    """Build a Document with timestamps relative to BASE_TIME (in days)."""
    created = BASE_TIME + timedelta(days=created_offset)
    return Document(
        id=doc_id,
        owner_id=owner_id,
        content=content,
        creation_date=created,
        last_modified_date=created + timedelta(days=modified_offset),
    )


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def sample_documents() -> list[Document]:
    """Six documents owned by alice, bob and carol."""
    return [make_document(*row) for row in DOCUMENT_ROWS]


@pytest.fixture
def sample_shares() -> list[ShareRecord]:
    return [ShareRecord(document_id=d, shared_with=tuple(p)) for d, p in SHARES.items()]


@pytest.fixture
def memory_store(
    sample_documents: list[Document], sample_shares: list[ShareRecord]
) -> InMemoryDocumentStore:
    """In-memory store holding the sample documents and shares."""
    return InMemoryDocumentStore(sample_documents, sample_shares)


@pytest.fixture
def sample_snapshot(temp_dir: Path, sample_documents: list[Document]) -> Path:
    """Write the sample documents as a docserver database file."""
    data = {
        "profiles": {
            "alice": {"id": "alice", "name": "Alice"},
            "bob": {"id": "bob", "name": "Bob"},
        },
        "documents": {
            doc.id: {
                "id": doc.id,
                "owner_id": doc.owner_id,
                "content": doc.content,
                "creation_date": doc.creation_date.isoformat().replace("+00:00", "Z"),
                "last_modified_date": doc.last_modified_date.isoformat().replace("+00:00", "Z"),
            }
            for doc in sample_documents
        },
        "share_records": {
            doc_id: {"document_id": doc_id, "shared_with": profiles}
            for doc_id, profiles in SHARES.items()
        },
    }
    path = temp_dir / "database.json"
    path.write_text(json.dumps(data, indent=2))
    return path


@pytest.fixture
def sample_config(temp_dir: Path) -> Path:
    """Create a sample config file pointing at a store inside temp_dir."""
    config_path = temp_dir / "config.toml"
    config_path.write_text(f"""[store]
db_path = "{temp_dir / 'documents.db'}"

[query]
default_scope = "all"
default_sort_by = "creation_date"
default_order = "asc"
default_limit = 20

[display]
colored_output = false
""")
    return config_path
