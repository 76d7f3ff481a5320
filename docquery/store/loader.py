"""Import a docserver JSON database snapshot into the document store."""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete

from docquery.documents.models import Document
from docquery.exceptions import SnapshotError
from docquery.store.models import DocumentRow, DocumentShare

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

log = logging.getLogger(__name__)

# RFC 3339 timestamps may carry nanoseconds; datetime keeps microseconds.
_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp into an aware UTC datetime.

    Raises:
        ValueError: If the value is not a valid timestamp.
    """
    if not isinstance(value, str):
        raise ValueError(f"expected a string, got {type(value).__name__}")
    normalized = _FRACTION_RE.sub(r"\1", value.strip())
    if normalized.endswith(("Z", "z")):
        normalized = normalized[:-1] + "+00:00"
    parsed = datetime.fromisoformat(normalized)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _parse_document(doc_id: str, raw: Any, path: Path) -> Document:
    if not isinstance(raw, dict):
        raise SnapshotError(path, f"document '{doc_id}' must be an object")
    owner_id = raw.get("owner_id")
    if not isinstance(owner_id, str) or not owner_id:
        raise SnapshotError(path, f"document '{doc_id}' has no owner_id")
    try:
        created = parse_timestamp(raw["creation_date"])
        modified = parse_timestamp(raw.get("last_modified_date") or raw["creation_date"])
    except (KeyError, TypeError, ValueError) as e:
        raise SnapshotError(path, f"document '{doc_id}' has an invalid timestamp: {e}") from e
    return Document(
        id=raw.get("id") or doc_id,
        owner_id=owner_id,
        content=raw.get("content"),
        creation_date=created,
        last_modified_date=modified,
    )


def _parse_shares(doc_id: str, raw: Any, path: Path) -> list[str]:
    if not isinstance(raw, dict):
        raise SnapshotError(path, f"share record '{doc_id}' must be an object")
    shared_with = raw.get("shared_with") or []
    if not isinstance(shared_with, list) or not all(isinstance(p, str) for p in shared_with):
        raise SnapshotError(path, f"share record '{doc_id}' must list profile ids")
    return list(dict.fromkeys(shared_with))


def read_snapshot(path: Path) -> tuple[list[Document], dict[str, list[str]]]:
    """Read documents and share records from a docserver database file.

    Profiles in the file are ignored.

    Returns:
        Tuple of (documents, mapping of document id to shared profile ids).

    Raises:
        SnapshotError: If the file is missing, not JSON, or malformed.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise SnapshotError(path, str(e)) from e
    except json.JSONDecodeError as e:
        raise SnapshotError(path, f"not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise SnapshotError(path, "top level must be an object")

    # Go writes nil maps as null
    raw_documents = data.get("documents")
    raw_shares = data.get("share_records")
    if raw_documents is None:
        raw_documents = {}
    if raw_shares is None:
        raw_shares = {}
    if not isinstance(raw_documents, dict) or not isinstance(raw_shares, dict):
        raise SnapshotError(path, "'documents' and 'share_records' must be objects")

    documents = [_parse_document(doc_id, raw, path) for doc_id, raw in raw_documents.items()]
    shares = {doc_id: _parse_shares(doc_id, raw, path) for doc_id, raw in raw_shares.items()}
    return documents, shares


def load_snapshot(session: Session, path: Path) -> int:
    """Replace the store contents with a docserver database snapshot.

    Args:
        session: Open store session.
        path: Path to the docserver JSON database file.

    Returns:
        Number of documents imported.

    Raises:
        SnapshotError: If the snapshot cannot be read.
    """
    documents, shares = read_snapshot(path)

    session.execute(delete(DocumentShare))
    session.execute(delete(DocumentRow))

    known_ids = set()
    for doc in documents:
        session.add(DocumentRow.from_document(doc))
        known_ids.add(doc.id)

    share_count = 0
    for doc_id, profile_ids in shares.items():
        if doc_id not in known_ids:
            log.warning("Share record for unknown document %s ignored", doc_id)
            continue
        for profile_id in profile_ids:
            session.add(DocumentShare(document_id=doc_id, profile_id=profile_id))
            share_count += 1

    session.flush()
    log.info("Imported %d documents and %d shares from %s", len(documents), share_count, path)
    return len(documents)
