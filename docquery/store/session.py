"""Document store database session management."""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from docquery.exceptions import StoreNotFoundError
from docquery.store.models import StoreBase

log = logging.getLogger(__name__)


def get_store_engine(db_path: Path) -> Engine:
    """Create SQLAlchemy engine for the store database.

    Args:
        db_path: Path to the SQLite file.

    Returns:
        SQLAlchemy engine for the store database.
    """
    return create_engine(
        f"sqlite:///{db_path}",
        connect_args={
            "timeout": 30,
            "check_same_thread": False,
        },
    )


@contextmanager
def get_store_session(db_path: Path, *, create: bool = False) -> Generator[Session, None, None]:
    """Open a session on the document store.

    Commits on normal exit and rolls back if the block raises.

    Args:
        db_path: Path to the SQLite file.
        create: Create the file and tables if missing. Without it a missing
            store is an error.

    Yields:
        SQLAlchemy Session for the store database.

    Raises:
        StoreNotFoundError: If the store does not exist and ``create`` is False.
    """
    db_path = db_path.expanduser()
    if not db_path.exists():
        if not create:
            raise StoreNotFoundError(db_path)
        db_path.parent.mkdir(parents=True, exist_ok=True)
        log.info("Creating document store: %s", db_path)

    engine = get_store_engine(db_path)
    StoreBase.metadata.create_all(engine)

    # Enable WAL mode for better concurrent access
    with engine.connect() as conn:
        conn.execute(text("PRAGMA journal_mode=WAL"))
        conn.commit()

    session = sessionmaker(bind=engine)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
        engine.dispose()
