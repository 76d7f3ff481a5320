"""Import a docserver database snapshot into the document store."""

from __future__ import annotations

from pathlib import Path

import click
from sqlalchemy.exc import SQLAlchemyError

from docquery.cli import Context, pass_context
from docquery.commands._common import EXIT_STORE_ERROR
from docquery.exceptions import StoreError
from docquery.store.loader import load_snapshot
from docquery.store.session import get_store_session
from docquery.utils.output import error, info, success


@click.command("load")
@click.argument(
    "snapshot",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@pass_context
def cli(ctx: Context, snapshot: Path) -> None:
    """Replace the store contents with a docserver JSON database file.

    SNAPSHOT is the JSON file written by the document server, holding
    "documents" and "share_records" maps. Profiles are ignored. The store
    is created if it does not exist yet.

    \b
    Examples:
      docquery load ./database.json
      docquery --db /tmp/docs.db load ./database.json
    """
    db_path = ctx.db_path
    if not ctx.quiet:
        info(f"Loading {snapshot} into {db_path}")

    try:
        with get_store_session(db_path, create=True) as session:
            count = load_snapshot(session, snapshot)
    except (StoreError, SQLAlchemyError) as e:
        error(str(e))
        raise SystemExit(EXIT_STORE_ERROR)

    success(f"Imported {count} document{'s' if count != 1 else ''}")
