"""Query documents in the store by scope and content."""

from __future__ import annotations

import json
from typing import Any

import click
from rich.markup import escape
from sqlalchemy.exc import SQLAlchemyError

from docquery.cli import Context, pass_context
from docquery.commands._common import (
    EXIT_QUERY_ERROR,
    EXIT_STORE_ERROR,
    EXIT_SUCCESS,
    content_query_options,
    report_query_error,
    resolve_query_tokens,
)
from docquery.documents.models import Document, QueryDocumentsParams, QueryResult
from docquery.documents.service import query_documents
from docquery.exceptions import QueryError, StoreError, StoreNotFoundError
from docquery.store.repository import SqlDocumentStore
from docquery.store.session import get_store_session
from docquery.utils.output import (
    create_table,
    error,
    info,
    pager_print,
    render_to_string,
    verbose,
)

PREVIEW_WIDTH = 60


def _content_preview(content: Any) -> str:
    """One-line preview of a document's content."""
    text = content if isinstance(content, str) else json.dumps(content, ensure_ascii=False)
    text = " ".join(text.split())
    if len(text) <= PREVIEW_WIDTH:
        return text
    return text[: PREVIEW_WIDTH - 1] + "…"


def _document_to_dict(doc: Document) -> dict[str, Any]:
    return {
        "id": doc.id,
        "owner_id": doc.owner_id,
        "content": doc.content,
        "creation_date": doc.creation_date.isoformat(),
        "last_modified_date": doc.last_modified_date.isoformat(),
    }


def _print_table(result: QueryResult) -> None:
    """Print a page of results as a Rich table, using pager when appropriate."""
    first = (result.page - 1) * result.limit + 1
    last = first + len(result.documents) - 1
    info(f"Documents {first}-{last} of {result.total} (page {result.page})")

    table = create_table(show_header=True, header_style="bold")
    table.add_column("ID", style="doc.id", no_wrap=True)
    table.add_column("Owner", style="doc.owner", no_wrap=True)
    table.add_column("Created", style="doc.date", no_wrap=True)
    table.add_column("Modified", style="doc.date", no_wrap=True)
    table.add_column("Content", no_wrap=True)

    for doc in result.documents:
        table.add_row(
            escape(doc.id),
            escape(doc.owner_id),
            doc.creation_date.strftime("%Y-%m-%d %H:%M:%S"),
            doc.last_modified_date.strftime("%Y-%m-%d %H:%M:%S"),
            escape(_content_preview(doc.content)),
        )

    pager_print(render_to_string(table))


def _print_json(result: QueryResult) -> None:
    payload = {
        "documents": [_document_to_dict(doc) for doc in result.documents],
        "total": result.total,
        "page": result.page,
        "limit": result.limit,
    }
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def _print_ids(result: QueryResult) -> None:
    """Print one document id per line."""
    for doc in result.documents:
        click.echo(doc.id)


@click.command("query")
@click.option(
    "--user",
    "-u",
    "user_id",
    required=True,
    help="Profile id of the caller; scope is relative to this user",
)
@click.option(
    "--scope",
    "-s",
    default=None,
    help="owned, shared or all (default: from config, usually all)",
)
@content_query_options
@click.option(
    "--sort-by",
    default=None,
    help="creation_date or last_modified_date (default: from config)",
)
@click.option(
    "--order",
    default=None,
    help="asc or desc (default: from config)",
)
@click.option("--page", "-p", type=int, default=1, show_default=True, help="Page number")
@click.option(
    "--limit",
    "-l",
    type=int,
    default=None,
    help="Documents per page, 1-100 (default: from config)",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json", "ids"]),
    default="table",
    help="Output format (default: table)",
)
@pass_context
def cli(
    ctx: Context,
    user_id: str,
    scope: str | None,
    where: str | None,
    tokens: tuple[str, ...],
    sort_by: str | None,
    order: str | None,
    page: int,
    limit: int | None,
    output_format: str,
) -> None:
    """Find documents visible to a user whose content matches a query.

    Conditions have the form PATH OPERATOR VALUE. PATH is a dot-separated
    path into the JSON content (omit it to test the whole content);
    VALUE is a quoted string, a number, true, false or null.

    \b
    Operators:
      equals, notequals, contains, startswith, endswith
      greaterthan, lessthan, greaterthanorequals, lessthanorequals
      Append -insensitive to a string operator for case-insensitive matching.

    \b
    Examples:
      docquery query -u alice --where 'type equals "report"'
      docquery query -u alice --where 'tags contains "urgent" or priority greaterthan 3'
      docquery query -u bob --scope shared --token 'title startswith "Q1"' --format ids
    """
    config = ctx.config
    if config is None:
        error("Configuration not loaded")
        raise SystemExit(EXIT_QUERY_ERROR)

    try:
        content_query = resolve_query_tokens(where, tokens)
    except QueryError as e:
        report_query_error(e)
        raise SystemExit(EXIT_QUERY_ERROR)

    params = QueryDocumentsParams(
        auth_user_id=user_id,
        scope=scope if scope is not None else config.default_scope,
        content_query=content_query,
        sort_by=sort_by if sort_by is not None else config.default_sort_by,
        order=order if order is not None else config.default_order,
        page=page,
        limit=limit if limit is not None else config.default_limit,
    )
    verbose(f"Query tokens: {escape(repr(content_query))}")

    try:
        with get_store_session(config.db_path) as session:
            result = query_documents(SqlDocumentStore(session), params)
    except QueryError as e:
        report_query_error(e)
        raise SystemExit(EXIT_QUERY_ERROR)
    except StoreNotFoundError as e:
        error(str(e), hint="Import a snapshot first with: docquery load SNAPSHOT")
        raise SystemExit(EXIT_STORE_ERROR)
    except (StoreError, SQLAlchemyError) as e:
        error(f"Store error: {e}")
        raise SystemExit(EXIT_STORE_ERROR)

    if output_format == "json":
        _print_json(result)
    elif output_format == "ids":
        _print_ids(result)
    elif not result.documents:
        if not ctx.quiet:
            info(f"No documents found ({result.total} matches, page {result.page})")
    else:
        _print_table(result)

    raise SystemExit(EXIT_SUCCESS)
