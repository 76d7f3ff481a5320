"""Validate a content query without touching the store."""

from __future__ import annotations

import click
from rich.markup import escape

from docquery.cli import Context, pass_context
from docquery.commands._common import (
    EXIT_QUERY_ERROR,
    EXIT_SUCCESS,
    content_query_options,
    report_query_error,
    resolve_query_tokens,
)
from docquery.exceptions import QueryError
from docquery.query.ast_nodes import ParsedQuery, QueryCondition, ValueType
from docquery.query.parser import parse_content_query
from docquery.query.values import format_value
from docquery.utils.output import console, create_table, debug, info, success


def _display_value(cond: QueryCondition) -> str:
    if cond.value_type is ValueType.STRING:
        return f'"{cond.value}"'
    return format_value(cond.value)


def _print_parsed(parsed: ParsedQuery) -> None:
    table = create_table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Path", style="query.path")
    table.add_column("Operator", style="query.operator")
    table.add_column("Value", style="query.value")
    table.add_column("Type")

    for index, cond in enumerate(parsed.conditions):
        if index > 0:
            logic = parsed.logic[index - 1].value.upper()
            table.add_row("", f"[query.logic]{logic}[/query.logic]", "", "", "")
        table.add_row(
            str(index + 1),
            escape(cond.path) if cond.path else "[dim](content)[/dim]",
            cond.operator_display,
            escape(_display_value(cond)),
            cond.value_type.value,
        )

    console.print(table)


@click.command("check")
@content_query_options
@pass_context
def cli(ctx: Context, where: str | None, tokens: tuple[str, ...]) -> None:
    """Parse a content query and show how it was understood.

    Nothing is read from the store. Exits with status 1 if the query
    is malformed.

    \b
    Examples:
      docquery check --where 'meta.author.name equals-insensitive "ada"'
      docquery check --token 'year lessthan 2000' --token or --token 'draft equals true'
    """
    try:
        query_tokens = resolve_query_tokens(where, tokens)
        parsed = parse_content_query(query_tokens)
    except QueryError as e:
        report_query_error(e)
        raise SystemExit(EXIT_QUERY_ERROR)

    debug(f"Query tokens: {escape(repr(query_tokens))}")

    if parsed is None:
        info("Empty query: every document matches")
        raise SystemExit(EXIT_SUCCESS)

    if not ctx.quiet:
        _print_parsed(parsed)
    count = len(parsed.conditions)
    success(f"Query is valid ({count} condition{'s' if count != 1 else ''})")
    raise SystemExit(EXIT_SUCCESS)
