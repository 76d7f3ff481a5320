"""Options and helpers shared by the query commands."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import click

from docquery.exceptions import QueryError, QueryErrorKind
from docquery.query.parser import split_query_expression
from docquery.utils.output import error

EXIT_SUCCESS = 0
EXIT_QUERY_ERROR = 1
EXIT_STORE_ERROR = 2

_HINTS = {
    QueryErrorKind.SYNTAX: "Conditions look like: <path> <operator> <value>, joined by 'and'/'or'",
    QueryErrorKind.VALIDATION: None,
}


def content_query_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the --where / --token pair of options to a command."""
    func = click.option(
        "--token",
        "-t",
        "tokens",
        multiple=True,
        help="Raw query token (condition, 'and' or 'or'); repeat in order",
    )(func)
    func = click.option(
        "--where",
        "-w",
        default=None,
        help='Content query expression, e.g. \'type equals "report" and year lessthan 2000\'',
    )(func)
    return func


def resolve_query_tokens(where: str | None, tokens: tuple[str, ...]) -> list[str]:
    """Turn --where / --token into the token list the parser expects.

    Raises:
        click.UsageError: If both options are given.
        QuerySyntaxError: If the --where expression cannot be split.
    """
    if where is not None and tokens:
        raise click.UsageError("Use either --where or --token, not both")
    if where is not None:
        return split_query_expression(where)
    return list(tokens)


def report_query_error(e: QueryError) -> None:
    """Print a query error with a hint for its kind."""
    error(str(e), hint=_HINTS.get(e.kind))
