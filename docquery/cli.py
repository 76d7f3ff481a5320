"""Command-line interface for docquery."""

from __future__ import annotations

import os
from pathlib import Path

import click

from docquery import __version__
from docquery.config import Config, load_config
from docquery.exceptions import ConfigError
from docquery.utils.output import (
    error,
    set_color,
    set_pager,
    set_verbosity,
    setup_logging,
    warning,
)


class Context:
    """Settings resolved by the group and handed to every subcommand."""

    def __init__(self) -> None:
        self.config: Config | None = None
        self.verbose: bool = False
        self.debug: bool = False
        self.quiet: bool = False

    @property
    def db_path(self) -> Path:
        """Store path from the loaded config (``--db`` already applied)."""
        if self.config is None:
            self.config = Config()
        return self.config.db_path


pass_context = click.make_pass_decorator(Context, ensure=True)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=False, path_type=Path),
    help="TOML settings file to read instead of ~/.config/docquery/config.toml",
)
@click.option(
    "--db",
    "-d",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to the SQLite document store (overrides config)",
)
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Print plain text without color markup",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Log parsed query tokens and per-document evaluation",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Log every condition result as well (implies --verbose)",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Only report errors; skip config warnings and summaries",
)
@click.option(
    "--pager/--no-pager",
    default=None,
    help="Force pager on/off for result tables (default: auto-detect)",
)
@click.version_option(version=__version__, prog_name="docquery")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path | None,
    db: Path | None,
    no_color: bool,
    verbose: bool,
    debug: bool,
    quiet: bool,
    pager: bool | None,
) -> None:
    """docquery: Query JSON documents with a small content query language.

    Documents live in a SQLite store imported from a docserver database
    snapshot. Queries filter by ownership scope and by conditions on the
    document content, then sort and page the matches.

    Defaults for scope, sorting and page size come from
    ~/.config/docquery/config.toml, or from the file given with --config.
    Create one with: docquery init-config

    Examples:

    \b
        # Import a snapshot, then list a user's reports
        docquery load database.json
        docquery query --user alice --where 'type equals "report"'
    """
    ctx.ensure_object(Context)
    app_ctx = ctx.obj
    app_ctx.verbose = verbose or debug
    app_ctx.debug = debug
    app_ctx.quiet = quiet

    set_verbosity(verbose=verbose, debug=debug)
    setup_logging(verbose=verbose, debug=debug)
    set_pager(pager)

    # NO_COLOR is honored even without the flag
    disable_color = no_color or os.environ.get("NO_COLOR") is not None
    if disable_color:
        set_color(False)

    try:
        loaded_config, warnings = load_config(config)
    except ConfigError as e:
        if ctx.invoked_subcommand != "init-config":
            error(str(e), hint="Fix the file or recreate it with: docquery init-config --force")
            ctx.exit(1)
            return
        loaded_config, warnings = Config(), []

    if db is not None:
        loaded_config.db_path = db.expanduser().resolve()
    app_ctx.config = loaded_config

    if not disable_color and not loaded_config.colored_output:
        set_color(False)

    # A missing store is reported by the commands that need it
    if not quiet and ctx.invoked_subcommand not in ("init-config", "load", "check"):
        for warn in warnings:
            if not warn.startswith("Document store not found"):
                warning(warn)


def register_commands() -> None:
    """Attach every subcommand module found under docquery.commands."""
    from docquery.commands import discover_commands

    for command in discover_commands():
        cli.add_command(command)


# Subcommands must be attached before click parses argv
register_commands()
