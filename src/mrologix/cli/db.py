"""Command-line helpers for the MRO Logix database.

Registers the ``mrologix db`` subcommands and dispatches them to
:mod:`mrologix.db.operations`.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from rich.console import Console
from rich.table import Table

from mrologix.db import operations
from mrologix.logging import get_logger


def register_subcommands(subparsers):
    """Attach database subcommands to an ``argparse`` parser.

    Examples
    --------
    >>> import argparse
    >>> parser = argparse.ArgumentParser(prog="mrologix db")
    >>> subparsers = parser.add_subparsers(dest="subcommand", required=True)
    >>> register_subcommands(subparsers)
    >>> parser.parse_args(["init", "--file", "test.db"])
    Namespace(subcommand='init', file='test.db')
    """

    init_parser = subparsers.add_parser("init", help="initialize db")
    init_parser.add_argument("--file", required=False)

    status_parser = subparsers.add_parser("status", help="Check DB status")
    status_parser.add_argument("--file", required=False)
    show_parser = subparsers.add_parser("show", help="Show tables")
    show_parser.add_argument("--file", required=False)


def dispatch(args):
    """Run the database operation associated with ``args.subcommand``."""

    logger = get_logger(__file__)
    file_path = getattr(args, "file", None)

    if args.subcommand == "status":
        operations.check_status(file_path)
    elif args.subcommand == "show":
        table_definitions = operations.show_tables(file_path)
        _render_table_overview(table_definitions)
    elif args.subcommand == "init":
        operations.initialize(file_path=file_path)
    else:
        logger.info("no dispatched function provided for %s", args.subcommand)


def _render_table_overview(
    table_definitions: Mapping[str, Sequence[Mapping[str, Any]]],
    console: Console | None = None,
) -> None:
    """Pretty-print table metadata using ``rich``."""

    if console is None:
        console = Console()

    table = Table(title="MRO Logix Database Schema", show_lines=True)
    table.add_column("Table", style="bold cyan")
    table.add_column("Column", style="magenta")
    table.add_column("Type", style="green")
    table.add_column("Nullable", justify="center", style="yellow")

    table_names = sorted(table_definitions)
    if not table_names:
        table.add_row("[dim]No tables found[/dim]", "", "", "")
        console.print(table)
        return

    for table_index, table_name in enumerate(table_names):
        for column_index, column in enumerate(table_definitions[table_name]):
            table.add_row(
                table_name if column_index == 0 else "",
                str(column.get("name", "")),
                str(column.get("type", "")),
                "Yes" if column.get("nullable", True) else "No",
            )
        if table_index < len(table_names) - 1:
            table.add_section()

    console.print(table)
