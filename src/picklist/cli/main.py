"""Main CLI entry point."""

import logging

import click
from picklist.database.factories import create_sqlite_database

# Import and register all commands at module level
from picklist.cli.commands import (
    mapping,
    dates,
    load,
    orders,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides PICKLIST_DB_PATH environment variable)",
    envvar="PICKLIST_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Log extraction and grouping details")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Picklist - Order pick list builder.

    Load order lines from sheet exports, filter them by date, merge newly
    arrived orders and show them grouped by customer.
    """
    ctx.ensure_object(dict)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db


# Register all commands
mapping.register_commands(cli)
dates.register_commands(cli)
load.register_commands(cli)
orders.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
