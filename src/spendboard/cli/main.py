"""Main CLI entry point."""

import logging

import click
from spendboard.database.factories import create_sqlite_database
from spendboard.logging_setup import setup_logging

# Import and register all commands at module level
from spendboard.cli.commands import (
    project,
    category,
    expense,
    revenue,
    import_cmd,
    dashboard,
    search,
    export,
)

logger = logging.getLogger(__name__)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides SPENDBOARD_DB_PATH environment variable)",
    envvar="SPENDBOARD_DB_PATH",
)
@click.option("--debug", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, debug: bool):
    """Spendboard - project expense tracking.

    Record projects, expenses and revenues, import monthly expense sheets
    and review spending on dashboards.
    """
    ctx.ensure_object(dict)
    setup_logging(debug=debug)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)
        logger.debug("Using database %s", db.database_url)


# Register all commands
project.register_commands(cli)
category.register_commands(cli)
expense.register_commands(cli)
revenue.register_commands(cli)
import_cmd.register_commands(cli)
dashboard.register_commands(cli)
search.register_commands(cli)
export.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()
