"""Main CLI entry point."""

import logging

import click
from charitycomply.database.factories import create_sqlite_database
from charitycomply.domain.cache import InMemoryStatisticsCache

# Import and register all commands at module level
from charitycomply.cli.commands import (
    organization,
    safeguarding,
    overseas,
    init_countries,
    income,
    import_cmd,
    score,
)

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides CHARITYCOMPLY_DB_PATH environment variable)",
    envvar="CHARITYCOMPLY_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Charitycomply - Charity Commission compliance scoring.

    Record safeguarding checks, overseas activities and income, then score
    the organization's compliance and see what to fix first.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(level=log_level.upper(), format=LOG_FORMAT)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["cache"] = InMemoryStatisticsCache()
        ctx.call_on_close(db.disconnect)


# Register all commands
organization.register_commands(cli)
safeguarding.register_commands(cli)
overseas.register_commands(cli)
init_countries.register_commands(cli)
income.register_commands(cli)
import_cmd.register_commands(cli)
score.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
