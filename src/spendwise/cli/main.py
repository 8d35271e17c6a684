"""Main CLI entry point."""

import click
from spendwise.database.factories import DB_PATH_ENV_VAR, create_sqlite_database
from spendwise.log import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV_VAR, configure_logging

# Import and register all commands at module level
from spendwise.cli.commands import (
    user,
    category,
    transaction,
    budget,
    goal,
    report,
    notification,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV_VAR} environment variable)",
    envvar=DB_PATH_ENV_VAR,
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=DEFAULT_LOG_LEVEL,
    show_default=True,
    envvar=LOG_LEVEL_ENV_VAR,
    help="Logging level",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Spendwise - Personal finance tracking.

    Record income and expenses, track budgets and savings goals, and get
    notified as they fill up.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
user.register_commands(cli)
category.register_commands(cli)
transaction.register_commands(cli)
budget.register_commands(cli)
goal.register_commands(cli)
report.register_commands(cli)
notification.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
