"""Main CLI entry point."""

import getpass
import logging

import click
from savetrack.config import DB_PATH_ENV_VAR
from savetrack.database.factories import create_sqlite_database

# Import and register all commands at module level
from savetrack.cli.commands import account, goal, progress


def _default_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "default"


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV_VAR} environment variable)",
    envvar=DB_PATH_ENV_VAR,
)
@click.option(
    "--user",
    "user_id",
    envvar="SAVETRACK_USER",
    default=_default_user,
    show_default="current login name",
    help="User whose accounts and goals to work with",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, user_id: str, verbose: bool):
    """Savetrack - Savings goal tracking.

    Link savings goals to accounts, record progress as balances change,
    and project when each goal will be reached.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["user"] = user_id
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
goal.register_commands(cli)
progress.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
