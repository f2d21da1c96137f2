"""Database reset command."""

import click

from monzoledger.cli.context import get_database
from monzoledger.cli.error_handling import FATAL_ERRORS, handle_error


@click.command("reset")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def reset(ctx, yes: bool):
    """Delete all stored data and recreate the database tables."""
    if not yes:
        click.confirm("This deletes all synchronized data. Continue?", abort=True)

    db = get_database(ctx)
    try:
        db.reset()
    except FATAL_ERRORS as e:
        handle_error(ctx, e)
    click.echo("Database reset.")


def register_commands(cli):
    """Register reset command with main CLI."""
    cli.add_command(reset)
