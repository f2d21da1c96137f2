"""CLI error handling helpers."""

import click
from sqlalchemy.exc import SQLAlchemyError

from monzoledger.domain.errors import AuthenticationError, DomainError

TOKEN_HINT = "Set monzo.access_token in the config file or the MONZO_ACCESS_TOKEN environment variable."

# Errors a command reports and exits on: bad input or remote failures,
# unreadable or unwritable files, and storage failures other than duplicates
FATAL_ERRORS = (DomainError, OSError, SQLAlchemyError)


def handle_error(ctx: click.Context, error: Exception) -> None:
    """Print an error to stderr and exit with status 1."""
    if isinstance(error, OSError) and error.filename:
        message = f"{error.strerror or error}: {error.filename}"
    else:
        message = str(error)
    click.echo(f"Error: {message}", err=True)
    if isinstance(error, AuthenticationError):
        click.echo(TOKEN_HINT, err=True)
    ctx.exit(1)
