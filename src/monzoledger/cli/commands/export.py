"""Ledger export command."""

import click

from monzoledger.cli.context import get_database, get_settings
from monzoledger.cli.date_filters import resolve_cli_date_range
from monzoledger.cli.error_handling import FATAL_ERRORS, handle_error
from monzoledger.domain.ledger import LedgerBuilder


@click.command("export")
@click.option("--since", help="Only include transactions created on or after this date")
@click.option("--before", help="Only include transactions created before this date")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Ledger file to write (default: beancount.filepath)",
)
@click.option("--stdout", "to_stdout", is_flag=True, help="Print the ledger instead of writing a file")
@click.pass_context
def export(ctx, since: str | None, before: str | None, output: str | None, to_stdout: bool):
    """Export stored transactions as a Beancount ledger."""
    if output and to_stdout:
        click.echo("Error: --output and --stdout cannot be combined.", err=True)
        ctx.exit(1)

    settings = get_settings(ctx)
    start, end = resolve_cli_date_range(ctx, since=since, before=before)
    builder = LedgerBuilder(get_database(ctx), settings.ledger)

    try:
        if to_stdout:
            click.echo(builder.render(builder.build(start, end)), nl=False)
            return
        result = builder.export(start, end, output)
    except FATAL_ERRORS as e:
        handle_error(ctx, e)

    click.echo(
        f"Wrote {result['transactions']} transactions and {result['accounts']} accounts to {result['path']}"
    )


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export)
