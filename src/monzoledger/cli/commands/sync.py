"""Sync command."""

import click

from monzoledger.cli.context import get_database, get_settings, get_source
from monzoledger.cli.date_filters import resolve_cli_date_range
from monzoledger.cli.error_handling import FATAL_ERRORS, handle_error
from monzoledger.domain.sync import SyncService


@click.command("sync")
@click.option("--since", help="Fetch transactions created on or after this date (default: beancount.start_date)")
@click.option("--before", help="Fetch transactions created before this date (default: now)")
@click.pass_context
def sync(ctx, since: str | None, before: str | None):
    """Fetch accounts, pots and transactions into the local database."""
    settings = get_settings(ctx)
    start, end = resolve_cli_date_range(
        ctx,
        since=since,
        before=before,
        default_start=settings.ledger.start_date,
        default_to_now=True,
    )
    db = get_database(ctx)
    source = get_source(ctx)
    service = SyncService(
        db,
        source,
        custom_categories=settings.ledger.custom_categories,
        window_days=settings.window_days,
    )

    try:
        result = service.sync(start, end)
    except FATAL_ERRORS as e:
        handle_error(ctx, e)

    click.echo(f"Sync complete ({start.date().isoformat()} to {end.date().isoformat()}):")
    click.echo(f"  Accounts: {result['accounts']} new")
    click.echo(f"  Pots: {result['pots']} new")
    click.echo(f"  Categories: {result['categories']} new")
    click.echo(f"  Merchants: {result['merchants']} new")
    click.echo(f"  Transactions: {result['transactions']} new, {result['fetched']} fetched")
    click.echo(f"  Skipped: {result['skipped']} duplicates")


def register_commands(cli):
    """Register sync command with main CLI."""
    cli.add_command(sync)
