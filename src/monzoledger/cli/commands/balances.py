"""Live balances command."""

from collections import defaultdict

import click

from monzoledger.cli.context import get_source
from monzoledger.cli.error_handling import FATAL_ERRORS, handle_error
from monzoledger.domain.resolver import describe_amount


@click.command("balances")
@click.pass_context
def balances(ctx):
    """Show live balances of open accounts and their pots."""
    source = get_source(ctx)
    totals: dict[str, int] = defaultdict(int)

    try:
        for account in source.list_accounts():
            if account.closed:
                continue
            balance = source.get_balance(account.id)
            totals[balance.currency] += balance.balance
            click.echo(f"{account.description or account.label} ({account.label}): "
                       f"{describe_amount(balance.balance, balance.currency)}")

            for pot in source.list_pots(account.id):
                if pot.deleted:
                    continue
                totals[pot.currency] += pot.balance
                click.echo(f"  Pot {pot.name}: {describe_amount(pot.balance, pot.currency)}")
    except FATAL_ERRORS as e:
        handle_error(ctx, e)

    for currency in sorted(totals):
        click.echo(f"Total {currency}: {describe_amount(totals[currency], currency)}")


def register_commands(cli):
    """Register balances command with main CLI."""
    cli.add_command(balances)
