"""Main CLI entry point."""

import click

from monzoledger.config import DEFAULT_CONFIG_PATH, setup_logging

# Import and register all commands at module level
from monzoledger.cli.commands import balances, export, reset, sync


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    envvar="MONZOLEDGER_CONFIG",
    help="Path to the YAML configuration file (or MONZOLEDGER_CONFIG)",
)
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides MONZOLEDGER_DB_PATH and the config file)",
    envvar="MONZOLEDGER_DB_PATH",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, config_path: str, db_path: str | None, verbose: bool):
    """Monzoledger - Monzo to Beancount synchronization.

    Pull accounts, pots and transactions from the Monzo API into a local
    database and export them as a double-entry Beancount ledger.
    """
    ctx.ensure_object(dict)
    ctx.obj.setdefault("config_path", config_path)
    ctx.obj.setdefault("db_path", db_path)

    if ctx.invoked_subcommand is not None:
        setup_logging(verbose)


# Register all commands
sync.register_commands(cli)
export.register_commands(cli)
balances.register_commands(cli)
reset.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()
