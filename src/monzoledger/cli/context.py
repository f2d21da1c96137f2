"""Lazily created per-invocation objects shared by the CLI commands.

The group callback only records the global options; configuration, database
and remote source are created on first use so that ``--help`` works without a
configuration file.
"""

import click

from monzoledger.client.base import LedgerSource
from monzoledger.client.monzo import MonzoClient
from monzoledger.config import Settings
from monzoledger.database.base import Database
from monzoledger.database.factories import create_sqlite_database
from monzoledger.cli.error_handling import FATAL_ERRORS, handle_error


def create_monzo_client(settings: Settings) -> LedgerSource:
    """Default remote source factory."""
    return MonzoClient(
        access_token=settings.monzo.access_token,
        base_url=settings.monzo.base_url,
        timeout=settings.monzo.timeout,
    )


def get_settings(ctx: click.Context) -> Settings:
    obj = ctx.obj
    if "settings" not in obj:
        try:
            obj["settings"] = Settings.from_file(obj["config_path"])
        except FATAL_ERRORS as e:
            handle_error(ctx, e)
    return obj["settings"]


def get_database(ctx: click.Context) -> Database:
    obj = ctx.obj
    if "db" not in obj:
        db_path = obj.get("db_path") or get_settings(ctx).database_path
        try:
            db = create_sqlite_database(database_path=db_path)
            db.connect()
            db.initialize_schema()
        except FATAL_ERRORS as e:
            handle_error(ctx, e)
        obj["db"] = db
        ctx.call_on_close(db.disconnect)
    return obj["db"]


def get_source(ctx: click.Context) -> LedgerSource:
    obj = ctx.obj
    if "source" not in obj:
        factory = obj.get("source_factory", create_monzo_client)
        try:
            obj["source"] = factory(get_settings(ctx))
        except FATAL_ERRORS as e:
            handle_error(ctx, e)
    return obj["source"]
