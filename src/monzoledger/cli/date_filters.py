"""CLI helpers for date range resolution."""

from datetime import date, datetime, UTC

import click

from monzoledger.utils.date_parser import parse_datetime, start_of_day


def _parse_option(ctx: click.Context, name: str, value: str) -> datetime:
    try:
        return parse_datetime(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {name} date: {e}", err=True)
        ctx.exit(1)


def resolve_cli_date_range(
    ctx: click.Context,
    *,
    since: str | None,
    before: str | None,
    default_start: date | None = None,
    default_to_now: bool = False,
) -> tuple[datetime | None, datetime | None]:
    """Resolve --since/--before options into aware UTC datetimes.

    A missing --since falls back to midnight of ``default_start`` and a missing
    --before to the current time when ``default_to_now`` is set; otherwise the
    bound stays open (None).
    """
    start = _parse_option(ctx, "since", since) if since else None
    end = _parse_option(ctx, "before", before) if before else None

    if start is None and default_start is not None:
        start = start_of_day(default_start)
    if end is None and default_to_now:
        end = datetime.now(UTC)

    if start is not None and end is not None and start > end:
        click.echo(
            f"Error: --since ({start.date().isoformat()}) must not be after --before ({end.date().isoformat()}).",
            err=True,
        )
        ctx.exit(1)

    return start, end
