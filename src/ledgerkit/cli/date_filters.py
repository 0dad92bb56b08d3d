"""CLI helpers for statement period resolution."""

from datetime import date

import click

from ledgerkit.utils.date_parser import get_period_range, parse_date


def period_options(command):
    """Attach the shared date range options to a command."""
    options = [
        click.option("--start-date", help="Start date (YYYY-MM-DD or e.g. 'start of year')"),
        click.option("--end-date", help="End date (YYYY-MM-DD or e.g. 'today')"),
        click.option("--this-month", is_flag=True, help="Current month to date"),
        click.option("--this-year", is_flag=True, help="Current year to date"),
        click.option("--last-month", is_flag=True, help="Previous calendar month"),
        click.option("--last-year", is_flag=True, help="Previous calendar year"),
    ]
    for option in reversed(options):
        command = option(command)
    return command


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    today: date | None = None,
) -> tuple[date, date]:
    """Resolve a closed date range from period flags or explicit dates.

    Without any option the range is the current year to date. A missing
    start date defaults to January 1 of the end date's year; a missing end
    date defaults to today.
    """
    selected = [period for period, is_set in period_flags.items() if is_set]

    if len(selected) > 1:
        click.echo(
            "Error: Only one period option (--this-month, --this-year, --last-month, --last-year) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if selected and (start_date or end_date):
        click.echo(
            "Error: Period options cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if selected:
        return get_period_range(selected[0], today=today)

    today = today or date.today()
    try:
        end = parse_date(end_date, today=today) if end_date else today
    except ValueError as e:
        click.echo(f"Error: Invalid end date: {e}", err=True)
        ctx.exit(1)
    try:
        start = parse_date(start_date, today=today) if start_date else end.replace(month=1, day=1)
    except ValueError as e:
        click.echo(f"Error: Invalid start date: {e}", err=True)
        ctx.exit(1)

    if start > end:
        click.echo(f"Error: Start date {start} is after end date {end}.", err=True)
        ctx.exit(1)
    return start, end
