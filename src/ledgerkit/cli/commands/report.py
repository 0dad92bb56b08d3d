"""Period report commands."""

import click
from ledgerkit.cli.date_filters import period_options, resolve_cli_date_range
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.errors import DomainError
from ledgerkit.domain.reports import ReportService


@click.group()
def report_group():
    """Financial reports."""
    pass


@report_group.command("income")
@period_options
@click.pass_context
def income_statement(ctx, start_date, end_date, this_month, this_year, last_month, last_year):
    """Show the income statement for a period.

    Without a period the report covers the current year to date.
    """
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-month": this_month,
            "this-year": this_year,
            "last-month": last_month,
            "last-year": last_year,
        },
    )
    try:
        report = ReportService(ctx.obj["db"]).get_income_statement(ctx.obj["tenant_id"], start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\nIncome statement {report.start_date} to {report.end_date}")
    click.echo("=" * 50)
    click.echo(f"{'Revenue':30s} {report.total_revenue:>15,.2f}")
    click.echo(f"{'Expenses':30s} {report.total_expenses:>15,.2f}")
    for detail in report.expense_details:
        click.echo(f"  {detail.account_name[:28]:28s} {detail.value:>15,.2f}")
    click.echo("-" * 50)
    click.echo(f"{'Net profit':30s} {report.net_profit:>15,.2f}")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
