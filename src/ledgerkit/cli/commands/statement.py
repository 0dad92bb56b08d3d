"""Account and party statement commands."""

import click
from ledgerkit.cli.account_resolution import resolve_account_or_exit
from ledgerkit.cli.date_filters import period_options, resolve_cli_date_range
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.entities import AccountStatement, StatementRowKind
from ledgerkit.domain.errors import DomainError
from ledgerkit.domain.statement import StatementCalculator


def _date_range(ctx, start_date, end_date, this_month, this_year, last_month, last_year):
    return resolve_cli_date_range(
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


currency_option = click.option(
    "--currency", help="Only include entries in this currency (default: all entries)"
)


def _echo_statement(statement: AccountStatement) -> None:
    entity = statement.entity
    click.echo(f"\nStatement: {entity.code} {entity.name}")
    if entity.error:
        click.echo(f"Warning: {entity.error}")
        return

    click.echo("=" * 100)
    click.echo(f"{'Date':10s}  {'Reference':14s}  {'Description':30s}  {'Debit':>12s}  {'Credit':>12s}  {'Balance':>12s}")
    click.echo("-" * 100)
    for row in statement.statement:
        if row.kind == StatementRowKind.OPENING:
            click.echo(f"{row.date!s:10s}  {'':14s}  {row.description:30s}  {'':>12s}  {'':>12s}  {row.balance:>12,.2f}")
            continue
        click.echo(
            f"{row.date!s:10s}  {(row.reference or '-')[:14]:14s}  {row.description[:30]:30s}  "
            f"{row.debit:>12,.2f}  {row.credit:>12,.2f}  {row.balance:>12,.2f}"
        )
    click.echo("-" * 100)
    click.echo(f"Opening balance: {statement.opening_balance:,.2f}")
    click.echo(f"Closing balance: {statement.closing_balance:,.2f}")


@click.group()
def statement_group():
    """Show account and party statements."""
    pass


@statement_group.command("account")
@click.argument("account", metavar="ACCOUNT")
@period_options
@currency_option
@click.pass_context
def account_statement(
    ctx, account: str, start_date, end_date, this_month, this_year, last_month, last_year, currency
):
    """Show the statement of an account.

    ACCOUNT can be an account code, ID or name. Without a period the
    statement covers the current year to date.

    Examples:
        ledgerkit statement account 1000 --this-month
        ledgerkit statement account "Cash" --start-date 2024-01-01 --end-date 2024-03-31
    """
    db = ctx.obj["db"]
    account_obj = resolve_account_or_exit(ctx, AccountService(db), account)
    start, end = _date_range(ctx, start_date, end_date, this_month, this_year, last_month, last_year)

    try:
        statement = StatementCalculator(db).get_account_statement(
            ctx.obj["tenant_id"], account_obj.id, start, end, currency=currency
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    _echo_statement(statement)


def _party_statement(ctx, entity_type: str, party_id: int, dates, currency) -> None:
    start, end = _date_range(ctx, *dates)
    try:
        statement = StatementCalculator(ctx.obj["db"]).get_customer_statement(
            ctx.obj["tenant_id"], entity_type, party_id, start, end, currency=currency
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    _echo_statement(statement)


@statement_group.command("customer")
@click.argument("customer_id", type=int)
@period_options
@currency_option
@click.pass_context
def customer_statement(
    ctx, customer_id: int, start_date, end_date, this_month, this_year, last_month, last_year, currency
):
    """Show the statement of a customer's account."""
    dates = (start_date, end_date, this_month, this_year, last_month, last_year)
    _party_statement(ctx, "customer", customer_id, dates, currency)


@statement_group.command("supplier")
@click.argument("supplier_id", type=int)
@period_options
@currency_option
@click.pass_context
def supplier_statement(
    ctx, supplier_id: int, start_date, end_date, this_month, this_year, last_month, last_year, currency
):
    """Show the statement of a supplier's account."""
    dates = (start_date, end_date, this_month, this_year, last_month, last_year)
    _party_statement(ctx, "supplier", supplier_id, dates, currency)


def register_commands(cli):
    """Register statement commands with main CLI."""
    cli.add_command(statement_group, name="statement")
