"""Sales invoice commands."""

import click
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.documents import SalesService
from ledgerkit.domain.errors import DomainError
from ledgerkit.utils.amount_parser import parse_money
from ledgerkit.utils.date_parser import parse_date


@click.group()
def sale_group():
    """Record sales invoices."""
    pass


@sale_group.command("create")
@click.option("--customer", "customer_id", type=int, required=True, help="Customer ID")
@click.option("--number", required=True, help="Invoice number")
@click.option("--date", "issue_date", default="today", help="Issue date (default: today)")
@click.option("--total", required=True, help="Invoice total")
@click.option("--paid", default="0", show_default=True, help="Amount received in cash")
@click.option("--currency", default="EGP", show_default=True)
@click.pass_context
def create_sale(ctx, customer_id: int, number: str, issue_date: str, total: str, paid: str, currency: str):
    """Record a sales invoice and post it.

    Example:
        ledgerkit sale create --customer 1 --number S-001 --total 2500 --paid 1000
    """
    service = SalesService(ctx.obj["db"])
    try:
        invoice = service.create_sales_invoice(
            ctx.obj["tenant_id"],
            customer_id,
            number,
            parse_date(issue_date),
            parse_money(total),
            parse_money(paid),
            currency=currency,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Recorded sales invoice {invoice.invoice_number} for {invoice.total_amount:,.2f}")


def register_commands(cli):
    """Register sale commands with main CLI."""
    cli.add_command(sale_group, name="sale")
