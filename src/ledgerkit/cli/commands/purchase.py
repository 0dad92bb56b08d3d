"""Purchase invoice commands."""

import click
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.documents import PURCHASE_KINDS, PurchaseService
from ledgerkit.domain.errors import DomainError
from ledgerkit.domain.reconciliation import ReconciliationService
from ledgerkit.utils.amount_parser import parse_money
from ledgerkit.utils.date_parser import parse_date


@click.group()
def purchase_group():
    """Record purchase invoices and repair their ledger entries."""
    pass


@purchase_group.command("create")
@click.option("--supplier", "supplier_id", type=int, required=True, help="Supplier ID")
@click.option("--number", help="Invoice number (default: PI-<id>)")
@click.option("--date", "issue_date", default="today", help="Issue date (default: today)")
@click.option("--total", required=True, help="Invoice total")
@click.option("--paid", default="0", show_default=True, help="Amount paid in cash")
@click.option("--kind", type=click.Choice(PURCHASE_KINDS), default="purchase", show_default=True)
@click.option("--currency", default="EGP", show_default=True)
@click.pass_context
def create_purchase(ctx, supplier_id: int, number, issue_date: str, total: str, paid: str, kind: str, currency: str):
    """Record a purchase invoice or purchase return and post it.

    Examples:
        ledgerkit purchase create --supplier 1 --number P-100 --total 1000 --paid 400
        ledgerkit purchase create --supplier 1 --number PR-7 --total 150 --kind return
    """
    service = PurchaseService(ctx.obj["db"])
    try:
        invoice = service.create_purchase_invoice(
            ctx.obj["tenant_id"],
            supplier_id,
            number,
            parse_date(issue_date),
            parse_money(total),
            parse_money(paid),
            kind=kind,
            currency=currency,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    label = "purchase invoice" if kind == "purchase" else "purchase return"
    click.echo(f"Recorded {label} {invoice.document_number} for {invoice.total_amount:,.2f}")


@purchase_group.command("sync")
@click.option("--all-tenants", is_flag=True, help="Process every tenant, not only --tenant")
@click.pass_context
def sync_purchases(ctx, all_tenants: bool):
    """Post missing journal entries for purchase invoices.

    Invoices that already have an entry are skipped, so the command can be
    run repeatedly. Failures are reported per invoice and do not stop the run.
    """
    service = ReconciliationService(ctx.obj["db"])
    report = service.sync_all_purchases_to_ledger(None if all_tenants else ctx.obj["tenant_id"])

    click.echo(
        f"Sync complete: {report.fixed_count} fixed, {report.skipped_count} skipped, "
        f"{report.failed_count} failed."
    )
    for message in report.errors:
        click.echo(f"  Failed: {message}", err=True)
    if report.failed_count:
        ctx.exit(1)


def register_commands(cli):
    """Register purchase commands with main CLI."""
    cli.add_command(purchase_group, name="purchase")
