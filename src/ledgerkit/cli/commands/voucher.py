"""Receipt and payment voucher commands."""

import click
from ledgerkit.cli.account_resolution import resolve_account_or_exit
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.documents import VOUCHER_KINDS, VOUCHER_PARTY_TYPES, VoucherService
from ledgerkit.domain.errors import DomainError
from ledgerkit.utils.amount_parser import parse_money
from ledgerkit.utils.date_parser import parse_date


@click.group()
def voucher_group():
    """Record cash receipts and payments."""
    pass


@voucher_group.command("create")
@click.option("--number", required=True, help="Voucher number")
@click.option("--kind", type=click.Choice(VOUCHER_KINDS), required=True)
@click.option("--party-type", type=click.Choice(VOUCHER_PARTY_TYPES), required=True)
@click.option("--party", "party_id", type=int, help="Customer or supplier ID")
@click.option("--account", help="Counter account for 'other' vouchers (code, ID or name)")
@click.option("--date", "voucher_date", default="today", help="Voucher date (default: today)")
@click.option("--amount", required=True, help="Amount")
@click.option("--description", help="Description")
@click.pass_context
def create_voucher(
    ctx, number: str, kind: str, party_type: str, party_id, account, voucher_date: str, amount: str, description
):
    """Record a voucher and post it.

    Examples:
        ledgerkit voucher create --number RV-1 --kind receipt --party-type customer --party 1 --amount 500
        ledgerkit voucher create --number PV-9 --kind payment --party-type other --account Rent --amount 1200
    """
    db = ctx.obj["db"]
    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, AccountService(db), account).id

    try:
        voucher = VoucherService(db).create_voucher(
            ctx.obj["tenant_id"],
            number,
            kind,
            parse_date(voucher_date),
            parse_money(amount),
            party_type,
            party_id=party_id,
            account_id=account_id,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Recorded {voucher.kind} voucher {voucher.voucher_number} for {voucher.amount:,.2f}")


def register_commands(cli):
    """Register voucher commands with main CLI."""
    cli.add_command(voucher_group, name="voucher")
