"""Customer and supplier commands."""

import click
from ledgerkit.cli.account_resolution import resolve_account_or_exit
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.entities import PartyType
from ledgerkit.domain.errors import DomainError
from ledgerkit.domain.party import PartyService


@click.group()
def party_group():
    """Manage customers and suppliers."""
    pass


def _create(ctx, party_type: PartyType, name: str, account: str | None) -> None:
    db = ctx.obj["db"]
    tenant_id = ctx.obj["tenant_id"]
    service = PartyService(db)

    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, AccountService(db), account).id

    try:
        party = (
            service.create_customer(tenant_id, name, account_id=account_id)
            if party_type == PartyType.CUSTOMER
            else service.create_supplier(tenant_id, name, account_id=account_id)
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(
        f"Created {party_type.value} '{party.name}' (ID: {party.id}) linked to account ID {party.account_id}"
    )


@party_group.command("customer-create")
@click.argument("name")
@click.option("--account", help="Existing receivable account (code, ID or name)")
@click.pass_context
def create_customer(ctx, name: str, account: str | None):
    """Create a customer.

    Without --account, an asset account with the customer's name is used or
    created.
    """
    _create(ctx, PartyType.CUSTOMER, name, account)


@party_group.command("supplier-create")
@click.argument("name")
@click.option("--account", help="Existing payable account (code, ID or name)")
@click.pass_context
def create_supplier(ctx, name: str, account: str | None):
    """Create a supplier.

    Without --account, a liability account with the supplier's name is used
    or created.
    """
    _create(ctx, PartyType.SUPPLIER, name, account)


@party_group.command("list")
@click.option(
    "--type",
    "party_type",
    type=click.Choice([t.value for t in PartyType], case_sensitive=False),
    default=PartyType.CUSTOMER.value,
    show_default=True,
)
@click.pass_context
def list_parties(ctx, party_type: str):
    """List customers or suppliers."""
    parties = PartyService(ctx.obj["db"]).list_parties(ctx.obj["tenant_id"], party_type)
    if not parties:
        click.echo(f"No {party_type}s found.")
        return

    click.echo(f"\n{party_type.capitalize()}s:")
    click.echo("-" * 60)
    for p in parties:
        account = p.account_id if p.account_id is not None else "-"
        click.echo(f"ID: {p.id:3d} | {p.name:30s} | Account ID: {account}")


def register_commands(cli):
    """Register party commands with main CLI."""
    cli.add_command(party_group, name="party")
