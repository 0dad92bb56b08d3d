"""Chart of accounts commands."""

import click
from ledgerkit.cli.account_resolution import resolve_account_or_exit
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.entities import AccountType
from ledgerkit.domain.errors import DomainError


@click.group()
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("create")
@click.argument("code", metavar="CODE")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    required=True,
    type=click.Choice([t.value for t in AccountType], case_sensitive=False),
    help="Account type",
)
@click.option("--parent", help="Parent account (code, ID or name)")
@click.pass_context
def create_account(ctx, code: str, name: str, account_type: str, parent: str | None):
    """Create a new account.

    Examples:
        ledgerkit account create 1010 "Cash on hand" --type asset --parent 1000
        ledgerkit account create 5100 "Rent" --type expense
    """
    db = ctx.obj["db"]
    tenant_id = ctx.obj["tenant_id"]
    service = AccountService(db)

    parent_id = None
    if parent is not None:
        parent_id = resolve_account_or_exit(ctx, service, parent).id

    try:
        account_id = service.create_account(tenant_id, code, name, account_type, parent_id=parent_id)
        click.echo(f"Created account {code} '{name}' (ID: {account_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.option("--active-only", is_flag=True, help="Hide deactivated accounts")
@click.pass_context
def list_accounts(ctx, active_only: bool):
    """List all accounts."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts(ctx.obj["tenant_id"], include_inactive=not active_only)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 70)
    for acc in accounts:
        status = "" if acc.is_active else " (inactive)"
        click.echo(f"ID: {acc.id:3d} | {acc.code:10s} | {acc.name:30s} | {acc.type.value}{status}")


def _echo_tree(nodes, depth: int = 0) -> None:
    for node in nodes:
        status = "" if node.is_active else " (inactive)"
        click.echo(f"{'  ' * depth}{node.code} {node.name} [{node.type.value}]{status}")
        _echo_tree(node.children, depth + 1)


@account_group.command("tree")
@click.pass_context
def account_tree(ctx):
    """Show the chart of accounts as a tree."""
    service = AccountService(ctx.obj["db"])
    roots = service.get_chart_of_accounts(ctx.obj["tenant_id"])
    if not roots:
        click.echo("No accounts found.")
        return
    _echo_tree(roots)


@account_group.command("deactivate")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def deactivate_account(ctx, account: str) -> None:
    """Deactivate an account so nothing new is posted to it.

    ACCOUNT can be an account code, ID or name.
    """
    service = AccountService(ctx.obj["db"])
    account_obj = resolve_account_or_exit(ctx, service, account)
    service.deactivate_account(ctx.obj["tenant_id"], account_obj.id)
    click.echo(f"Deactivated account {account_obj.code} '{account_obj.name}'")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account code, ID or name.

    Only accounts without child accounts and without posted journal lines
    can be deleted. Use 'account deactivate' for accounts with activity.

    Examples:
        ledgerkit account delete 5100
        ledgerkit account delete "Rent" --yes
    """
    db = ctx.obj["db"]
    tenant_id = ctx.obj["tenant_id"]
    service = AccountService(db)

    account_obj = resolve_account_or_exit(ctx, service, account)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account {account_obj.code} '{account_obj.name}'?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(tenant_id, account_obj.id)
        click.echo(f"Deleted account {account_obj.code} '{account_obj.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
