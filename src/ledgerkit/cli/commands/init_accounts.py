"""Initialize the default chart of accounts."""

import click
from ledgerkit.domain.account import AccountService, DEFAULT_ACCOUNTS


@click.command("init-accounts")
@click.pass_context
def init_accounts(ctx):
    """Create the default root accounts for the tenant.

    Creates Assets (1000), Liabilities (2000), Equity (3000), Revenue (4000)
    and Expenses (5000). Existing codes are left untouched, so the command
    can be run again safely.
    """
    service = AccountService(ctx.obj["db"])
    created = service.seed_default_accounts(ctx.obj["tenant_id"])

    if not created:
        click.echo("Default accounts already exist.")
        return
    click.echo(f"Created {len(created)} of {len(DEFAULT_ACCOUNTS)} default accounts.")


def register_commands(cli):
    """Register init-accounts command with main CLI."""
    cli.add_command(init_accounts)
