"""Main CLI entry point."""

import click
from ledgerkit.database.factories import create_database
from ledgerkit.logging_config import configure_logging

# Import and register all commands at module level
from ledgerkit.cli.commands import (
    account,
    init_accounts,
    journal,
    statement,
    party,
    purchase,
    sale,
    voucher,
    report,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to SQLite database file (overrides LEDGERKIT_DB_PATH environment variable)",
    envvar="LEDGERKIT_DB_PATH",
)
@click.option(
    "--database-url",
    help="SQLAlchemy database URL, e.g. for PostgreSQL (overrides --db-path)",
    envvar="LEDGERKIT_DATABASE_URL",
)
@click.option(
    "--tenant",
    default="default",
    show_default=True,
    help="Tenant whose books are used",
    envvar="LEDGERKIT_TENANT",
)
@click.option(
    "--log-level",
    default="WARNING",
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level for JSON logs written to stderr",
    envvar="LEDGERKIT_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, database_url: str | None, tenant: str, log_level: str):
    """Ledgerkit - multi-tenant double-entry ledger.

    Post balanced journal entries, record invoices and vouchers, and produce
    account statements and income statements per tenant.
    """
    ctx.ensure_object(dict)
    configure_logging(level=log_level.upper())

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_database(database_url=database_url, database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["tenant_id"] = tenant
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
init_accounts.register_commands(cli)
journal.register_commands(cli)
statement.register_commands(cli)
party.register_commands(cli)
purchase.register_commands(cli)
sale.register_commands(cli)
voucher.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
