"""Journal entry commands."""

import click
from ledgerkit.cli.account_resolution import resolve_account_or_exit
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.entities import ZERO, JournalEntry, LineInput
from ledgerkit.domain.errors import DomainError, ValidationError
from ledgerkit.domain.journal import JournalWriter
from ledgerkit.utils.amount_parser import parse_money
from ledgerkit.utils.date_parser import parse_date


def parse_line_spec(ctx, account_service: AccountService, spec: str) -> LineInput:
    """Parse ``ACCOUNT:DEBIT:CREDIT[:DESCRIPTION]`` into a line.

    An empty debit or credit field means zero.
    """
    parts = spec.split(":", 3)
    if len(parts) < 3:
        raise ValidationError(f"Invalid line '{spec}'. Expected ACCOUNT:DEBIT:CREDIT[:DESCRIPTION]")
    account_ref, debit_str, credit_str = parts[0], parts[1], parts[2]
    description = parts[3].strip() if len(parts) == 4 and parts[3].strip() else None

    account = resolve_account_or_exit(ctx, account_service, account_ref)
    debit = parse_money(debit_str) if debit_str.strip() else ZERO
    credit = parse_money(credit_str) if credit_str.strip() else ZERO
    return LineInput(account_id=account.id, debit=debit, credit=credit, description=description)


def _echo_entry(entry: JournalEntry, account_names: dict[int, str]) -> None:
    click.echo(f"\n{entry.entry_number}  {entry.transaction_date}  {entry.description or ''}")
    if entry.reference:
        click.echo(f"  Reference: {entry.reference}")
    if entry.reversal_of_id is not None:
        click.echo(f"  Reverses entry ID {entry.reversal_of_id}")
    click.echo("-" * 80)
    for line in entry.lines:
        name = account_names.get(line.account_id, str(line.account_id))
        debit = f"{line.debit:,.2f}" if line.debit else ""
        credit = f"{line.credit:,.2f}" if line.credit else ""
        click.echo(f"  {name:30s} {debit:>14s} {credit:>14s}  {line.description or ''}")
    click.echo("-" * 80)
    click.echo(f"  {'Total':30s} {entry.total_debit:>14,.2f} {entry.total_credit:>14,.2f}")


@click.group()
def journal_group():
    """Post and inspect journal entries."""
    pass


@journal_group.command("post")
@click.option("--date", "entry_date", default="today", help="Entry date (default: today)")
@click.option("--description", help="Entry description")
@click.option("--reference", help="Source document number (unique per tenant)")
@click.option(
    "--line",
    "line_specs",
    multiple=True,
    required=True,
    help="ACCOUNT:DEBIT:CREDIT[:DESCRIPTION]; repeat for each line",
)
@click.pass_context
def post_entry(ctx, entry_date: str, description: str | None, reference: str | None, line_specs):
    """Post a balanced journal entry.

    ACCOUNT can be an account code, ID or name.

    Examples:
        ledgerkit journal post --date 2024-03-01 --description "Owner investment" \\
            --line 1000:500: --line 3000::500
    """
    db = ctx.obj["db"]
    tenant_id = ctx.obj["tenant_id"]
    account_service = AccountService(db)
    writer = JournalWriter(db)

    try:
        parsed_date = parse_date(entry_date)
        lines = [parse_line_spec(ctx, account_service, spec) for spec in line_specs]
        entry = writer.post_entry(
            tenant_id, parsed_date, lines, description=description, reference=reference
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Posted {entry.entry_number} (ID: {entry.id}) for {entry.total_debit:,.2f}")


@journal_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD)")
@click.option("--end-date", help="End date (YYYY-MM-DD)")
@click.option("--limit", type=int, default=50, show_default=True, help="Maximum number of entries")
@click.pass_context
def list_entries(ctx, start_date: str | None, end_date: str | None, limit: int):
    """List journal entries, newest first."""
    writer = JournalWriter(ctx.obj["db"])
    try:
        start = parse_date(start_date) if start_date else None
        end = parse_date(end_date) if end_date else None
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    entries = writer.list_entries(ctx.obj["tenant_id"], start_date=start, end_date=end, limit=limit)
    if not entries:
        click.echo("No journal entries found.")
        return

    click.echo(f"\nFound {len(entries)} journal entr{'y' if len(entries) == 1 else 'ies'}:")
    click.echo("-" * 90)
    for entry in entries:
        click.echo(
            f"ID: {entry.id:4d} | {entry.entry_number} | {entry.transaction_date} | "
            f"{entry.total_debit:>12,.2f} | {entry.reference or '-':12s} | {entry.description or ''}"
        )


@journal_group.command("show")
@click.argument("entry_id", type=int)
@click.pass_context
def show_entry(ctx, entry_id: int):
    """Show a journal entry with its lines."""
    db = ctx.obj["db"]
    tenant_id = ctx.obj["tenant_id"]
    writer = JournalWriter(db)
    try:
        entry = writer.get_entry(tenant_id, entry_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    names = {acc.id: f"{acc.code} {acc.name}" for acc in AccountService(db).list_accounts(tenant_id)}
    _echo_entry(entry, names)


@journal_group.command("reverse")
@click.argument("entry_id", type=int)
@click.option("--date", "entry_date", help="Reversal date (default: original entry date)")
@click.option("--description", help="Reversal description")
@click.pass_context
def reverse_entry(ctx, entry_id: int, entry_date: str | None, description: str | None):
    """Reverse a posted journal entry with an offsetting entry."""
    writer = JournalWriter(ctx.obj["db"])
    try:
        parsed_date = parse_date(entry_date) if entry_date else None
        entry = writer.reverse_entry(
            ctx.obj["tenant_id"], entry_id, entry_date=parsed_date, description=description
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Posted reversal {entry.entry_number} (ID: {entry.id})")


def register_commands(cli):
    """Register journal commands with main CLI."""
    cli.add_command(journal_group, name="journal")
