#!/usr/bin/env python3
"""Migration script to link customers and suppliers to their ledger accounts.

Older databases matched parties to accounts by name only. This migration:
- adds an account_id column to the customers and suppliers tables, if missing
- fills it for every party without a link, using the active account of the
  same tenant whose trimmed, case-insensitive name equals the party name

Parties without a matching account are left unlinked and listed; the next
document posted for them creates and links their account.

Usage:
    python migrations/migrate_link_party_accounts.py [--db-path PATH] [--database-url URL]
"""

import sys
from pathlib import Path

# Add src to path so we can import ledgerkit modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlalchemy import text, inspect
from ledgerkit.database.factories import create_database
from ledgerkit.database.models import Account, Customer, Supplier
from ledgerkit.domain.account import normalize_name


def column_exists(engine, table_name: str, column_name: str) -> bool:
    """Check if a column exists in a table."""
    inspector = inspect(engine)
    return column_name in [col["name"] for col in inspector.get_columns(table_name)]


def link_parties(session, model) -> tuple[int, list[str]]:
    """Link unlinked parties of one table to accounts with the same name.

    Returns:
        Tuple of (number of linked parties, names left unlinked)
    """
    index: dict[tuple[str, str], int] = {}
    accounts = session.query(Account).filter(Account.is_active.is_(True)).order_by(Account.code).all()
    for acc in accounts:
        index.setdefault((acc.tenant_id, normalize_name(acc.name)), acc.id)

    linked = 0
    unmatched = []
    for party in session.query(model).filter(model.account_id.is_(None)).all():
        account_id = index.get((party.tenant_id, normalize_name(party.name)))
        if account_id is None:
            unmatched.append(f"{party.tenant_id}/{party.name}")
            continue
        party.account_id = account_id
        linked += 1
    return linked, unmatched


def migrate_database(database_path: str | None = None, database_url: str | None = None) -> None:
    """Add party account links and backfill them by name.

    Raises:
        Exception: If migration fails
    """
    db = create_database(database_url=database_url, database_path=database_path)
    db.connect()

    try:
        session = db.session_factory()
        try:
            engine = session.bind
            if engine is None:
                raise Exception("Could not get database engine from session")
        finally:
            session.close()

        print("Starting migration: linking parties to ledger accounts...")

        for table in ("customers", "suppliers"):
            if not column_exists(engine, table, "account_id"):
                with engine.begin() as conn:
                    conn.execute(
                        text(f"ALTER TABLE {table} ADD COLUMN account_id INTEGER REFERENCES accounts(id)")
                    )
                print(f"  Added column: {table}.account_id")

        session = db.session_factory()
        try:
            for label, model in (("customer", Customer), ("supplier", Supplier)):
                linked, unmatched = link_parties(session, model)
                print(f"  Linked {linked} {label}(s)")
                for name in unmatched:
                    print(f"  No account found for {label} {name}")
            session.commit()
        finally:
            session.close()

        print("Migration completed successfully!")

    except Exception as e:
        print(f"Migration failed: {e}")
        raise
    finally:
        db.disconnect()


def main():
    """Main entry point for migration script."""
    import argparse

    parser = argparse.ArgumentParser(description="Link customers and suppliers to ledger accounts")
    parser.add_argument(
        "--db-path",
        type=str,
        help="Path to database file (overrides LEDGERKIT_DB_PATH environment variable)",
    )
    parser.add_argument(
        "--database-url",
        type=str,
        help="SQLAlchemy database URL (overrides LEDGERKIT_DATABASE_URL environment variable)",
    )
    args = parser.parse_args()

    try:
        migrate_database(database_path=args.db_path, database_url=args.database_url)
        return 0
    except Exception as e:
        print(f"\nMigration failed: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
