"""Customers and suppliers, each linked to a ledger account."""

from typing import Optional

from ledgerkit.database.base import Database
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.entities import Account, AccountType, Party, PartyType
from ledgerkit.domain.errors import NotFoundError, ValidationError, party_not_found

# Account type and code prefix of accounts created for parties
PARTY_ACCOUNT_DEFAULTS = {
    PartyType.CUSTOMER: (AccountType.ASSET, "102"),
    PartyType.SUPPLIER: (AccountType.LIABILITY, "201"),
}


def parse_party_type(value: str | PartyType) -> PartyType:
    """Parse a party type name ('customer' or 'supplier').

    Raises:
        ValidationError: If the value is not a party type
    """
    try:
        return PartyType(value.strip().lower() if isinstance(value, str) else value)
    except ValueError:
        raise ValidationError(f"Unknown entity type '{value}'. Expected 'customer' or 'supplier'")


class PartyService:
    """Service for managing customers and suppliers."""

    def __init__(self, db: Database):
        """Initialize party service.

        Args:
            db: Database instance
        """
        self.db = db
        self.account_service = AccountService(db)

    def create_customer(self, tenant_id: str, name: str, account_id: Optional[int] = None) -> Party:
        """Create a customer linked to a receivable account."""
        return self._create_party(tenant_id, PartyType.CUSTOMER, name, account_id)

    def create_supplier(self, tenant_id: str, name: str, account_id: Optional[int] = None) -> Party:
        """Create a supplier linked to a payable account."""
        return self._create_party(tenant_id, PartyType.SUPPLIER, name, account_id)

    def _create_party(
        self, tenant_id: str, party_type: PartyType, name: str, account_id: Optional[int]
    ) -> Party:
        name = " ".join((name or "").split())
        if not name:
            raise ValidationError(f"{party_type.value.capitalize()} name is required")

        if account_id is not None:
            self.account_service.require_account(tenant_id, account_id)
        else:
            account_id = self._default_account(tenant_id, party_type, name).id

        party_id = self.db.create_party(tenant_id, party_type, name, account_id=account_id)
        return self.require_party(tenant_id, party_type, party_id)

    def _default_account(self, tenant_id: str, party_type: PartyType, name: str) -> Account:
        # Each party gets its own account, even when another account has the same name
        account_type, prefix = PARTY_ACCOUNT_DEFAULTS[party_type]
        return self.account_service.create_auto_account(tenant_id, name, account_type, code_prefix=prefix)

    def get_party(self, tenant_id: str, party_type: str | PartyType, party_id: int) -> Optional[Party]:
        """Get customer or supplier by ID, or None."""
        return self.db.get_party(tenant_id, parse_party_type(party_type), party_id)

    def require_party(self, tenant_id: str, party_type: str | PartyType, party_id: int) -> Party:
        """Get customer or supplier by ID.

        Raises:
            NotFoundError: If the party does not exist in the tenant
        """
        party_type = parse_party_type(party_type)
        party = self.db.get_party(tenant_id, party_type, party_id)
        if party is None:
            raise NotFoundError(party_not_found(party_type.value, party_id))
        return party

    def list_parties(self, tenant_id: str, party_type: str | PartyType) -> list[Party]:
        """List customers or suppliers ordered by name."""
        return self.db.list_parties(tenant_id, parse_party_type(party_type))

    def linked_account_ids(self, tenant_id: str) -> set[int]:
        """IDs of the accounts customers and suppliers are linked to."""
        return {
            party.account_id
            for party_type in PartyType
            for party in self.db.list_parties(tenant_id, party_type)
            if party.account_id is not None
        }

    def resolve_party_account(self, tenant_id: str, party: Party) -> Optional[Account]:
        """Find the ledger account of a party without creating one.

        The explicit link wins. Parties created before links existed fall
        back to an account with the same trimmed, case-insensitive name.
        """
        if party.account_id is not None:
            account = self.db.get_account(tenant_id, party.account_id)
            if account is not None:
                return account
        return self.account_service.find_account_by_name(tenant_id, party.name)

    def ensure_party_account(self, tenant_id: str, party: Party) -> Account:
        """Return the party's ledger account, creating and linking it if missing."""
        account = self.resolve_party_account(tenant_id, party)
        if account is None:
            account = self._default_account(tenant_id, party.party_type, party.name)
        if party.account_id != account.id:
            self.db.set_party_account(tenant_id, party.party_type, party.id, account.id)
        return account
