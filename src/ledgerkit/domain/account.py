"""Account registry: chart of accounts and sign convention."""

from decimal import Decimal
from typing import Collection, Iterable, Optional

from ledgerkit.database.base import Database
from ledgerkit.domain.entities import (
    Account as AccountEntity,
    AccountTreeNode,
    AccountType,
    SignConvention,
)
from ledgerkit.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    account_delete_blocked,
    account_not_found,
    duplicate_account_code,
)
from ledgerkit.logging_config import get_logger

logger = get_logger("domain.account")

DEBIT_NATURED = frozenset({AccountType.ASSET, AccountType.EXPENSE})

# Code prefixes for accounts synthesized by find-or-create
AUTO_CODE_PREFIXES = {
    AccountType.ASSET: "102",
    AccountType.LIABILITY: "201",
    AccountType.EQUITY: "301",
    AccountType.REVENUE: "401",
    AccountType.INCOME: "401",
    AccountType.EXPENSE: "501",
}

DEFAULT_ACCOUNTS = [
    ("1000", "Assets", AccountType.ASSET),
    ("2000", "Liabilities", AccountType.LIABILITY),
    ("3000", "Equity", AccountType.EQUITY),
    ("4000", "Revenue", AccountType.REVENUE),
    ("5000", "Expenses", AccountType.EXPENSE),
]


def parse_account_type(value: str | AccountType) -> AccountType:
    """Parse an account type name.

    Raises:
        ValidationError: If the type is not a known account type
    """
    try:
        return AccountType(value.strip().lower() if isinstance(value, str) else value)
    except ValueError:
        valid = ", ".join(t.value for t in AccountType)
        raise ValidationError(f"Unknown account type '{value}'. Valid types: {valid}")


def resolve_sign(account_type: str | AccountType) -> SignConvention:
    """Return the sign convention of an account type.

    Asset and expense accounts grow with debits; liability, equity, revenue
    and income accounts grow with credits.
    """
    if parse_account_type(account_type) in DEBIT_NATURED:
        return SignConvention.DEBIT_POSITIVE
    return SignConvention.CREDIT_POSITIVE


def signed_amount(convention: SignConvention, debit: Decimal, credit: Decimal) -> Decimal:
    """Net effect of a debit/credit movement on a balance with this convention."""
    if convention == SignConvention.DEBIT_POSITIVE:
        return debit - credit
    return credit - debit


def normalize_name(name: str) -> str:
    """Normalize an account or party name for matching."""
    return " ".join(name.split()).casefold()


class AccountService:
    """Service for managing the chart of accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        tenant_id: str,
        code: str,
        name: str,
        account_type: str | AccountType,
        parent_id: Optional[int] = None,
    ) -> int:
        """Create an account.

        Args:
            tenant_id: Owning tenant
            code: Account code, unique per tenant
            name: Account name
            account_type: One of asset, liability, equity, revenue, income, expense
            parent_id: Optional parent account ID (same tenant)

        Returns:
            Account ID

        Raises:
            ValidationError: If code/name are blank or the type is unknown
            ConflictError: If the code is already used in the tenant
            NotFoundError: If the parent account does not exist
        """
        code = (code or "").strip()
        name = (name or "").strip()
        if not code:
            raise ValidationError("Account code is required")
        if not name:
            raise ValidationError("Account name is required")
        parsed_type = parse_account_type(account_type)

        if self.db.get_account_by_code(tenant_id, code) is not None:
            raise ConflictError(duplicate_account_code(code))

        # Parents must already exist, which keeps the tree acyclic
        if parent_id is not None and self.db.get_account(tenant_id, parent_id) is None:
            raise NotFoundError(f"Parent account {parent_id} not found")

        return self.db.create_account(
            tenant_id=tenant_id,
            code=code,
            name=name,
            account_type=parsed_type.value,
            parent_id=parent_id,
        )

    def get_account(self, tenant_id: str, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID, or None if not found."""
        return self.db.get_account(tenant_id, account_id)

    def require_account(self, tenant_id: str, account_id: int) -> AccountEntity:
        """Get account by ID.

        Raises:
            NotFoundError: If the account does not exist in the tenant
        """
        account = self.db.get_account(tenant_id, account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def get_account_by_code(self, tenant_id: str, code: str) -> Optional[AccountEntity]:
        """Get account by code, or None if not found."""
        return self.db.get_account_by_code(tenant_id, code.strip())

    def list_accounts(self, tenant_id: str, include_inactive: bool = True) -> list[AccountEntity]:
        """List accounts ordered by code."""
        return self.db.list_accounts(tenant_id, include_inactive=include_inactive)

    def find_account_by_name(self, tenant_id: str, name: str) -> Optional[AccountEntity]:
        """Find an active account whose trimmed, case-insensitive name matches."""
        target = normalize_name(name)
        for account in self.db.list_accounts(tenant_id, include_inactive=False):
            if normalize_name(account.name) == target:
                return account
        return None

    def find_account_by_keywords(
        self,
        tenant_id: str,
        keywords: Iterable[str],
        account_type: Optional[AccountType] = None,
        exclude_ids: Collection[int] = (),
    ) -> Optional[AccountEntity]:
        """Find the active account whose name best matches a keyword.

        An account named exactly like a keyword wins over one whose name only
        contains a keyword. Within each group the lowest code wins.

        Args:
            tenant_id: Owning tenant
            keywords: Lowercase or mixed-case name fragments
            account_type: Only consider accounts of this type
            exclude_ids: Accounts never to return, e.g. those linked to parties
        """
        lowered = [normalize_name(k) for k in keywords]
        candidates = [
            account
            for account in self.db.list_accounts(tenant_id, include_inactive=False)
            if account.id not in exclude_ids
            and (account_type is None or account.type == account_type)
        ]
        for account in candidates:
            if normalize_name(account.name) in lowered:
                return account
        for account in candidates:
            name = normalize_name(account.name)
            if any(keyword in name for keyword in lowered):
                return account
        return None

    def find_or_create_account_by_name(
        self,
        tenant_id: str,
        name: str,
        default_type: str | AccountType,
        code_prefix: Optional[str] = None,
    ) -> AccountEntity:
        """Return the active account with a matching name, creating it if missing.

        Args:
            tenant_id: Owning tenant
            name: Account name, matched trimmed and case-insensitively
            default_type: Type for a newly created account
            code_prefix: Prefix of the synthesized code (defaults by type)

        Returns:
            Existing or newly created account
        """
        if not name or not name.strip():
            raise ValidationError("Account name is required")

        existing = self.find_account_by_name(tenant_id, name)
        if existing is not None:
            return existing
        return self.create_auto_account(tenant_id, name, default_type, code_prefix=code_prefix)

    def create_auto_account(
        self,
        tenant_id: str,
        name: str,
        account_type: str | AccountType,
        code_prefix: Optional[str] = None,
    ) -> AccountEntity:
        """Create an account with a synthesized ``<prefix>-NNNN`` code.

        No name matching happens here, so the new account is never shared
        with an existing one of the same name.
        """
        if not name or not name.strip():
            raise ValidationError("Account name is required")

        account_type = parse_account_type(account_type)
        prefix = code_prefix or AUTO_CODE_PREFIXES[account_type]
        code = self._next_code(tenant_id, prefix)
        account_id = self.db.create_account(
            tenant_id=tenant_id,
            code=code,
            name=" ".join(name.split()),
            account_type=account_type.value,
        )
        logger.info(
            "account_auto_created",
            extra={"tenant_id": tenant_id, "account_id": account_id, "code": code},
        )
        return self.require_account(tenant_id, account_id)

    def _next_code(self, tenant_id: str, prefix: str) -> str:
        """Synthesize the next free ``<prefix>-NNNN`` code."""
        used = {acc.code for acc in self.db.list_accounts(tenant_id)}
        seq = 1
        while f"{prefix}-{seq:04d}" in used:
            seq += 1
        return f"{prefix}-{seq:04d}"

    def get_chart_of_accounts(self, tenant_id: str) -> list[AccountTreeNode]:
        """Get the chart of accounts as a tree of root accounts."""
        accounts = self.db.list_accounts(tenant_id)
        known_ids = {acc.id for acc in accounts}

        def build_tree(parent_id: Optional[int]) -> tuple[AccountTreeNode, ...]:
            nodes = []
            for acc in accounts:
                # Accounts whose parent vanished are shown as roots
                effective_parent = acc.parent_id if acc.parent_id in known_ids else None
                if effective_parent == parent_id:
                    nodes.append(
                        AccountTreeNode(
                            id=acc.id,
                            code=acc.code,
                            name=acc.name,
                            type=acc.type,
                            parent_id=acc.parent_id,
                            is_active=acc.is_active,
                            children=build_tree(acc.id),
                        )
                    )
            return tuple(nodes)

        return list(build_tree(None))

    def deactivate_account(self, tenant_id: str, account_id: int) -> None:
        """Deactivate an account so name matching and posting skip it."""
        self.require_account(tenant_id, account_id)
        self.db.set_account_active(tenant_id, account_id, False)

    def delete_account(self, tenant_id: str, account_id: int) -> None:
        """Delete an account.

        Raises:
            NotFoundError: If the account does not exist
            DependencyError: If the account has child accounts or journal lines
        """
        self.require_account(tenant_id, account_id)

        child_count = self.db.get_account_child_count(tenant_id, account_id)
        line_count = self.db.get_account_line_count(tenant_id, account_id)
        if child_count > 0 or line_count > 0:
            raise DependencyError(account_delete_blocked(account_id, child_count, line_count))

        self.db.delete_account(tenant_id, account_id)

    def seed_default_accounts(self, tenant_id: str) -> list[int]:
        """Create the missing default root accounts.

        Returns:
            IDs of the accounts created by this call
        """
        created = []
        for code, name, account_type in DEFAULT_ACCOUNTS:
            if self.db.get_account_by_code(tenant_id, code) is None:
                created.append(self.create_account(tenant_id, code, name, account_type))
        return created
