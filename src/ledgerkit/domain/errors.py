"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist for the tenant."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class UnbalancedEntryError(ValidationError):
    """Journal lines do not balance: total debit differs from total credit."""

    def __init__(self, total_debit: Decimal, total_credit: Decimal):
        self.total_debit = total_debit
        self.total_credit = total_credit
        super().__init__(
            f"Entry is unbalanced: debit {total_debit} != credit {total_credit}"
        )


class IntegrityViolation(ConflictError):
    """Duplicate entry number or reference in the ledger.

    Never retried automatically: a retry could duplicate financial effects.
    """


class UnresolvedPartyLinkError(DomainError):
    """A customer or supplier has no ledger account.

    Soft error: statements report it in their payload instead of raising.
    """

    def __init__(self, entity_type: str, name: str):
        self.entity_type = entity_type
        self.name = name
        super().__init__(
            f"No ledger account is linked to {entity_type} '{name}'. "
            "Link an account to the party or post a document for it to create one."
        )


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def entry_not_found(entry_id: int) -> str:
    """Return message for missing journal entry."""
    return f"Journal entry {entry_id} not found"


def party_not_found(entity_type: str, party_id: int) -> str:
    """Return message for missing customer or supplier."""
    return f"{entity_type.capitalize()} {party_id} not found"


def duplicate_account_code(code: str) -> str:
    """Return message for duplicate account code."""
    return f"Account with code '{code}' already exists"


def duplicate_entry(entry_number: str, reference: str | None) -> str:
    """Return message for a ledger uniqueness collision."""
    if reference:
        return f"Journal entry {entry_number} collides with an existing entry for reference '{reference}'"
    return f"Journal entry number {entry_number} already exists"


def account_delete_blocked(account_id: int, child_count: int, line_count: int) -> str:
    """Return message when account has child accounts or journal lines."""
    parts = []
    if child_count > 0:
        parts.append(f"{child_count} child account{'s' if child_count != 1 else ''}")
    if line_count > 0:
        parts.append(f"{line_count} journal line{'s' if line_count != 1 else ''}")
    return (
        f"Cannot delete account {account_id}: it has {', '.join(parts)}. "
        "Posted activity is permanent; deactivate the account instead."
    )
