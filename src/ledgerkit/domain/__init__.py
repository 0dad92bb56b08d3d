"""Domain layer for ledgerkit.

Services live in their own modules (``ledgerkit.domain.journal`` and so on)
and are imported from there; this package only re-exports the entities and
errors, which have no database dependency.
"""

from ledgerkit.domain.entities import (
    Account,
    AccountStatement,
    AccountType,
    IncomeStatement,
    JournalEntry,
    LineInput,
    Party,
    PartyType,
    SignConvention,
    SyncReport,
)
from ledgerkit.domain.errors import (
    ConflictError,
    DependencyError,
    DomainError,
    IntegrityViolation,
    NotFoundError,
    UnbalancedEntryError,
    UnresolvedPartyLinkError,
    ValidationError,
)

__all__ = [
    "Account",
    "AccountStatement",
    "AccountType",
    "IncomeStatement",
    "JournalEntry",
    "LineInput",
    "Party",
    "PartyType",
    "SignConvention",
    "SyncReport",
    "ConflictError",
    "DependencyError",
    "DomainError",
    "IntegrityViolation",
    "NotFoundError",
    "UnbalancedEntryError",
    "UnresolvedPartyLinkError",
    "ValidationError",
]
