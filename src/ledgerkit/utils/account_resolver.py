"""Resolve account references typed by operators."""

from ledgerkit.domain.account import AccountService
from ledgerkit.domain.entities import Account
from ledgerkit.domain.errors import NotFoundError


def resolve_account(account_service: AccountService, tenant_id: str, account: str | int) -> Account:
    """Resolve an account code, ID or name to an account.

    Codes are tried first since they are often numeric, then IDs, then
    names (trimmed, case-insensitive).

    Raises:
        NotFoundError: If nothing matches
    """
    if isinstance(account, int):
        return account_service.require_account(tenant_id, account)

    ref = account.strip()
    by_code = account_service.get_account_by_code(tenant_id, ref)
    if by_code is not None:
        return by_code

    if ref.isdigit():
        by_id = account_service.get_account(tenant_id, int(ref))
        if by_id is not None:
            return by_id

    by_name = account_service.find_account_by_name(tenant_id, ref)
    if by_name is not None:
        return by_name

    raise NotFoundError(f"Account '{account}' not found")
