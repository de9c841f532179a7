"""Bearer token authorization.

`authorize` never raises for a bad token or account; it returns either a
Principal or an AuthFailure and leaves the reporting to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Collection
from dataclasses import dataclass
from enum import Enum

from sqlalchemy.orm import Session

import directory_admin.repositories.account as account_repo
from directory_admin.core.security import TokenIssuer
from directory_admin.domain.accounts import ACTIVE, Account, AccountKind

logger = logging.getLogger(__name__)


class AuthFailureReason(str, Enum):
    MISSING_TOKEN = "missing_token"
    INVALID_TOKEN = "invalid_token"
    WRONG_TIER = "wrong_tier"
    ACCOUNT_NOT_FOUND = "account_not_found"
    ACCOUNT_INACTIVE = "account_inactive"

    @property
    def status_code(self) -> int:
        if self in (AuthFailureReason.WRONG_TIER, AuthFailureReason.ACCOUNT_INACTIVE):
            return 403
        return 401


FAILURE_MESSAGES = {
    AuthFailureReason.MISSING_TOKEN: "No token provided",
    AuthFailureReason.INVALID_TOKEN: "Invalid or expired token",
    AuthFailureReason.ACCOUNT_NOT_FOUND: "Account not found",
    AuthFailureReason.ACCOUNT_INACTIVE: "Account is inactive",
}

TIER_MESSAGES = {
    frozenset({AccountKind.SUPER_ADMIN}): "Access denied. Super admin privileges required.",
    frozenset({AccountKind.ADMIN}): "Access denied. Admin privileges required.",
}


@dataclass(frozen=True, slots=True)
class Principal:
    """The account a request is acting as, re-read from the database."""

    account: Account
    kind: AccountKind

    @property
    def id(self) -> int:
        return self.account.id


@dataclass(frozen=True, slots=True)
class AuthFailure:
    reason: AuthFailureReason
    message: str

    @property
    def status_code(self) -> int:
        return self.reason.status_code


AuthResult = Principal | AuthFailure


def _fail(reason: AuthFailureReason, allowed: frozenset[AccountKind] | None = None) -> AuthFailure:
    if reason is AuthFailureReason.WRONG_TIER:
        message = TIER_MESSAGES.get(allowed, "Access denied")
    else:
        message = FAILURE_MESSAGES[reason]
    return AuthFailure(reason, message)


def authorize(
    token: str | None,
    tokens: TokenIssuer,
    db: Session,
    allowed_kinds: Collection[AccountKind] = (AccountKind.SUPER_ADMIN, AccountKind.ADMIN),
) -> AuthResult:
    """
    Resolve a bearer token to an active account of one of the allowed kinds.

    Every successful call reads the account, so a deactivated or deleted
    account loses access even while its token is still valid.
    """
    allowed = frozenset(allowed_kinds)
    if not token:
        return _fail(AuthFailureReason.MISSING_TOKEN)

    claims = tokens.decode(token)
    if claims is None:
        return _fail(AuthFailureReason.INVALID_TOKEN)

    kind = AccountKind.from_claim(claims.get("user_type"))
    try:
        account_id = int(claims.get("sub"))
    except (TypeError, ValueError):
        account_id = None
    if kind is None or account_id is None:
        return _fail(AuthFailureReason.INVALID_TOKEN)

    if kind not in allowed:
        return _fail(AuthFailureReason.WRONG_TIER, allowed)

    account = account_repo.get_account_by_id(db, kind, account_id)
    if account is None:
        logger.info("Token for missing %s %s rejected", kind.value, account_id)
        return _fail(AuthFailureReason.ACCOUNT_NOT_FOUND)
    if account.status != ACTIVE:
        logger.info("Token for inactive %s %s rejected", kind.value, account_id)
        return _fail(AuthFailureReason.ACCOUNT_INACTIVE)

    return Principal(account=account, kind=kind)
