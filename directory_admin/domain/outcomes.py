"""Result values for sign-in and password-reset operations.

Lockout, inactive accounts and reset-token states are expected outcomes, so
the account security service returns them as values. The HTTP layer decides
how each failure is reported.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from directory_admin.domain.accounts import Account, AccountKind


class LoginFailureReason(str, Enum):
    INVALID_CREDENTIALS = "invalid_credentials"
    INACTIVE = "inactive"
    LOCKED = "locked"
    LOCKED_OUT = "locked_out"  # this attempt tripped the lock


@dataclass(frozen=True, slots=True)
class LoginSuccess:
    token: str
    account: Account
    kind: AccountKind
    user: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class LoginFailure:
    reason: LoginFailureReason
    message: str
    attempts_remaining: int | None = None


LoginOutcome = LoginSuccess | LoginFailure


class ResetTokenRejection(str, Enum):
    NOT_FOUND = "not_found"
    USED = "used"
    EXPIRED = "expired"


@dataclass(frozen=True, slots=True)
class ResetTokenValid:
    email: str
    kind: AccountKind
    token_id: int


@dataclass(frozen=True, slots=True)
class ResetTokenRejected:
    reason: ResetTokenRejection
    message: str


ResetTokenCheck = ResetTokenValid | ResetTokenRejected


@dataclass(frozen=True, slots=True)
class PendingResetEmail:
    """A reset token that still has to be mailed to its owner."""

    email: str
    raw_token: str
    kind: AccountKind
