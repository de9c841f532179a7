"""Account security: login with lockout, password reset token lifecycle, password changes."""

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

import directory_admin.repositories.account as account_repo
import directory_admin.repositories.password_reset as reset_repo
from directory_admin.core.security import (
    ACCOUNT_PASSWORD_MIN_LENGTH,
    TokenIssuer,
    as_utc,
    generate_reset_token,
    get_password_hash,
    hash_reset_token,
    utcnow,
    validate_password,
    verify_password,
)
from directory_admin.domain.accounts import (
    ACTIVE,
    RESOLUTION_ORDER,
    Account,
    AccountKind,
    public_summary,
    token_claims,
)
from directory_admin.domain.lockout import LockoutPolicy
from directory_admin.domain.outcomes import (
    LoginFailure,
    LoginFailureReason,
    LoginOutcome,
    LoginSuccess,
    PendingResetEmail,
    ResetTokenCheck,
    ResetTokenRejected,
    ResetTokenRejection,
    ResetTokenValid,
)
from directory_admin.errors import DomainValidationError, UnauthorizedError

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
RESET_ACKNOWLEDGEMENT = "If an account exists with this email, a password reset link has been sent."

# The generic reset flow has always accepted shorter passwords than the
# super-admin self-service flow. Both go through reset_password().
GENERIC_RESET_MIN_LENGTH = 6
SUPER_ADMIN_RESET_MIN_LENGTH = 8


class AccountSecurity:
    """Sign-in and credential lifecycle for super admins and admin users."""

    def __init__(
        self,
        db: Session,
        tokens: TokenIssuer,
        lockout: LockoutPolicy | None = None,
        reset_token_ttl_minutes: int = 60,
    ) -> None:
        self.db = db
        self.tokens = tokens
        self.lockout = lockout or LockoutPolicy()
        self.reset_token_ttl_minutes = reset_token_ttl_minutes

    # ------------------------------------------------------------------
    # Login
    # ------------------------------------------------------------------

    def login(
        self, email: str, password: str, kind: AccountKind, now: datetime | None = None
    ) -> LoginOutcome:
        """
        Verify credentials for one account kind.

        Order of checks: unknown email, inactive account, active lock, password.
        The failure counter only moves for a wrong password on an active,
        unlocked account.
        """
        moment = now or utcnow()
        account = account_repo.get_account_by_email(self.db, kind, email)
        if account is None:
            return LoginFailure(LoginFailureReason.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE)

        if account.status != ACTIVE:
            return LoginFailure(LoginFailureReason.INACTIVE, "Account is inactive")

        locked_until = as_utc(account.account_locked_until)
        if self.lockout.is_locked(locked_until, moment):
            minutes = self.lockout.remaining_minutes(locked_until, moment)
            return LoginFailure(
                LoginFailureReason.LOCKED,
                f"Account is locked. Please try again in {minutes} minutes.",
            )

        if not verify_password(password, account.password_hash):
            return self._register_failure(account, kind, moment)

        account_repo.record_successful_login(self.db, account, moment)
        token = self.tokens.issue(token_claims(account, kind), now=moment)
        logger.info("%s %s signed in", kind.value, account.id)
        return LoginSuccess(
            token=token,
            account=account,
            kind=kind,
            user=public_summary(account, kind),
        )

    def login_any(self, email: str, password: str, now: datetime | None = None) -> LoginOutcome:
        """Resolve the account kind from the email, then log in as that kind."""
        kind = self.resolve_kind(email)
        if kind is None:
            return LoginFailure(LoginFailureReason.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE)
        return self.login(email, password, kind, now=now)

    def resolve_kind(self, email: str, active_only: bool = False) -> AccountKind | None:
        lookup = (
            account_repo.get_active_account_by_email
            if active_only
            else account_repo.get_account_by_email
        )
        for kind in RESOLUTION_ORDER:
            if lookup(self.db, kind, email) is not None:
                return kind
        return None

    def _register_failure(self, account: Account, kind: AccountKind, moment: datetime) -> LoginFailure:
        attempts, locked_until = self.lockout.register_failure(
            account.failed_login_attempts or 0, moment
        )
        account_repo.record_failed_login(self.db, account, attempts, locked_until)

        if locked_until is not None:
            logger.warning(
                "%s %s locked after %d failed login attempts", kind.value, account.id, attempts
            )
            return LoginFailure(
                LoginFailureReason.LOCKED_OUT,
                "Account locked due to too many failed login attempts. "
                f"Please try again in {self.lockout.lockout_minutes} minutes.",
            )

        remaining = self.lockout.attempts_remaining(attempts)
        logger.info("Failed login for %s %s (%d/%d)", kind.value, account.id, attempts, self.lockout.max_attempts)
        return LoginFailure(
            LoginFailureReason.INVALID_CREDENTIALS,
            f"{INVALID_CREDENTIALS_MESSAGE}. {remaining} attempts remaining.",
            attempts_remaining=remaining,
        )

    # ------------------------------------------------------------------
    # Password reset
    # ------------------------------------------------------------------

    def request_password_reset(
        self,
        email: str,
        kinds: Iterable[AccountKind] = RESOLUTION_ORDER,
        now: datetime | None = None,
    ) -> PendingResetEmail | None:
        """
        Issue a reset token for an active account with this email.

        Returns the email still to be sent, or None when nothing matched. Callers
        must answer identically in both cases.
        """
        moment = now or utcnow()
        kind = None
        for candidate in kinds:
            if account_repo.get_active_account_by_email(self.db, candidate, email) is not None:
                kind = candidate
                break
        if kind is None:
            logger.info("Password reset requested for unknown or inactive email")
            return None

        raw_token = generate_reset_token()
        reset_repo.create_reset_token(
            self.db,
            email=email,
            token_hash=hash_reset_token(raw_token),
            user_type=kind.value,
            expires_at=moment + timedelta(minutes=self.reset_token_ttl_minutes),
        )
        logger.info("Issued password reset token for a %s account", kind.value)
        return PendingResetEmail(email=email, raw_token=raw_token, kind=kind)

    def verify_reset_token(self, raw_token: str, now: datetime | None = None) -> ResetTokenCheck:
        """Check a raw token without consuming it."""
        moment = now or utcnow()
        row = reset_repo.get_reset_token_by_hash(self.db, hash_reset_token(raw_token))
        if row is None:
            return ResetTokenRejected(ResetTokenRejection.NOT_FOUND, "Invalid or expired reset token")
        if row.used:
            return ResetTokenRejected(ResetTokenRejection.USED, "This reset token has already been used")
        if as_utc(row.expires_at) < moment:
            return ResetTokenRejected(ResetTokenRejection.EXPIRED, "Reset token has expired")

        kind = AccountKind.from_claim(row.user_type)
        if kind is None:
            return ResetTokenRejected(ResetTokenRejection.NOT_FOUND, "Invalid or expired reset token")
        return ResetTokenValid(email=row.email, kind=kind, token_id=row.id)

    def reset_password(
        self,
        raw_token: str,
        new_password: str,
        min_length: int = GENERIC_RESET_MIN_LENGTH,
        kinds: Iterable[AccountKind] | None = None,
        now: datetime | None = None,
    ) -> ResetTokenCheck:
        """
        Consume a reset token and set a new password.

        The password overwrite, lockout clear, token claim and sibling cleanup
        are committed together; any failure rolls all of them back.

        Raises:
            DomainValidationError: If the new password is too short.
        """
        is_valid, error_message = validate_password(new_password, min_length)
        if not is_valid:
            raise DomainValidationError(error_message)

        check = self.verify_reset_token(raw_token, now=now)
        if isinstance(check, ResetTokenRejected):
            return check
        if kinds is not None and check.kind not in tuple(kinds):
            return ResetTokenRejected(ResetTokenRejection.NOT_FOUND, "Invalid or expired reset token")

        account = account_repo.get_account_by_email(self.db, check.kind, check.email)
        if account is None:
            return ResetTokenRejected(ResetTokenRejection.NOT_FOUND, "Invalid or expired reset token")

        account_id = account.id
        try:
            if not reset_repo.claim_reset_token(self.db, check.token_id):
                self.db.rollback()
                return ResetTokenRejected(
                    ResetTokenRejection.USED, "This reset token has already been used"
                )
            account_repo.update_password(
                self.db,
                account,
                get_password_hash(new_password),
                clear_lockout=True,
                commit=False,
            )
            removed = reset_repo.delete_sibling_tokens(self.db, check.email, check.token_id)
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception("Password reset for %s %s rolled back", check.kind.value, account_id)
            raise

        logger.info(
            "Password reset for %s %s; %d stale reset tokens removed",
            check.kind.value,
            account_id,
            removed,
        )
        return check

    # ------------------------------------------------------------------
    # Password change
    # ------------------------------------------------------------------

    def change_password(self, account: Account, current_password: str, new_password: str) -> Account:
        """
        Change a password after re-verifying the current one.

        Raises:
            DomainValidationError: If the new password is too short.
            UnauthorizedError: If the current password does not match.
        """
        is_valid, error_message = validate_password(
            new_password, ACCOUNT_PASSWORD_MIN_LENGTH, label="New password"
        )
        if not is_valid:
            raise DomainValidationError(error_message)

        if not verify_password(current_password, account.password_hash):
            raise UnauthorizedError("Current password is incorrect")

        return account_repo.update_password(self.db, account, get_password_hash(new_password))
