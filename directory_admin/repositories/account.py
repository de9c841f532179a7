"""Data access shared by both account kinds (super admins and admin users)."""

from datetime import datetime

from sqlalchemy.orm import Session

from directory_admin.domain.accounts import ACTIVE, Account, AccountKind


def get_account_by_email(db: Session, kind: AccountKind, email: str) -> Account | None:
    """Get an account by exact email match within one kind."""
    model = kind.model
    return db.query(model).filter(model.email == email).first()


def get_active_account_by_email(db: Session, kind: AccountKind, email: str) -> Account | None:
    model = kind.model
    return db.query(model).filter(model.email == email, model.status == ACTIVE).first()


def get_account_by_id(db: Session, kind: AccountKind, account_id: int) -> Account | None:
    model = kind.model
    return db.query(model).filter(model.id == account_id).first()


def email_taken(
    db: Session, kind: AccountKind, email: str, exclude_id: int | None = None
) -> bool:
    """Check whether another account of this kind already uses the email."""
    model = kind.model
    query = db.query(model.id).filter(model.email == email)
    if exclude_id is not None:
        query = query.filter(model.id != exclude_id)
    return query.first() is not None


def record_failed_login(
    db: Session, account: Account, failed_attempts: int, locked_until: datetime | None
) -> Account:
    """Persist the failure counter and, once the limit is hit, the lock expiry."""
    account.failed_login_attempts = failed_attempts
    if locked_until is not None:
        account.account_locked_until = locked_until
    db.commit()
    db.refresh(account)
    return account


def record_successful_login(db: Session, account: Account, at: datetime) -> Account:
    account.last_login = at
    account.failed_login_attempts = 0
    account.account_locked_until = None
    db.commit()
    db.refresh(account)
    return account


def update_password(
    db: Session,
    account: Account,
    password_hash: str,
    clear_lockout: bool = False,
    commit: bool = True,
) -> Account:
    """
    Overwrite the password hash; a reset also clears the lockout state.

    With commit=False the change is only flushed so the caller can commit it
    together with other writes.
    """
    account.password_hash = password_hash
    if clear_lockout:
        account.failed_login_attempts = 0
        account.account_locked_until = None
        if hasattr(account, "password_reset_token"):
            account.password_reset_token = None
            account.password_reset_expires = None
    if not commit:
        db.flush()
        return account
    db.commit()
    db.refresh(account)
    return account
