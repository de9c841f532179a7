from datetime import datetime

from sqlalchemy.orm import Session

from directory_admin.db.models.password_reset_token import PasswordResetToken


def create_reset_token(
    db: Session, email: str, token_hash: str, user_type: str, expires_at: datetime
) -> PasswordResetToken:
    """Store the digest of a freshly issued reset token."""
    row = PasswordResetToken(
        email=email,
        token_hash=token_hash,
        user_type=user_type,
        expires_at=expires_at,
        used=False,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def get_reset_token_by_hash(db: Session, token_hash: str) -> PasswordResetToken | None:
    return (
        db.query(PasswordResetToken)
        .filter(PasswordResetToken.token_hash == token_hash)
        .first()
    )


def claim_reset_token(db: Session, token_id: int) -> bool:
    """
    Flip the token to used unless another request already did.

    Stages the UPDATE without committing; the caller owns the transaction.
    Returns False when the token was already used.
    """
    claimed = (
        db.query(PasswordResetToken)
        .filter(PasswordResetToken.id == token_id, PasswordResetToken.used.is_(False))
        .update({PasswordResetToken.used: True}, synchronize_session=False)
    )
    return claimed == 1


def delete_sibling_tokens(db: Session, email: str, keep_id: int) -> int:
    """Stage deletion of every other token issued for the same email. Returns the count."""
    return (
        db.query(PasswordResetToken)
        .filter(
            PasswordResetToken.email == email,
            PasswordResetToken.id != keep_id,
        )
        .delete(synchronize_session=False)
    )
