import hashlib
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from email_validator import EmailNotValidError, validate_email
from passlib.context import CryptContext

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ACCOUNT_PASSWORD_MIN_LENGTH = 8


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    """Treat naive datetimes read back from the database as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def validate_password(
    password: str, min_length: int = ACCOUNT_PASSWORD_MIN_LENGTH, label: str = "Password"
) -> tuple[bool, str | None]:
    """
    Validate that a password is long enough.

    Returns: (is_valid, error_message)
    """
    if len(password) < min_length:
        return False, f"{label} must be at least {min_length} characters long"
    return True, None


def is_valid_email(email: str) -> bool:
    """Syntax check only; no DNS lookups."""
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def generate_reset_token() -> str:
    """Return a random 256-bit token, hex encoded. Only its digest is ever stored."""
    return secrets.token_hex(32)


def hash_reset_token(raw_token: str) -> str:
    return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()


class TokenIssuer:
    """Signs and verifies bearer tokens carrying account identity and kind."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 1440) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, claims: dict[str, Any], now: datetime | None = None) -> str:
        """Create a signed access token from the given claims."""
        moment = now or utcnow()
        to_encode = claims.copy()
        to_encode.update(
            {
                "iat": moment,
                "exp": moment + timedelta(minutes=self.expire_minutes),
                "type": "access",
            }
        )
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> dict[str, Any] | None:
        """Decode and verify an access token. Returns None for anything unusable."""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            logger.debug("Rejected expired access token")
            return None
        except jwt.InvalidTokenError:
            logger.debug("Rejected invalid access token")
            return None
        if payload.get("type") != "access":
            return None
        return payload
