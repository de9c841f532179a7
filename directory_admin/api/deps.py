from collections.abc import Iterator

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from directory_admin.core.config import Settings
from directory_admin.core.security import TokenIssuer
from directory_admin.domain.accounts import AccountKind
from directory_admin.domain.lockout import LockoutPolicy
from directory_admin.errors import ForbiddenError, UnauthorizedError
from directory_admin.services.auth import AccountSecurity
from directory_admin.services.authorization import AuthFailure, Principal, authorize

# auto_error=False: a missing header is reported through our own envelope
bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Iterator[Session]:
    yield from request.app.state.database.session()


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.tokens


def get_account_security(
    db: Session = Depends(get_db),
    tokens: TokenIssuer = Depends(get_token_issuer),
    settings: Settings = Depends(get_settings),
) -> AccountSecurity:
    return AccountSecurity(
        db,
        tokens,
        lockout=LockoutPolicy(
            max_attempts=settings.max_login_attempts,
            lockout_minutes=settings.lockout_minutes,
        ),
        reset_token_ttl_minutes=settings.password_reset_token_expire_minutes,
    )


def _raise_for(failure: AuthFailure) -> None:
    if failure.status_code == 403:
        raise ForbiddenError(failure.message)
    raise UnauthorizedError(failure.message)


def require_kinds(*kinds: AccountKind):
    """
    Create a dependency that resolves the bearer token to a Principal of one of the given kinds.

    Example:
        Depends(require_kinds(AccountKind.SUPER_ADMIN))
    """

    def principal_resolver(
        credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
        db: Session = Depends(get_db),
        tokens: TokenIssuer = Depends(get_token_issuer),
    ) -> Principal:
        token = credentials.credentials if credentials else None
        result = authorize(token, tokens, db, allowed_kinds=kinds)
        if isinstance(result, AuthFailure):
            _raise_for(result)
        return result

    return principal_resolver


require_super_admin = require_kinds(AccountKind.SUPER_ADMIN)
require_admin = require_kinds(AccountKind.ADMIN)
require_any = require_kinds(AccountKind.SUPER_ADMIN, AccountKind.ADMIN)
