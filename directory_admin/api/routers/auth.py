from fastapi import APIRouter, BackgroundTasks, Depends

from directory_admin.api.deps import (
    get_account_security,
    get_settings,
    require_admin,
    require_any,
    require_super_admin,
)
from directory_admin.core.config import Settings
from directory_admin.domain.accounts import AccountKind, public_summary
from directory_admin.domain.outcomes import (
    LoginFailure,
    LoginFailureReason,
    LoginOutcome,
    ResetTokenRejected,
)
from directory_admin.errors import DomainValidationError, ForbiddenError, UnauthorizedError
from directory_admin.schemas.auth import (
    AccountSummary,
    ForgotPasswordRequest,
    LoginData,
    LoginRequest,
    ResetPasswordRequest,
    ResetTokenData,
    VerifyResetTokenRequest,
)
from directory_admin.schemas.envelope import ApiResponse, MessageResponse
from directory_admin.services.auth import (
    GENERIC_RESET_MIN_LENGTH,
    RESET_ACKNOWLEDGEMENT,
    AccountSecurity,
)
from directory_admin.services.authorization import Principal
from directory_admin.services.email import deliver_password_reset_email

router = APIRouter(prefix="/auth", tags=["auth"])


def login_response(outcome: LoginOutcome) -> ApiResponse[LoginData]:
    """Turn a login outcome into the response envelope, or raise the matching error."""
    if isinstance(outcome, LoginFailure):
        if outcome.reason is LoginFailureReason.INVALID_CREDENTIALS:
            raise UnauthorizedError(outcome.message)
        raise ForbiddenError(outcome.message)
    return ApiResponse(
        message="Login successful",
        data=LoginData(token=outcome.token, user=AccountSummary(**outcome.user)),
    )


def raise_for_rejected_token(check) -> None:
    if isinstance(check, ResetTokenRejected):
        raise DomainValidationError(check.message)


@router.post("/login", response_model=ApiResponse[LoginData])
def login(
    credentials: LoginRequest,
    security: AccountSecurity = Depends(get_account_security),
):
    """Sign in as whichever account kind owns the email."""
    return login_response(security.login_any(credentials.email, credentials.password))


@router.post("/super-admin/login", response_model=ApiResponse[LoginData])
def super_admin_login(
    credentials: LoginRequest,
    security: AccountSecurity = Depends(get_account_security),
):
    return login_response(
        security.login(credentials.email, credentials.password, AccountKind.SUPER_ADMIN)
    )


@router.post("/admin/login", response_model=ApiResponse[LoginData])
def admin_login(
    credentials: LoginRequest,
    security: AccountSecurity = Depends(get_account_security),
):
    return login_response(
        security.login(credentials.email, credentials.password, AccountKind.ADMIN)
    )


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(
    request: ForgotPasswordRequest,
    background_tasks: BackgroundTasks,
    security: AccountSecurity = Depends(get_account_security),
    settings: Settings = Depends(get_settings),
):
    """
    Request a password reset email.

    The answer is the same whether or not the email belongs to an account;
    the email itself is sent after the response.
    """
    pending = security.request_password_reset(request.email)
    if pending is not None:
        background_tasks.add_task(deliver_password_reset_email, settings, pending)
    return MessageResponse(message=RESET_ACKNOWLEDGEMENT)


@router.post("/verify-reset-token", response_model=ApiResponse[ResetTokenData])
def verify_reset_token(
    request: VerifyResetTokenRequest,
    security: AccountSecurity = Depends(get_account_security),
):
    """Check a reset token without consuming it."""
    check = security.verify_reset_token(request.token)
    raise_for_rejected_token(check)
    return ApiResponse(message="Token is valid", data=ResetTokenData(email=check.email))


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(
    request: ResetPasswordRequest,
    security: AccountSecurity = Depends(get_account_security),
):
    """Reset a password with the token from the email."""
    check = security.reset_password(
        request.token, request.new_password, min_length=GENERIC_RESET_MIN_LENGTH
    )
    raise_for_rejected_token(check)
    return MessageResponse(message="Password has been reset successfully")


@router.get("/me", response_model=ApiResponse[AccountSummary])
def get_current_account(principal: Principal = Depends(require_any)):
    """Get the signed-in account, whichever kind it is."""
    return ApiResponse(data=AccountSummary(**public_summary(principal.account, principal.kind)))


@router.get("/super-admin/me", response_model=ApiResponse[AccountSummary])
def get_current_super_admin(principal: Principal = Depends(require_super_admin)):
    return ApiResponse(data=AccountSummary(**public_summary(principal.account, principal.kind)))


@router.get("/admin/me", response_model=ApiResponse[AccountSummary])
def get_current_admin(principal: Principal = Depends(require_admin)):
    return ApiResponse(data=AccountSummary(**public_summary(principal.account, principal.kind)))
