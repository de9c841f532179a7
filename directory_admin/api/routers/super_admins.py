from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session

from directory_admin.api.deps import (
    get_account_security,
    get_db,
    get_settings,
    require_super_admin,
)
from directory_admin.api.routers.auth import raise_for_rejected_token
from directory_admin.core.config import Settings
from directory_admin.domain.accounts import AccountKind
from directory_admin.schemas.admin_user import AccountStatus, DeletedAccount
from directory_admin.schemas.auth import (
    ChangePasswordRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
)
from directory_admin.schemas.envelope import ApiResponse, MessageResponse
from directory_admin.schemas.super_admin import (
    ProfileUpdate,
    SuperAdmin,
    SuperAdminCreate,
    SuperAdminProfile,
    SuperAdminUpdate,
)
from directory_admin.services.auth import SUPER_ADMIN_RESET_MIN_LENGTH, AccountSecurity
from directory_admin.services.authorization import Principal
from directory_admin.services.email import deliver_password_reset_email
from directory_admin.services.super_admin import (
    create_super_admin,
    delete_super_admin,
    get_all_super_admins,
    get_super_admin,
    update_profile,
    update_super_admin,
)

router = APIRouter(prefix="/super-admins", tags=["super-admins"])

SUPER_ADMIN_RESET_ACKNOWLEDGEMENT = "If the email exists, a password reset link will be sent"


@router.get("", response_model=ApiResponse[list[SuperAdmin]])
def list_super_admins(
    status: AccountStatus | None = Query(None, description="Filter by status"),
    search: str | None = Query(None, description="Partial match on full name or email"),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_super_admin),
):
    super_admins = get_all_super_admins(db, status=status, search=search)
    return ApiResponse(data=[SuperAdmin.model_validate(super_admin) for super_admin in super_admins])


# /profile/* routes are declared before /{super_admin_id}
@router.get("/profile/me", response_model=ApiResponse[SuperAdminProfile])
def get_own_profile(principal: Principal = Depends(require_super_admin)):
    return ApiResponse(data=SuperAdminProfile.model_validate(principal.account))


@router.put("/profile/me", response_model=ApiResponse[SuperAdminProfile])
def update_own_profile(
    profile_data: ProfileUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_super_admin),
):
    """Update the caller's own email and/or full name."""
    super_admin = update_profile(db, principal.id, profile_data)
    return ApiResponse(
        message="Profile updated successfully",
        data=SuperAdminProfile.model_validate(super_admin),
    )


@router.post("/profile/change-password", response_model=MessageResponse)
def change_own_password(
    password_data: ChangePasswordRequest,
    security: AccountSecurity = Depends(get_account_security),
    principal: Principal = Depends(require_super_admin),
):
    security.change_password(
        principal.account, password_data.current_password, password_data.new_password
    )
    return MessageResponse(message="Password changed successfully")


@router.post("/request-password-reset", response_model=MessageResponse)
def request_password_reset(
    request: ForgotPasswordRequest,
    background_tasks: BackgroundTasks,
    security: AccountSecurity = Depends(get_account_security),
    settings: Settings = Depends(get_settings),
):
    """Super-admin-only reset request. Same answer whether or not the email exists."""
    pending = security.request_password_reset(request.email, kinds=(AccountKind.SUPER_ADMIN,))
    if pending is not None:
        background_tasks.add_task(deliver_password_reset_email, settings, pending)
    return MessageResponse(message=SUPER_ADMIN_RESET_ACKNOWLEDGEMENT)


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(
    request: ResetPasswordRequest,
    security: AccountSecurity = Depends(get_account_security),
):
    """Super-admin self-service reset; requires at least 8 characters."""
    check = security.reset_password(
        request.token,
        request.new_password,
        min_length=SUPER_ADMIN_RESET_MIN_LENGTH,
        kinds=(AccountKind.SUPER_ADMIN,),
    )
    raise_for_rejected_token(check)
    return MessageResponse(message="Password reset successfully")


@router.get("/{super_admin_id}", response_model=ApiResponse[SuperAdmin])
def get_super_admin_by_id(
    super_admin_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_super_admin),
):
    return ApiResponse(data=SuperAdmin.model_validate(get_super_admin(db, super_admin_id)))


@router.post("", response_model=ApiResponse[SuperAdmin], status_code=status.HTTP_201_CREATED)
def create_new_super_admin(
    super_admin_data: SuperAdminCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_super_admin),
):
    super_admin = create_super_admin(db, super_admin_data)
    return ApiResponse(
        message="Super admin created successfully",
        data=SuperAdmin.model_validate(super_admin),
    )


@router.put("/{super_admin_id}", response_model=ApiResponse[SuperAdmin])
def update_super_admin_by_id(
    super_admin_id: int,
    super_admin_data: SuperAdminUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_super_admin),
):
    super_admin = update_super_admin(db, super_admin_id, super_admin_data)
    return ApiResponse(
        message="Super admin updated successfully",
        data=SuperAdmin.model_validate(super_admin),
    )


@router.delete("/{super_admin_id}", response_model=ApiResponse[DeletedAccount])
def delete_super_admin_by_id(
    super_admin_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_super_admin),
):
    """Delete a super admin. The last active super admin cannot be deleted."""
    deleted = delete_super_admin(db, super_admin_id)
    return ApiResponse(
        message="Super admin deleted successfully",
        data=DeletedAccount(**deleted),
    )


@router.post("/{super_admin_id}/change-password", response_model=MessageResponse)
def change_super_admin_password(
    super_admin_id: int,
    password_data: ChangePasswordRequest,
    db: Session = Depends(get_db),
    security: AccountSecurity = Depends(get_account_security),
    principal: Principal = Depends(require_super_admin),
):
    """Change another super admin's password; their current password is still required."""
    super_admin = get_super_admin(db, super_admin_id)
    security.change_password(
        super_admin, password_data.current_password, password_data.new_password
    )
    return MessageResponse(message="Password changed successfully")
