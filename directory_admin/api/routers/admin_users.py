from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from directory_admin.api.deps import get_db, require_super_admin
from directory_admin.schemas.admin_user import (
    AdminRole,
    AccountStatus,
    AdminUser,
    AdminUserCreate,
    AdminUserUpdate,
    DeletedAccount,
)
from directory_admin.schemas.envelope import ApiResponse
from directory_admin.services.admin_user import (
    create_admin_user,
    delete_admin_user,
    get_admin_user,
    get_all_admin_users,
    update_admin_user,
)
from directory_admin.services.authorization import Principal

router = APIRouter(prefix="/admin-users", tags=["admin-users"])


@router.get("", response_model=ApiResponse[list[AdminUser]])
def list_admin_users(
    role: AdminRole | None = Query(None, description="Filter by role"),
    status: AccountStatus | None = Query(None, description="Filter by status"),
    search: str | None = Query(None, description="Partial match on full name or email"),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_super_admin),
):
    """List admin users, newest first. Super admins only."""
    admin_users = get_all_admin_users(db, role=role, status=status, search=search)
    return ApiResponse(data=[AdminUser.model_validate(admin_user) for admin_user in admin_users])


@router.get("/{admin_user_id}", response_model=ApiResponse[AdminUser])
def get_admin_user_by_id(
    admin_user_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_super_admin),
):
    return ApiResponse(data=AdminUser.model_validate(get_admin_user(db, admin_user_id)))


@router.post("", response_model=ApiResponse[AdminUser], status_code=status.HTTP_201_CREATED)
def create_new_admin_user(
    admin_data: AdminUserCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_super_admin),
):
    """
    Create an admin user. The calling super admin is recorded as created_by.

    The password must be at least 8 characters; the email must be unused.
    """
    admin_user = create_admin_user(db, admin_data, created_by=principal.id)
    return ApiResponse(
        message="Admin user created successfully",
        data=AdminUser.model_validate(admin_user),
    )


@router.put("/{admin_user_id}", response_model=ApiResponse[AdminUser])
def update_admin_user_by_id(
    admin_user_id: int,
    admin_data: AdminUserUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_super_admin),
):
    """Partially update an admin user; omitted fields keep their values."""
    admin_user = update_admin_user(db, admin_user_id, admin_data)
    return ApiResponse(
        message="Admin user updated successfully",
        data=AdminUser.model_validate(admin_user),
    )


@router.delete("/{admin_user_id}", response_model=ApiResponse[DeletedAccount])
def delete_admin_user_by_id(
    admin_user_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_super_admin),
):
    deleted = delete_admin_user(db, admin_user_id)
    return ApiResponse(
        message="Admin user deleted successfully",
        data=DeletedAccount(**deleted),
    )
