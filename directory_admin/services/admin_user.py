import logging

from sqlalchemy.orm import Session

import directory_admin.repositories.account as account_repo
import directory_admin.repositories.admin_user as admin_user_repo
from directory_admin.core.security import get_password_hash, is_valid_email, validate_password
from directory_admin.db.models.admin_user import AdminUser as AdminUserModel
from directory_admin.domain.accounts import AccountKind
from directory_admin.errors import DomainValidationError, DuplicateResourceError, NotFoundError
from directory_admin.schemas.admin_user import AdminUserCreate, AdminUserUpdate

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "An admin user with this email already exists"


def create_admin_user(
    db: Session, admin_data: AdminUserCreate, created_by: int | None = None
) -> AdminUserModel:
    """
    Create a new admin user with business logic validation.

    - Validates email format
    - Validates password length (8+)
    - Validates email uniqueness among admin users
    """
    if not is_valid_email(admin_data.email):
        raise DomainValidationError("Invalid email format")

    is_valid, error_message = validate_password(admin_data.password)
    if not is_valid:
        raise DomainValidationError(error_message)

    if account_repo.email_taken(db, AccountKind.ADMIN, admin_data.email):
        raise DuplicateResourceError(DUPLICATE_EMAIL_MESSAGE)

    admin_user = admin_user_repo.create_admin_user(
        db,
        email=admin_data.email,
        password_hash=get_password_hash(admin_data.password),
        full_name=admin_data.full_name,
        role=admin_data.role,
        status=admin_data.status,
        phone=admin_data.phone,
        department=admin_data.department,
        created_by=created_by,
    )
    logger.info("Admin user %s created by super admin %s", admin_user.id, created_by)
    return admin_user


def get_admin_user(db: Session, admin_user_id: int) -> AdminUserModel:
    admin_user = admin_user_repo.get_admin_user_by_id(db, admin_user_id)
    if not admin_user:
        raise NotFoundError("Admin user not found")
    return admin_user


def get_all_admin_users(
    db: Session,
    role: str | None = None,
    status: str | None = None,
    search: str | None = None,
) -> list[AdminUserModel]:
    return admin_user_repo.get_all_admin_users(db, role=role, status=status, search=search)


def update_admin_user(
    db: Session, admin_user_id: int, admin_data: AdminUserUpdate
) -> AdminUserModel:
    """
    Partially update an admin user. Fields absent from the request body are left untouched.

    Raises:
        NotFoundError: If the admin user doesn't exist
        DomainValidationError: If no fields were supplied or the email is malformed
        DuplicateResourceError: If the email is taken by another admin user
    """
    get_admin_user(db, admin_user_id)

    fields = admin_data.model_dump(exclude_unset=True)
    if not fields:
        raise DomainValidationError("No fields to update")

    if "email" in fields:
        if fields["email"] is None or not is_valid_email(fields["email"]):
            raise DomainValidationError("Invalid email format")
        if account_repo.email_taken(db, AccountKind.ADMIN, fields["email"], exclude_id=admin_user_id):
            raise DuplicateResourceError(DUPLICATE_EMAIL_MESSAGE)

    for required in ("full_name", "role", "status"):
        if required in fields and fields[required] is None:
            raise DomainValidationError(f"{required} cannot be empty")

    return admin_user_repo.update_admin_user(db, admin_user_id, **fields)


def delete_admin_user(db: Session, admin_user_id: int) -> dict[str, object]:
    """Delete an admin user unconditionally, returning what was removed."""
    admin_user = get_admin_user(db, admin_user_id)
    deleted = {"id": admin_user.id, "email": admin_user.email, "full_name": admin_user.full_name}
    admin_user_repo.delete_admin_user(db, admin_user_id)
    logger.info("Admin user %s deleted", admin_user_id)
    return deleted
