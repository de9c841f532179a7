import logging

from sqlalchemy.orm import Session

import directory_admin.repositories.account as account_repo
import directory_admin.repositories.super_admin as super_admin_repo
from directory_admin.core.security import get_password_hash, is_valid_email, validate_password
from directory_admin.db.models.super_admin import SuperAdmin as SuperAdminModel
from directory_admin.domain.accounts import ACTIVE, AccountKind
from directory_admin.errors import DomainValidationError, DuplicateResourceError, NotFoundError
from directory_admin.schemas.super_admin import ProfileUpdate, SuperAdminCreate, SuperAdminUpdate

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "A super admin with this email already exists"


def create_super_admin(db: Session, super_admin_data: SuperAdminCreate) -> SuperAdminModel:
    """
    Create a new super admin.

    - Validates email format
    - Validates password length (8+)
    - Validates email uniqueness among super admins
    """
    if not is_valid_email(super_admin_data.email):
        raise DomainValidationError("Invalid email format")

    is_valid, error_message = validate_password(super_admin_data.password)
    if not is_valid:
        raise DomainValidationError(error_message)

    if account_repo.email_taken(db, AccountKind.SUPER_ADMIN, super_admin_data.email):
        raise DuplicateResourceError(DUPLICATE_EMAIL_MESSAGE)

    super_admin = super_admin_repo.create_super_admin(
        db,
        email=super_admin_data.email,
        password_hash=get_password_hash(super_admin_data.password),
        full_name=super_admin_data.full_name,
        status=super_admin_data.status,
        phone=super_admin_data.phone,
    )
    logger.info("Super admin %s created", super_admin.id)
    return super_admin


def get_super_admin(db: Session, super_admin_id: int) -> SuperAdminModel:
    super_admin = super_admin_repo.get_super_admin_by_id(db, super_admin_id)
    if not super_admin:
        raise NotFoundError("Super admin not found")
    return super_admin


def get_all_super_admins(
    db: Session, status: str | None = None, search: str | None = None
) -> list[SuperAdminModel]:
    return super_admin_repo.get_all_super_admins(db, status=status, search=search)


def _apply_update(db: Session, super_admin_id: int, fields: dict) -> SuperAdminModel:
    if "email" in fields:
        if fields["email"] is None or not is_valid_email(fields["email"]):
            raise DomainValidationError("Invalid email format")
        if account_repo.email_taken(
            db, AccountKind.SUPER_ADMIN, fields["email"], exclude_id=super_admin_id
        ):
            raise DuplicateResourceError(DUPLICATE_EMAIL_MESSAGE)

    for required in ("full_name", "status"):
        if required in fields and fields[required] is None:
            raise DomainValidationError(f"{required} cannot be empty")

    return super_admin_repo.update_super_admin(db, super_admin_id, **fields)


def update_super_admin(
    db: Session, super_admin_id: int, super_admin_data: SuperAdminUpdate
) -> SuperAdminModel:
    """Partially update a super admin. Omitted fields are left untouched."""
    get_super_admin(db, super_admin_id)

    fields = super_admin_data.model_dump(exclude_unset=True)
    if not fields:
        raise DomainValidationError("No fields to update")
    return _apply_update(db, super_admin_id, fields)


def update_profile(db: Session, super_admin_id: int, profile_data: ProfileUpdate) -> SuperAdminModel:
    """Let a super admin edit their own email and full name."""
    fields = profile_data.model_dump(exclude_unset=True)
    if not fields:
        raise DomainValidationError("At least one field (email or full_name) is required")
    return _apply_update(db, super_admin_id, fields)


def delete_super_admin(db: Session, super_admin_id: int) -> dict[str, object]:
    """
    Delete a super admin.

    Raises:
        NotFoundError: If the super admin doesn't exist
        DomainValidationError: If this is the last active super admin
    """
    super_admin = get_super_admin(db, super_admin_id)

    if super_admin.status == ACTIVE and super_admin_repo.count_active_super_admins(db) <= 1:
        raise DomainValidationError("Cannot delete the last active super admin")

    deleted = {"id": super_admin.id, "email": super_admin.email, "full_name": super_admin.full_name}
    super_admin_repo.delete_super_admin(db, super_admin_id)
    logger.info("Super admin %s deleted", super_admin_id)
    return deleted
