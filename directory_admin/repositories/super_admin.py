from sqlalchemy import or_
from sqlalchemy.orm import Session

from directory_admin.db.models.super_admin import SuperAdmin as SuperAdminModel
from directory_admin.domain.accounts import ACTIVE
from directory_admin.errors import NotFoundError


def get_super_admin_by_id(db: Session, super_admin_id: int) -> SuperAdminModel | None:
    """Get a super admin by ID."""
    return db.query(SuperAdminModel).filter(SuperAdminModel.id == super_admin_id).first()


def get_all_super_admins(
    db: Session, status: str | None = None, search: str | None = None
) -> list[SuperAdminModel]:
    """Get super admins, newest first, optionally filtered by status and name/email."""
    query = db.query(SuperAdminModel)
    if status:
        query = query.filter(SuperAdminModel.status == status)
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(SuperAdminModel.full_name.ilike(pattern), SuperAdminModel.email.ilike(pattern))
        )
    return query.order_by(SuperAdminModel.created_at.desc(), SuperAdminModel.id.desc()).all()


def count_active_super_admins(db: Session) -> int:
    return db.query(SuperAdminModel).filter(SuperAdminModel.status == ACTIVE).count()


def create_super_admin(
    db: Session,
    email: str,
    password_hash: str,
    full_name: str,
    status: str,
    phone: str | None = None,
) -> SuperAdminModel:
    """Create a new super admin in the database. Pure data access - no business logic."""
    db_super_admin = SuperAdminModel(
        email=email,
        password_hash=password_hash,
        full_name=full_name,
        status=status,
        phone=phone,
    )
    db.add(db_super_admin)
    db.commit()
    db.refresh(db_super_admin)
    return db_super_admin


def update_super_admin(db: Session, super_admin_id: int, **fields) -> SuperAdminModel:
    """Update only the given fields; anything not passed is left untouched."""
    super_admin = get_super_admin_by_id(db, super_admin_id)
    if not super_admin:
        raise NotFoundError("Super admin not found")

    for field, value in fields.items():
        setattr(super_admin, field, value)

    db.commit()
    db.refresh(super_admin)
    return super_admin


def delete_super_admin(db: Session, super_admin_id: int) -> None:
    super_admin = get_super_admin_by_id(db, super_admin_id)
    if not super_admin:
        raise NotFoundError("Super admin not found")

    db.delete(super_admin)
    db.commit()
