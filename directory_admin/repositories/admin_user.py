from sqlalchemy import or_
from sqlalchemy.orm import Session

from directory_admin.db.models.admin_user import AdminUser as AdminUserModel
from directory_admin.errors import NotFoundError


def get_admin_user_by_id(db: Session, admin_user_id: int) -> AdminUserModel | None:
    """Get an admin user by ID."""
    return db.query(AdminUserModel).filter(AdminUserModel.id == admin_user_id).first()


def get_all_admin_users(
    db: Session,
    role: str | None = None,
    status: str | None = None,
    search: str | None = None,
) -> list[AdminUserModel]:
    """
    Get admin users, newest first.

    Args:
        role: Optional exact role filter
        status: Optional exact status filter
        search: Optional case-insensitive partial match on full name or email
    """
    query = db.query(AdminUserModel)
    if role:
        query = query.filter(AdminUserModel.role == role)
    if status:
        query = query.filter(AdminUserModel.status == status)
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(AdminUserModel.full_name.ilike(pattern), AdminUserModel.email.ilike(pattern))
        )
    return query.order_by(AdminUserModel.created_at.desc(), AdminUserModel.id.desc()).all()


def create_admin_user(
    db: Session,
    email: str,
    password_hash: str,
    full_name: str,
    role: str,
    status: str,
    phone: str | None = None,
    department: str | None = None,
    created_by: int | None = None,
) -> AdminUserModel:
    """Create a new admin user in the database. Pure data access - no business logic."""
    db_admin_user = AdminUserModel(
        email=email,
        password_hash=password_hash,
        full_name=full_name,
        role=role,
        status=status,
        phone=phone,
        department=department,
        created_by=created_by,
    )
    db.add(db_admin_user)
    db.commit()
    db.refresh(db_admin_user)
    return db_admin_user


def update_admin_user(db: Session, admin_user_id: int, **fields) -> AdminUserModel:
    """Update only the given fields; anything not passed is left untouched."""
    admin_user = get_admin_user_by_id(db, admin_user_id)
    if not admin_user:
        raise NotFoundError("Admin user not found")

    for field, value in fields.items():
        setattr(admin_user, field, value)

    db.commit()
    db.refresh(admin_user)
    return admin_user


def delete_admin_user(db: Session, admin_user_id: int) -> None:
    """Delete an admin user by ID."""
    admin_user = get_admin_user_by_id(db, admin_user_id)
    if not admin_user:
        raise NotFoundError("Admin user not found")

    db.delete(admin_user)
    db.commit()
