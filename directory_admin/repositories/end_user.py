from sqlalchemy import or_
from sqlalchemy.orm import Session

from directory_admin.db.models.end_user import EndUser as EndUserModel


def get_end_user_by_id(db: Session, user_id: int) -> EndUserModel | None:
    """Get an end user by ID."""
    return db.query(EndUserModel).filter(EndUserModel.id == user_id).first()


def get_all_end_users(db: Session, search: str | None = None) -> list[EndUserModel]:
    """Get end users, newest first, optionally matching name, email, mobile or location."""
    query = db.query(EndUserModel)
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(
                EndUserModel.name.ilike(pattern),
                EndUserModel.email.ilike(pattern),
                EndUserModel.mobile.ilike(pattern),
                EndUserModel.location.ilike(pattern),
            )
        )
    return query.order_by(EndUserModel.created_at.desc(), EndUserModel.id.desc()).all()
