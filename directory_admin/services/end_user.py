from sqlalchemy.orm import Session

import directory_admin.repositories.end_user as end_user_repo
from directory_admin.db.models.end_user import EndUser as EndUserModel
from directory_admin.errors import NotFoundError


def get_end_user(db: Session, user_id: int) -> EndUserModel:
    user = end_user_repo.get_end_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def get_all_end_users(db: Session, search: str | None = None) -> list[EndUserModel]:
    return end_user_repo.get_all_end_users(db, search=search)
