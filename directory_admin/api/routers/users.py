from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from directory_admin.api.deps import get_db, require_any
from directory_admin.schemas.end_user import EndUser
from directory_admin.schemas.envelope import ApiResponse
from directory_admin.services.authorization import Principal
from directory_admin.services.end_user import get_all_end_users, get_end_user

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=ApiResponse[list[EndUser]])
def list_users(
    search: str | None = Query(None, description="Partial match on name, email, mobile or location"),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_any),
):
    """List registered end users of the directory app."""
    users = get_all_end_users(db, search=search)
    return ApiResponse(data=[EndUser.model_validate(user) for user in users])


@router.get("/{user_id}", response_model=ApiResponse[EndUser])
def get_user_by_id(
    user_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_any),
):
    return ApiResponse(data=EndUser.model_validate(get_end_user(db, user_id)))
