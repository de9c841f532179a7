from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from directory_admin.api.deps import get_db, require_any
from directory_admin.schemas.clinic import Clinic
from directory_admin.schemas.envelope import ApiResponse
from directory_admin.services.authorization import Principal
from directory_admin.services.clinic import get_all_clinics, get_clinic

router = APIRouter(prefix="/clinics", tags=["clinics"])


@router.get("", response_model=ApiResponse[list[Clinic]])
def list_clinics(
    search: str | None = Query(None, description="Partial match on name, address or phone"),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_any),
):
    clinics = get_all_clinics(db, search=search)
    return ApiResponse(data=[Clinic.model_validate(clinic) for clinic in clinics])


@router.get("/{clinic_id}", response_model=ApiResponse[Clinic])
def get_clinic_by_id(
    clinic_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_any),
):
    return ApiResponse(data=Clinic.model_validate(get_clinic(db, clinic_id)))
