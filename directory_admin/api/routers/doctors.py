from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from directory_admin.api.deps import get_db, require_any
from directory_admin.schemas.doctor import Doctor, DoctorStatusUpdate
from directory_admin.schemas.envelope import ApiResponse
from directory_admin.services.authorization import Principal
from directory_admin.services.doctor import (
    APPROVED,
    get_all_doctors,
    get_doctor,
    resign_doctor,
    update_doctor_status,
)

router = APIRouter(prefix="/doctors", tags=["doctors"])


def _doctor_list(doctors) -> ApiResponse[list[Doctor]]:
    return ApiResponse(data=[Doctor.model_validate(doctor) for doctor in doctors])


@router.get("", response_model=ApiResponse[list[Doctor]])
def list_doctors(
    status: str | None = Query(None, description="Filter by status"),
    search: str | None = Query(None, description="Partial match on name, email or specialization"),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_any),
):
    return _doctor_list(get_all_doctors(db, status=status, search=search))


@router.get("/approved/list", response_model=ApiResponse[list[Doctor]])
def list_approved_doctors(
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_any),
):
    return _doctor_list(get_all_doctors(db, status=APPROVED))


@router.get("/status/{status}", response_model=ApiResponse[list[Doctor]])
def list_doctors_by_status(
    status: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_any),
):
    return _doctor_list(get_all_doctors(db, status=status))


@router.get("/{doctor_id}", response_model=ApiResponse[Doctor])
def get_doctor_by_id(
    doctor_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_any),
):
    return ApiResponse(data=Doctor.model_validate(get_doctor(db, doctor_id)))


@router.put("/{doctor_id}/status", response_model=ApiResponse[Doctor])
def update_status(
    doctor_id: int,
    status_data: DoctorStatusUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_any),
):
    """
    Move an application between statuses.

    - new / in-process / pending: any signed-in account
    - approved / rejected: super admins only
    """
    doctor = update_doctor_status(db, doctor_id, status_data.status, principal.kind)
    return ApiResponse(
        message="Doctor status updated successfully",
        data=Doctor.model_validate(doctor),
    )


@router.put("/{doctor_id}/resign", response_model=ApiResponse[Doctor])
def resign(
    doctor_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_any),
):
    doctor = resign_doctor(db, doctor_id)
    return ApiResponse(message="Doctor resigned successfully", data=Doctor.model_validate(doctor))
