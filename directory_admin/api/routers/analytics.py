from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from directory_admin.api.deps import get_db, require_any
from directory_admin.schemas.analytics import (
    AnalyticsOverview,
    DoctorStatusDistribution,
    MonthlyCount,
)
from directory_admin.schemas.envelope import ApiResponse
from directory_admin.services import analytics
from directory_admin.services.authorization import Principal

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/overview", response_model=ApiResponse[AnalyticsOverview])
def overview(db: Session = Depends(get_db), principal: Principal = Depends(require_any)):
    """Totals plus the application status breakdown."""
    return ApiResponse(data=AnalyticsOverview(**analytics.get_overview(db)))


@router.get("/clinics-growth", response_model=ApiResponse[list[MonthlyCount]])
def clinics_growth(db: Session = Depends(get_db), principal: Principal = Depends(require_any)):
    """New clinics per month over the trailing six months."""
    return ApiResponse(data=[MonthlyCount(**row) for row in analytics.get_clinics_growth(db)])


@router.get("/applications-trend", response_model=ApiResponse[list[MonthlyCount]])
def applications_trend(db: Session = Depends(get_db), principal: Principal = Depends(require_any)):
    """Doctor applications per month over the trailing six months."""
    return ApiResponse(data=[MonthlyCount(**row) for row in analytics.get_applications_trend(db)])


@router.get("/doctor-status-distribution", response_model=ApiResponse[DoctorStatusDistribution])
def doctor_status_distribution(
    db: Session = Depends(get_db), principal: Principal = Depends(require_any)
):
    return ApiResponse(data=DoctorStatusDistribution(**analytics.get_doctor_status_distribution(db)))
