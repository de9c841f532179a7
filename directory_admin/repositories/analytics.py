from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from directory_admin.db.models.clinic import Clinic as ClinicModel
from directory_admin.db.models.doctor import Doctor as DoctorModel
from directory_admin.db.models.end_user import EndUser as EndUserModel


def count_end_users(db: Session) -> int:
    return db.query(func.count(EndUserModel.id)).scalar() or 0


def count_clinics(db: Session) -> int:
    return db.query(func.count(ClinicModel.id)).scalar() or 0


def count_doctors_by_status(db: Session, statuses: tuple[str, ...]) -> dict[str, int]:
    """Group doctors by status, restricted to the given statuses."""
    rows = (
        db.query(DoctorModel.status, func.count(DoctorModel.id))
        .filter(DoctorModel.status.in_(statuses))
        .group_by(DoctorModel.status)
        .all()
    )
    return {status: count for status, count in rows}


def clinic_created_dates_since(db: Session, since: datetime) -> list[datetime]:
    rows = db.query(ClinicModel.created_at).filter(ClinicModel.created_at >= since).all()
    return [row[0] for row in rows]


def doctor_created_dates_since(db: Session, since: datetime) -> list[datetime]:
    rows = db.query(DoctorModel.created_at).filter(DoctorModel.created_at >= since).all()
    return [row[0] for row in rows]
