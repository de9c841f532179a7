from sqlalchemy import or_
from sqlalchemy.orm import Session

from directory_admin.db.models.doctor import Doctor as DoctorModel
from directory_admin.errors import NotFoundError


def get_doctor_by_id(db: Session, doctor_id: int) -> DoctorModel | None:
    """Get a doctor by ID."""
    return db.query(DoctorModel).filter(DoctorModel.id == doctor_id).first()


def get_all_doctors(
    db: Session, status: str | None = None, search: str | None = None
) -> list[DoctorModel]:
    """Get doctors, newest application first."""
    query = db.query(DoctorModel)
    if status:
        query = query.filter(DoctorModel.status == status)
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(
                DoctorModel.full_name.ilike(pattern),
                DoctorModel.email.ilike(pattern),
                DoctorModel.specialization.ilike(pattern),
            )
        )
    return query.order_by(DoctorModel.created_at.desc(), DoctorModel.id.desc()).all()


def update_doctor_status(db: Session, doctor_id: int, status: str) -> DoctorModel:
    doctor = get_doctor_by_id(db, doctor_id)
    if not doctor:
        raise NotFoundError("Doctor not found")

    doctor.status = status
    db.commit()
    db.refresh(doctor)
    return doctor
