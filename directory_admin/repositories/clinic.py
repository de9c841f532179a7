from sqlalchemy import or_
from sqlalchemy.orm import Session

from directory_admin.db.models.clinic import Clinic as ClinicModel


def get_clinic_by_id(db: Session, clinic_id: int) -> ClinicModel | None:
    """Get a clinic by ID."""
    return db.query(ClinicModel).filter(ClinicModel.id == clinic_id).first()


def get_all_clinics(db: Session, search: str | None = None) -> list[ClinicModel]:
    """Get clinics, newest first, optionally matching name, address or phone."""
    query = db.query(ClinicModel)
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(
                ClinicModel.name.ilike(pattern),
                ClinicModel.address.ilike(pattern),
                ClinicModel.phone.ilike(pattern),
            )
        )
    return query.order_by(ClinicModel.created_at.desc(), ClinicModel.id.desc()).all()
