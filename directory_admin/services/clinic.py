from sqlalchemy.orm import Session

import directory_admin.repositories.clinic as clinic_repo
from directory_admin.db.models.clinic import Clinic as ClinicModel
from directory_admin.errors import NotFoundError


def get_clinic(db: Session, clinic_id: int) -> ClinicModel:
    clinic = clinic_repo.get_clinic_by_id(db, clinic_id)
    if not clinic:
        raise NotFoundError("Clinic not found")
    return clinic


def get_all_clinics(db: Session, search: str | None = None) -> list[ClinicModel]:
    return clinic_repo.get_all_clinics(db, search=search)
