import logging

from sqlalchemy.orm import Session

import directory_admin.repositories.doctor as doctor_repo
from directory_admin.db.models.doctor import Doctor as DoctorModel
from directory_admin.domain.accounts import AccountKind
from directory_admin.errors import DomainValidationError, ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)

APPLICATION_STATUSES = ("new", "in-process", "pending", "approved", "rejected")
# Final decisions on an application belong to super admins.
PRIVILEGED_STATUSES = frozenset({"approved", "rejected"})
APPROVED = "approved"
RESIGNED = "resigned"


def get_doctor(db: Session, doctor_id: int) -> DoctorModel:
    doctor = doctor_repo.get_doctor_by_id(db, doctor_id)
    if not doctor:
        raise NotFoundError("Doctor not found")
    return doctor


def get_all_doctors(
    db: Session, status: str | None = None, search: str | None = None
) -> list[DoctorModel]:
    return doctor_repo.get_all_doctors(db, status=status, search=search)


def update_doctor_status(
    db: Session, doctor_id: int, status: str, actor_kind: AccountKind
) -> DoctorModel:
    """
    Move a doctor application to a new status.

    Raises:
        DomainValidationError: If the status is not an application status
        ForbiddenError: If a non super admin tries to approve or reject
        NotFoundError: If the doctor doesn't exist
    """
    if status not in APPLICATION_STATUSES:
        raise DomainValidationError(f"Invalid status: {status}")

    if status in PRIVILEGED_STATUSES and actor_kind is not AccountKind.SUPER_ADMIN:
        raise ForbiddenError("Only super admins can approve or reject doctor applications")

    get_doctor(db, doctor_id)
    doctor = doctor_repo.update_doctor_status(db, doctor_id, status)
    logger.info("Doctor %s moved to %s by %s", doctor_id, status, actor_kind.value)
    return doctor


def resign_doctor(db: Session, doctor_id: int) -> DoctorModel:
    """Mark an approved doctor as resigned."""
    doctor = get_doctor(db, doctor_id)
    if doctor.status != APPROVED:
        raise DomainValidationError("Only approved doctors can resign")
    return doctor_repo.update_doctor_status(db, doctor_id, RESIGNED)
