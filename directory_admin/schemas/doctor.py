from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

ApplicationStatus = Literal["new", "in-process", "pending", "approved", "rejected"]


class Doctor(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str
    email: str
    specialization: str | None = None
    years_of_experience: int | None = None
    country_code: str | None = None
    mobile_number: str | None = None
    license_number: str | None = None
    clinic_address: str | None = None
    status: str
    created_at: datetime
    updated_at: datetime


class DoctorStatusUpdate(BaseModel):
    status: ApplicationStatus
