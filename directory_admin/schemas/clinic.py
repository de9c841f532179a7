from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class Clinic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    doctor_id: int | None = None
    name: str
    address: str | None = None
    phone: str | None = None
    website: str | None = None
    business_hours: dict[str, Any] | list[Any] | None = None
    created_at: datetime
    updated_at: datetime
