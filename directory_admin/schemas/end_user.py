from datetime import datetime

from pydantic import BaseModel, ConfigDict


class EndUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    mobile: str | None = None
    location: str | None = None
    last_login: datetime | None = None
    created_at: datetime
    updated_at: datetime
