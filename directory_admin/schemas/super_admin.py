from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from directory_admin.schemas.admin_user import AccountStatus


class SuperAdmin(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    full_name: str
    status: str
    phone: str | None = None
    last_login: datetime | None = None
    created_at: datetime
    updated_at: datetime
    failed_login_attempts: int = 0


class SuperAdminProfile(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    full_name: str
    last_login: datetime | None = None
    created_at: datetime


class SuperAdminCreate(BaseModel):
    email: str
    password: str
    full_name: str = Field(..., min_length=1, max_length=255)
    status: AccountStatus = "active"
    phone: str | None = None


class SuperAdminUpdate(BaseModel):
    email: str | None = None
    full_name: str | None = Field(None, min_length=1, max_length=255)
    status: AccountStatus | None = None
    phone: str | None = None


class ProfileUpdate(BaseModel):
    email: str | None = None
    full_name: str | None = Field(None, min_length=1, max_length=255)
