from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

AdminRole = Literal["admin", "moderator"]
AccountStatus = Literal["active", "inactive"]


class AdminUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    full_name: str
    role: str
    status: str
    phone: str | None = None
    department: str | None = None
    last_login: datetime | None = None
    created_at: datetime
    updated_at: datetime
    created_by: int | None = None


class AdminUserCreate(BaseModel):
    email: str
    password: str
    full_name: str = Field(..., min_length=1, max_length=255)
    role: AdminRole = "admin"
    status: AccountStatus = "active"
    phone: str | None = None
    department: str | None = None


class AdminUserUpdate(BaseModel):
    email: str | None = None
    full_name: str | None = Field(None, min_length=1, max_length=255)
    role: AdminRole | None = None
    status: AccountStatus | None = None
    phone: str | None = None
    department: str | None = None


class DeletedAccount(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    full_name: str
