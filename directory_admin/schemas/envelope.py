from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Uniform success envelope: {success, data?, message?}."""

    success: bool = True
    data: T | None = None
    message: str | None = None


class MessageResponse(BaseModel):
    success: bool = True
    message: str
