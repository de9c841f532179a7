from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AccountSummary(BaseModel):
    """Public view of a signed-in account."""

    id: int
    email: str
    full_name: str
    userType: str
    role: str | None = None


class LoginData(BaseModel):
    token: str
    user: AccountSummary


class ForgotPasswordRequest(BaseModel):
    email: str = Field(..., min_length=1)


class VerifyResetTokenRequest(BaseModel):
    token: str = Field(..., min_length=1)


class ResetTokenData(BaseModel):
    email: str


class ResetPasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    token: str = Field(..., min_length=1)
    new_password: str = Field(..., alias="newPassword")


class ChangePasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_password: str = Field(..., alias="currentPassword", min_length=1)
    new_password: str = Field(..., alias="newPassword")
