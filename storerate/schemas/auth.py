from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


# All optional: the services report the first missing or invalid field.
class SignupRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    address: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class PasswordChangeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_password: str | None = Field(default=None, alias="currentPassword")
    new_password: str | None = Field(default=None, alias="newPassword")


class UserOut(BaseModel):
    id: int
    name: str
    email: str
    address: str
    role: str


class SignupResponse(BaseModel):
    message: str
    user: UserOut


class LoginResponse(BaseModel):
    token: str
    user: UserOut


class MeOut(BaseModel):
    id: int
    email: str
    role: str


class MessageResponse(BaseModel):
    message: str
