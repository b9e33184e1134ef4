from __future__ import annotations

from pydantic import Field, field_validator

from ats.models.user import STUDENT
from ats.schemas.common import CamelModel, normalize_email, require_text


class UserOut(CamelModel):
    id: int
    name: str
    email: str
    phone: str | None = None
    role: str


class SignupRequest(CamelModel):
    name: str
    email: str
    password: str = Field(max_length=256)
    phone: str
    role: str

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return require_text(v, "Name")

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("password")
    @classmethod
    def _password(cls, v: str) -> str:
        if len(v or "") < 6:
            raise ValueError("Password must be at least 6 characters")
        return v

    @field_validator("phone")
    @classmethod
    def _phone(cls, v: str) -> str:
        return require_text(v, "Phone number")

    @field_validator("role")
    @classmethod
    def _role(cls, v: str) -> str:
        if v != STUDENT:
            raise ValueError("Only students can sign up through this endpoint")
        return v


class LoginRequest(CamelModel):
    email: str
    password: str = Field(min_length=1, max_length=256)
    role: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return normalize_email(v)


class AuthResponse(CamelModel):
    message: str
    token: str
    token_type: str = "bearer"
    user: UserOut


class MeResponse(CamelModel):
    user: UserOut
