from __future__ import annotations

from pydantic import Field, field_validator

from ats.models.user import ROLES, STUDENT
from ats.schemas.auth import UserOut
from ats.schemas.common import CamelModel, normalize_email, require_text


def _known_role(value: str) -> str:
    role = (value or "").strip().lower()
    if role not in ROLES:
        raise ValueError(f"Invalid role. Allowed: {', '.join(ROLES)}")
    return role


class AdminUserCreate(CamelModel):
    name: str
    email: str
    password: str = Field(max_length=256)
    phone: str | None = None
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

    @field_validator("role")
    @classmethod
    def _role(cls, v: str) -> str:
        role = _known_role(v)
        if role == STUDENT:
            raise ValueError("Cannot create student users via this endpoint")
        return role


class AdminUserCreated(CamelModel):
    message: str
    user: UserOut


class RoleUpdate(CamelModel):
    role: str

    @field_validator("role")
    @classmethod
    def _role(cls, v: str) -> str:
        return _known_role(v)


class DailyCount(CamelModel):
    day: str
    count: int


class OverviewKpis(CamelModel):
    total_users: int
    active_recruiters: int
    total_jobs: int
    active_applications: int


class ActivityItem(CamelModel):
    id: str
    type: str
    text: str
    time: str


class AdminOverview(CamelModel):
    kpis: OverviewKpis
    users_growth: list[DailyCount]
    applications_by_day: list[DailyCount]
    recent_activity: list[ActivityItem]
