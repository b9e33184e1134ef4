from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, Field, field_validator

from ats.schemas.common import CamelModel, require_text
from ats.services.job_types import normalize_job_type, normalize_skills


class JobCreate(CamelModel):
    title: str
    company: str
    location: str
    salary: str | None = None
    job_type: str = Field(validation_alias=AliasChoices("jobType", "job_type", "type"))
    description: str
    required_skills: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("requiredSkills", "required_skills", "requirements"),
    )

    @field_validator("title", "company", "location", "description")
    @classmethod
    def _required(cls, v: str, info) -> str:
        return require_text(v, info.field_name.capitalize())

    @field_validator("salary")
    @classmethod
    def _salary(cls, v: str | None) -> str | None:
        cleaned = (v or "").strip()
        return cleaned or None

    @field_validator("job_type")
    @classmethod
    def _job_type(cls, v: str) -> str:
        return normalize_job_type(v)

    @field_validator("required_skills")
    @classmethod
    def _skills(cls, v: list[str]) -> list[str]:
        return normalize_skills(v)


class JobOut(CamelModel):
    id: int
    title: str
    company: str
    location: str
    salary: str | None = None
    job_type: str
    description: str
    required_skills: list[str] = Field(default_factory=list)
    posted_by: int = Field(validation_alias=AliasChoices("posted_by_id", "postedBy"))
    applications_count: int = 0
    created_at: datetime | None = None


class JobSummary(CamelModel):
    id: int
    title: str
    company: str
    location: str
    job_type: str
