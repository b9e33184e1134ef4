from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from ats.schemas.common import CamelModel
from ats.schemas.job import JobSummary


class ApplicationCreate(CamelModel):
    resume_url: str | None = None
    cover_letter: str | None = None
    ai_score: float | None = Field(default=None, ge=0, le=100)
    analysis: dict[str, Any] | None = None

    @field_validator("resume_url", "cover_letter")
    @classmethod
    def _blank_to_none(cls, v: str | None) -> str | None:
        cleaned = (v or "").strip()
        return cleaned or None


class ApplicationStatusUpdate(CamelModel):
    # Checked after ownership, so any JSON value is accepted here.
    status: Any = None


class ApplicationOut(CamelModel):
    id: int
    student_id: int
    job_id: int
    recruiter_id: int
    status: str
    applied_date: datetime | None = None
    resume_url: str | None = None
    cover_letter: str | None = None
    ai_score: float | None = None
    analysis: dict[str, Any] | None = None
    updated_at: datetime | None = None


class StudentApplicationOut(ApplicationOut):
    job: JobSummary


class ApplicantSummary(CamelModel):
    id: int
    name: str
    email: str
    phone: str | None = None


class ApplicantOut(CamelModel):
    """Recruiter view of an application; the cover letter is left out."""

    id: int
    job_id: int
    status: str
    applied_date: datetime | None = None
    resume_url: str | None = None
    ai_score: float | None = None
    analysis: dict[str, Any] | None = None
    student: ApplicantSummary


class StatusEventOut(CamelModel):
    id: int
    application_id: int
    from_status: str
    to_status: str
    changed_by_id: int
    changed_at: datetime | None = None
