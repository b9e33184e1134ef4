from __future__ import annotations

from datetime import datetime

from pydantic import Field

from ats.schemas.common import CamelModel


class ResumeAnalysis(CamelModel):
    score: int
    suggestions: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)


class ResumeUploadResponse(CamelModel):
    id: int
    resume_url: str
    analysis: ResumeAnalysis


class ResumeOut(CamelModel):
    id: int
    filename: str
    resume_url: str
    size_bytes: int
    analysis: ResumeAnalysis | None = None
    upload_date: datetime | None = None
