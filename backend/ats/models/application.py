from __future__ import annotations

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import relationship
from sqlalchemy.types import JSON

from ats.database import Base


class Application(Base):
    __tablename__ = "applications"
    __table_args__ = (UniqueConstraint("student_id", "job_id", name="uq_application_student_job"),)

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), nullable=False, index=True)
    # Copied from jobs.posted_by_id when the application is created.
    recruiter_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="Pending")
    applied_date = Column(DateTime, server_default=func.now())
    resume_url = Column(String(500))
    cover_letter = Column(Text)
    ai_score = Column(Float)
    analysis = Column(JSON)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    student = relationship("User", foreign_keys=[student_id])
    recruiter = relationship("User", foreign_keys=[recruiter_id])
    job = relationship("Job")
