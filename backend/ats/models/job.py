from __future__ import annotations

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import relationship
from sqlalchemy.types import JSON

from ats.database import Base


class Job(Base):
    __tablename__ = "jobs"
    __table_args__ = (Index("idx_jobs_created_at", "created_at"),)

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(300), nullable=False)
    company = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    salary = Column(String(120))
    job_type = Column(String(20), nullable=False)
    description = Column(Text, nullable=False)
    required_skills = Column(JSON, nullable=False, default=list)
    posted_by_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    applications_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())

    posted_by = relationship("User")
