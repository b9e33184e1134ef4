from __future__ import annotations

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func

from ats.database import Base


class ApplicationStatusEvent(Base):
    """Append-only record of one status change."""

    __tablename__ = "application_status_events"

    id = Column(Integer, primary_key=True, index=True)
    application_id = Column(Integer, ForeignKey("applications.id"), nullable=False, index=True)
    from_status = Column(String(20), nullable=False)
    to_status = Column(String(20), nullable=False)
    changed_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    changed_at = Column(DateTime, server_default=func.now())
