from __future__ import annotations

from sqlalchemy import Column, DateTime, Integer, String, func

from ats.database import Base


STUDENT = "student"
RECRUITER = "recruiter"
ADMIN = "admin"
ROLES = (STUDENT, RECRUITER, ADMIN)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(512), nullable=False)
    phone = Column(String(40))
    role = Column(String(20), nullable=False, default=STUDENT, index=True)
    created_at = Column(DateTime, server_default=func.now())

    @property
    def is_admin(self) -> bool:
        return (self.role or "").lower() == ADMIN
