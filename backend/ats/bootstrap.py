from __future__ import annotations

import logging

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from ats.auth import hash_password
from ats.config import settings
from ats.database import Base
from ats.models.user import ADMIN, User


logger = logging.getLogger(__name__)


def create_tables(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine)


def ensure_admin(db: Session, email: str, password: str, name: str = "Administrator") -> tuple[User, str]:
    """Create an admin, or promote an existing account and reset its password.

    Returns the user and one of ``"created"``, ``"promoted"`` or ``"unchanged"``.
    """
    email = email.strip().lower()
    user = db.query(User).filter(User.email == email).first()
    if user is None:
        user = User(
            name=name,
            email=email,
            password_hash=hash_password(password),
            phone="000-000-0000",
            role=ADMIN,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user, "created"

    if user.role != ADMIN:
        user.role = ADMIN
        user.password_hash = hash_password(password)
        db.commit()
        db.refresh(user)
        return user, "promoted"
    return user, "unchanged"


def reset_password(db: Session, email: str, password: str) -> User | None:
    user = db.query(User).filter(User.email == email.strip().lower()).first()
    if user is None:
        return None
    user.password_hash = hash_password(password)
    db.commit()
    return user


def seed_admin(engine: Engine) -> str | None:
    if not settings.admin_email or not settings.admin_password:
        return None
    with Session(engine) as db:
        user, outcome = ensure_admin(db, settings.admin_email, settings.admin_password, settings.admin_name)
    logger.info("admin seed outcome=%s user_id=%s", outcome, user.id)
    return outcome
