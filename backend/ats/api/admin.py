from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ats.auth import EMAIL_TAKEN, email_registered, hash_password, require_roles
from ats.database import get_db
from ats.errors import ConflictError, NotFoundError, ValidationFailed
from ats.models.user import ADMIN, ROLES, User
from ats.schemas.admin import AdminOverview, AdminUserCreate, AdminUserCreated, RoleUpdate
from ats.schemas.auth import UserOut
from ats.services.overview import AdminOverviewService


router = APIRouter()
logger = logging.getLogger(__name__)
overview_service = AdminOverviewService()


@router.post("/users", response_model=AdminUserCreated, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: AdminUserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(ADMIN)),
) -> AdminUserCreated:
    if email_registered(db, payload.email):
        raise ConflictError(EMAIL_TAKEN)

    user = User(
        name=payload.name,
        email=payload.email,
        password_hash=hash_password(payload.password),
        phone=payload.phone,
        role=payload.role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(EMAIL_TAKEN) from exc
    db.refresh(user)
    logger.info("account created user_id=%s role=%s by=%s", user.id, user.role, current_user.id)
    return AdminUserCreated(message=f"{user.role} account created successfully", user=UserOut.model_validate(user))


@router.get("/users", response_model=list[UserOut])
def list_users(
    role: str | None = Query(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(ADMIN)),
) -> list[User]:
    query = db.query(User)
    if role:
        role = role.strip().lower()
        if role not in ROLES:
            raise ValidationFailed(f"Invalid role. Allowed: {', '.join(ROLES)}")
        query = query.filter(User.role == role)
    return query.order_by(User.created_at.desc(), User.id.desc()).all()


@router.put("/users/{user_id}/role", response_model=UserOut)
def change_role(
    user_id: int,
    payload: RoleUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(ADMIN)),
) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")

    previous = user.role
    user.role = payload.role
    db.commit()
    db.refresh(user)
    logger.info("role changed user_id=%s from=%s to=%s by=%s", user.id, previous, user.role, current_user.id)
    return user


@router.get("/overview", response_model=AdminOverview)
def overview(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(ADMIN)),
) -> dict:
    return overview_service.build(db)
