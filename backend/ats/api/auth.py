from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ats.auth import (
    EMAIL_TAKEN,
    create_access_token,
    email_registered,
    get_current_user,
    hash_password,
    verify_password,
)
from ats.database import get_db, ping_database
from ats.errors import AuthenticationError, ConflictError, ServiceUnavailableError
from ats.models.user import STUDENT, User
from ats.schemas.auth import AuthResponse, LoginRequest, MeResponse, SignupRequest, UserOut


router = APIRouter()
logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(payload: SignupRequest, db: Session = Depends(get_db)) -> AuthResponse:
    if email_registered(db, payload.email):
        raise ConflictError(EMAIL_TAKEN)

    user = User(
        name=payload.name,
        email=payload.email,
        password_hash=hash_password(payload.password),
        phone=payload.phone,
        role=STUDENT,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(EMAIL_TAKEN) from exc
    db.refresh(user)
    logger.info("student signed up user_id=%s", user.id)

    return AuthResponse(
        message="Student account created successfully",
        token=create_access_token(user.id, user.role),
        user=UserOut.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> AuthResponse:
    if not ping_database(db):
        raise ServiceUnavailableError("Database not connected. Please try again later.")

    user = db.query(User).filter(User.email == payload.email).first()
    # One message for every failed check so callers cannot tell which field was wrong.
    if (
        not user
        or user.role.lower() != payload.role.strip().lower()
        or not verify_password(payload.password, user.password_hash)
    ):
        logger.info("login failed email=%s", payload.email)
        raise AuthenticationError(INVALID_CREDENTIALS)

    return AuthResponse(
        message="Login successful",
        token=create_access_token(user.id, user.role),
        user=UserOut.model_validate(user),
    )


@router.get("/me", response_model=MeResponse)
def me(current_user: User = Depends(get_current_user)) -> MeResponse:
    return MeResponse(user=UserOut.model_validate(current_user))
