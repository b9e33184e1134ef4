from __future__ import annotations

import base64
import hashlib
import hmac
import logging
import secrets
import time
from dataclasses import dataclass
from typing import Callable

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ats.config import settings
from ats.database import get_db
from ats.errors import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    ExpiredTokenError,
    InvalidTokenError,
    MissingTokenError,
    UnknownUserError,
)
from ats.models.user import ROLES, User


logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    role: str
    expires_at: int


def hash_password(password: str) -> str:
    iterations = settings.password_hash_iterations
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        iterations,
    ).hex()
    return f"pbkdf2_sha256${iterations}${salt}${digest}"


def verify_password(password: str, password_hash: str) -> bool:
    try:
        _, iterations_str, salt, digest = password_hash.split("$", 3)
        iterations = int(iterations_str)
    except ValueError:
        return False
    expected = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        iterations,
    ).hex()
    return hmac.compare_digest(expected.encode("utf-8"), digest.encode("utf-8"))


EMAIL_TAKEN = "Email already registered"


def email_registered(db: Session, email: str) -> bool:
    return db.query(User.id).filter(User.email == email).first() is not None


def _sign(payload: str, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).hexdigest()


def create_access_token(user_id: int, role: str, ttl_seconds: int | None = None) -> str:
    if not settings.auth_secret:
        raise ConfigurationError("AUTH_SECRET is not configured")
    ttl = settings.token_ttl_seconds if ttl_seconds is None else ttl_seconds
    exp = int(time.time()) + ttl
    nonce = secrets.token_hex(6)
    payload = f"{user_id}:{role}:{exp}:{nonce}"
    signature = _sign(payload, settings.auth_secret)
    token_raw = f"{payload}:{signature}".encode("utf-8")
    return base64.urlsafe_b64encode(token_raw).decode("utf-8").rstrip("=")


def decode_access_token(token: str | None) -> TokenClaims:
    """Check signature and expiry of a bearer token.

    The signature may come from the current secret or any previous one, so
    tokens survive a key rotation until they expire.
    """
    if not token:
        raise MissingTokenError()
    padding = "=" * (-len(token) % 4)
    try:
        decoded = base64.urlsafe_b64decode((token + padding).encode("utf-8")).decode("utf-8")
        user_id_str, role, exp_str, nonce, signature = decoded.split(":", 4)
    except ValueError as exc:
        raise InvalidTokenError() from exc
    payload = f"{user_id_str}:{role}:{exp_str}:{nonce}"

    if not any(
        hmac.compare_digest(_sign(payload, secret).encode("utf-8"), signature.encode("utf-8"))
        for secret in settings.verification_secrets
        if secret
    ):
        raise InvalidTokenError()

    try:
        exp = int(exp_str)
        user_id = int(user_id_str)
    except ValueError as exc:
        raise InvalidTokenError() from exc
    if exp < int(time.time()):
        raise ExpiredTokenError()
    return TokenClaims(user_id=user_id, role=role, expires_at=exp)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise MissingTokenError()

    try:
        claims = decode_access_token(credentials.credentials)
    except AuthenticationError as exc:
        logger.warning("token rejected reason=%s", exc.message)
        raise

    user = db.get(User, claims.user_id)
    if user is None:
        logger.warning("token rejected reason=unknown user user_id=%s", claims.user_id)
        raise UnknownUserError()
    return user


def check_role(user: User | None, allowed_roles: set[str] | frozenset[str]) -> User:
    if user is None:
        raise AuthenticationError("Authentication required")
    role = (user.role or "").lower()
    if role not in allowed_roles:
        logger.info("permission denied user_id=%s role=%s allowed=%s", user.id, role, sorted(allowed_roles))
        raise AuthorizationError("Permission denied")
    return user


def require_roles(*roles: str) -> Callable[..., User]:
    allowed = frozenset(role.lower() for role in roles)
    if not allowed:
        raise ValueError("require_roles needs at least one role")
    unknown = allowed.difference(ROLES)
    if unknown:
        raise ValueError(f"Unknown roles: {', '.join(sorted(unknown))}")

    def dependency(current_user: User = Depends(get_current_user)) -> User:
        return check_role(current_user, allowed)

    return dependency
