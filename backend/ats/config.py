from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote

from ats.errors import ConfigurationError


def _split_keys(raw: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass
class Settings:
    app_name: str = "Applicant Tracking System"
    environment: str = os.getenv("ENV", "development")
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./db/ats.db")
    auth_secret: str = os.getenv("AUTH_SECRET", "")
    auth_previous_secrets: tuple[str, ...] = _split_keys(os.getenv("AUTH_PREVIOUS_SECRETS", ""))
    token_ttl_seconds: int = int(os.getenv("AUTH_TOKEN_TTL_SECONDS", str(60 * 60 * 24 * 7)))
    password_hash_iterations: int = int(os.getenv("PASSWORD_HASH_ITERATIONS", "210000"))
    max_resume_size_mb: int = int(os.getenv("MAX_RESUME_SIZE_MB", "5"))
    allowed_resume_extensions: tuple[str, ...] = (".pdf", ".doc", ".docx")
    upload_dir: str = os.getenv("UPLOAD_DIR", "./public/resumes")
    resume_url_prefix: str = os.getenv("RESUME_URL_PREFIX", "/public/resumes")
    frontend_url: str = os.getenv("FRONTEND_URL", "http://localhost:5173")
    admin_email: str = os.getenv("ADMIN_EMAIL", "")
    admin_password: str = os.getenv("ADMIN_PASSWORD", "")
    admin_name: str = os.getenv("ADMIN_NAME", "Administrator")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def max_resume_size_bytes(self) -> int:
        return self.max_resume_size_mb * 1_000_000

    @property
    def verification_secrets(self) -> tuple[str, ...]:
        return (self.auth_secret, *self.auth_previous_secrets)

    def validate(self) -> None:
        if not self.auth_secret:
            raise ConfigurationError("AUTH_SECRET must be set before the service starts")
        if self.token_ttl_seconds <= 0:
            raise ConfigurationError("AUTH_TOKEN_TTL_SECONDS must be positive")

    def ensure_directories(self) -> None:
        Path(self.upload_dir).mkdir(parents=True, exist_ok=True)
        self.ensure_sqlite_directory()

    def ensure_sqlite_directory(self) -> None:
        if not self.database_url.startswith("sqlite:///"):
            return
        raw_path = self.database_url.replace("sqlite:///", "", 1)
        if not raw_path or raw_path == ":memory:":
            return
        db_path = Path(unquote(raw_path))
        if not db_path.is_absolute():
            db_path = Path(".") / db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)


settings = Settings()
