from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Reads snake_case or camelCase, writes camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class MessageResponse(CamelModel):
    message: str


def normalize_email(value: str) -> str:
    email = (value or "").strip().lower()
    if "@" not in email:
        raise ValueError("Valid email is required")
    left, right = email.split("@", 1)
    if not left or "." not in right or right.startswith(".") or right.endswith("."):
        raise ValueError("Valid email is required")
    return email


def require_text(value: str, label: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValueError(f"{label} is required")
    return cleaned
