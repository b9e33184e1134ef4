"""Application status rules.

Pending is only ever the creation default. Any settable status may be written
from any current status by the application's recruiter or an admin.
"""

from __future__ import annotations

from typing import Any

from ats.errors import ValidationFailed
from ats.models.application import Application
from ats.models.user import User


PENDING = "Pending"
REVIEWED = "Reviewed"
INTERVIEWING = "Interviewing"
REJECTED = "Rejected"
ACCEPTED = "Accepted"

STATUSES = (PENDING, REVIEWED, INTERVIEWING, REJECTED, ACCEPTED)
SETTABLE_STATUSES = (REVIEWED, INTERVIEWING, REJECTED, ACCEPTED)

_BY_LOWER = {status.lower(): status for status in SETTABLE_STATUSES}


def parse_status(value: Any) -> str:
    canonical = _BY_LOWER.get(value.strip().lower()) if isinstance(value, str) else None
    if canonical is None:
        raise ValidationFailed(f"Invalid status. Allowed: {', '.join(SETTABLE_STATUSES)}")
    return canonical


def can_manage(user: User, application: Application) -> bool:
    return user.is_admin or user.id == application.recruiter_id
