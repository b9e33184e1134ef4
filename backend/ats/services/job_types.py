from __future__ import annotations

import re


FULL_TIME = "Full-Time"
PART_TIME = "Part-Time"
INTERNSHIP = "Internship"
CONTRACT = "Contract"
JOB_TYPES = (FULL_TIME, PART_TIME, INTERNSHIP, CONTRACT)

_JOB_TYPE_LOOKUP = {
    "fulltime": FULL_TIME,
    "full": FULL_TIME,
    "ft": FULL_TIME,
    "parttime": PART_TIME,
    "part": PART_TIME,
    "pt": PART_TIME,
    "internship": INTERNSHIP,
    "intern": INTERNSHIP,
    "contract": CONTRACT,
    "contractor": CONTRACT,
    "freelance": CONTRACT,
}


def _job_type_key(value: str) -> str:
    return re.sub(r"[\s_\-]+", "", value.strip().lower())


def normalize_job_type(value: str | None) -> str:
    """Map free-text job types such as ``"fulltime"`` or ``"part time"`` to the stored value."""
    if value is None or not value.strip():
        raise ValueError("Job type is required")
    canonical = _JOB_TYPE_LOOKUP.get(_job_type_key(value))
    if canonical is None:
        raise ValueError(f"Invalid job type '{value}'. Allowed: {', '.join(JOB_TYPES)}")
    return canonical


def normalize_skills(skills: list[str] | None) -> list[str]:
    cleaned: list[str] = []
    seen: set[str] = set()
    for skill in skills or []:
        value = (skill or "").strip()
        key = value.lower()
        if not value or key in seen:
            continue
        seen.add(key)
        cleaned.append(value)
    return cleaned
