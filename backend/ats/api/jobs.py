from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ats.auth import get_current_user, require_roles
from ats.database import get_db
from ats.errors import NotFoundError
from ats.models.job import Job
from ats.models.user import ADMIN, RECRUITER, User
from ats.schemas.job import JobCreate, JobOut


router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=list[JobOut])
def list_jobs(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[Job]:
    return db.query(Job).order_by(Job.created_at.desc(), Job.id.desc()).all()


@router.get("/{job_id}", response_model=JobOut)
def get_job(
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Job:
    job = db.get(Job, job_id)
    if not job:
        raise NotFoundError("Job not found")
    return job


@router.post("", response_model=JobOut, status_code=status.HTTP_201_CREATED)
def create_job(
    payload: JobCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(RECRUITER, ADMIN)),
) -> Job:
    job = Job(
        title=payload.title,
        company=payload.company,
        location=payload.location,
        salary=payload.salary,
        job_type=payload.job_type,
        description=payload.description,
        required_skills=payload.required_skills,
        posted_by_id=current_user.id,
        applications_count=0,
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    logger.info("job posted job_id=%s posted_by=%s type=%s", job.id, current_user.id, job.job_type)
    return job
