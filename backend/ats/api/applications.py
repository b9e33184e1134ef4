from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from ats.auth import get_current_user, require_roles
from ats.database import get_db
from ats.errors import AuthorizationError, ConflictError, NotFoundError
from ats.models.application import Application
from ats.models.application_event import ApplicationStatusEvent
from ats.models.job import Job
from ats.models.user import ADMIN, RECRUITER, STUDENT, User
from ats.schemas.application import (
    ApplicantOut,
    ApplicationCreate,
    ApplicationOut,
    ApplicationStatusUpdate,
    StatusEventOut,
    StudentApplicationOut,
)
from ats.services.status_machine import PENDING, can_manage, parse_status


router = APIRouter()
logger = logging.getLogger(__name__)

ALREADY_APPLIED = "You have already applied to this job"


@router.post("/apply/{job_id}", response_model=ApplicationOut)
def apply_to_job(
    job_id: int,
    payload: ApplicationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(STUDENT)),
) -> Application:
    job = db.get(Job, job_id)
    if not job:
        raise NotFoundError("Job not found")

    existing = (
        db.query(Application)
        .filter(Application.student_id == current_user.id, Application.job_id == job_id)
        .first()
    )
    if existing:
        raise ConflictError(ALREADY_APPLIED)

    application = Application(
        student_id=current_user.id,
        job_id=job.id,
        recruiter_id=job.posted_by_id,
        status=PENDING,
        resume_url=payload.resume_url,
        cover_letter=payload.cover_letter,
        ai_score=payload.ai_score,
        analysis=payload.analysis,
    )
    db.add(application)
    # Counter and insert share one transaction.
    db.query(Job).filter(Job.id == job.id).update(
        {Job.applications_count: Job.applications_count + 1},
        synchronize_session=False,
    )
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(ALREADY_APPLIED) from exc
    db.refresh(application)
    logger.info("application created application_id=%s job_id=%s student_id=%s", application.id, job.id, current_user.id)
    return application


@router.get("/job/{job_id}", response_model=list[ApplicantOut])
def list_job_applications(
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(RECRUITER, ADMIN)),
) -> list[Application]:
    job = db.get(Job, job_id)
    if not job:
        raise NotFoundError("Job not found")
    if not current_user.is_admin and job.posted_by_id != current_user.id:
        raise AuthorizationError("You can only view applications for jobs you posted")

    return (
        db.query(Application)
        .options(joinedload(Application.student))
        .filter(Application.job_id == job_id)
        .order_by(Application.applied_date.desc(), Application.id.desc())
        .all()
    )


@router.get("/me", response_model=list[StudentApplicationOut])
def list_my_applications(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(STUDENT)),
) -> list[Application]:
    return (
        db.query(Application)
        .options(joinedload(Application.job))
        .filter(Application.student_id == current_user.id)
        .order_by(Application.applied_date.desc(), Application.id.desc())
        .all()
    )


@router.put("/{app_id}/status", response_model=ApplicationOut)
def update_application_status(
    app_id: int,
    payload: ApplicationStatusUpdate | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(RECRUITER, ADMIN)),
) -> Application:
    application = db.get(Application, app_id)
    if not application:
        raise NotFoundError("Application not found")
    if not can_manage(current_user, application):
        raise AuthorizationError("Not authorized to update this application")

    new_status = parse_status(payload.status if payload else None)
    current_status = application.status
    if new_status == current_status:
        return application

    application.status = new_status
    db.add(
        ApplicationStatusEvent(
            application_id=application.id,
            from_status=current_status,
            to_status=new_status,
            changed_by_id=current_user.id,
        )
    )
    db.commit()
    db.refresh(application)
    logger.info(
        "application status changed application_id=%s from=%s to=%s by=%s",
        application.id,
        current_status,
        new_status,
        current_user.id,
    )
    return application


@router.get("/{app_id}/history", response_model=list[StatusEventOut])
def application_history(
    app_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[ApplicationStatusEvent]:
    application = db.get(Application, app_id)
    if not application:
        raise NotFoundError("Application not found")
    if not (can_manage(current_user, application) or current_user.id == application.student_id):
        raise AuthorizationError("Not authorized to view this application")

    return (
        db.query(ApplicationStatusEvent)
        .filter(ApplicationStatusEvent.application_id == app_id)
        .order_by(ApplicationStatusEvent.changed_at.asc(), ApplicationStatusEvent.id.asc())
        .all()
    )
