from __future__ import annotations

import logging
import uuid
from pathlib import Path

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from ats.auth import require_roles
from ats.config import settings
from ats.database import get_db
from ats.errors import ValidationFailed
from ats.models.resume import Resume
from ats.models.user import STUDENT, User
from ats.schemas.resume import ResumeOut, ResumeUploadResponse
from ats.services.resume_analyzer import ResumeAnalyzer


router = APIRouter()
logger = logging.getLogger(__name__)
analyzer = ResumeAnalyzer()

CHUNK_SIZE = 1024 * 1024


def _store_upload(file: UploadFile, target: Path, max_bytes: int) -> int:
    written = 0
    with target.open("wb") as handle:
        while True:
            chunk = file.file.read(CHUNK_SIZE)
            if not chunk:
                break
            written += len(chunk)
            if written > max_bytes:
                break
            handle.write(chunk)
    if written > max_bytes:
        target.unlink(missing_ok=True)
        raise ValidationFailed(f"File exceeds {settings.max_resume_size_mb}MB limit")
    return written


@router.post("/upload", response_model=ResumeUploadResponse)
def upload_resume(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(STUDENT)),
) -> ResumeUploadResponse:
    if not file.filename:
        raise ValidationFailed("No file uploaded")

    suffix = Path(file.filename).suffix.lower()
    if suffix not in settings.allowed_resume_extensions:
        logger.info("resume rejected user_id=%s reason=extension suffix=%s", current_user.id, suffix)
        raise ValidationFailed("Only PDF/DOC/DOCX allowed")

    stored_name = f"resume-{uuid.uuid4().hex}{suffix}"
    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    target = upload_dir / stored_name

    try:
        size = _store_upload(file, target, settings.max_resume_size_bytes)
    except ValidationFailed:
        logger.info("resume rejected user_id=%s reason=size", current_user.id)
        raise
    if size == 0:
        target.unlink(missing_ok=True)
        raise ValidationFailed("Uploaded file is empty")

    analysis = analyzer.analyze(str(target))
    resume = Resume(
        student_id=current_user.id,
        filename=Path(file.filename).name,
        stored_name=stored_name,
        file_path=str(target),
        resume_url=f"{settings.resume_url_prefix.rstrip('/')}/{stored_name}",
        size_bytes=size,
        analysis=analysis,
    )
    db.add(resume)
    db.commit()
    db.refresh(resume)
    logger.info("resume uploaded resume_id=%s user_id=%s bytes=%s score=%s", resume.id, current_user.id, size, analysis["score"])

    return ResumeUploadResponse(id=resume.id, resume_url=resume.resume_url, analysis=analysis)


@router.get("", response_model=list[ResumeOut])
def list_resumes(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(STUDENT)),
) -> list[Resume]:
    return (
        db.query(Resume)
        .filter(Resume.student_id == current_user.id)
        .order_by(Resume.upload_date.desc(), Resume.id.desc())
        .all()
    )
