from ats.schemas.admin import AdminOverview, AdminUserCreate, AdminUserCreated, RoleUpdate
from ats.schemas.application import (
    ApplicantOut,
    ApplicationCreate,
    ApplicationOut,
    ApplicationStatusUpdate,
    StatusEventOut,
    StudentApplicationOut,
)
from ats.schemas.auth import AuthResponse, LoginRequest, MeResponse, SignupRequest, UserOut
from ats.schemas.job import JobCreate, JobOut, JobSummary
from ats.schemas.resume import ResumeAnalysis, ResumeOut, ResumeUploadResponse

__all__ = [
    "AdminOverview",
    "AdminUserCreate",
    "AdminUserCreated",
    "RoleUpdate",
    "ApplicantOut",
    "ApplicationCreate",
    "ApplicationOut",
    "ApplicationStatusUpdate",
    "StatusEventOut",
    "StudentApplicationOut",
    "AuthResponse",
    "LoginRequest",
    "MeResponse",
    "SignupRequest",
    "UserOut",
    "JobCreate",
    "JobOut",
    "JobSummary",
    "ResumeAnalysis",
    "ResumeOut",
    "ResumeUploadResponse",
]
