from ats.models.application import Application
from ats.models.application_event import ApplicationStatusEvent
from ats.models.job import Job
from ats.models.resume import Resume
from ats.models.user import User

__all__ = ["Application", "ApplicationStatusEvent", "Job", "Resume", "User"]
