from __future__ import annotations

from collections import Counter
from datetime import date, datetime, timedelta, timezone
from typing import Any

from sqlalchemy.orm import Session

from ats.models.application import Application
from ats.models.job import Job
from ats.models.user import RECRUITER, User


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _iso(value: datetime | None) -> str:
    return (value or _utcnow()).isoformat()


def _daily_counts(values: list[datetime | None], days: list[date]) -> list[dict[str, Any]]:
    counts = Counter(value.date() for value in values if value is not None)
    return [{"day": day.isoformat(), "count": counts.get(day, 0)} for day in days]


class AdminOverviewService:
    def __init__(self, days: int = 7, recent_limit: int = 5) -> None:
        self.days = days
        self.recent_limit = recent_limit

    def window(self, today: date | None = None) -> list[date]:
        end = today or _utcnow().date()
        start = end - timedelta(days=self.days - 1)
        return [start + timedelta(days=i) for i in range(self.days)]

    def build(self, db: Session, today: date | None = None) -> dict[str, Any]:
        days = self.window(today)
        since = datetime.combine(days[0], datetime.min.time())

        user_dates = [row.created_at for row in db.query(User.created_at).filter(User.created_at >= since).all()]
        application_dates = [
            row.applied_date
            for row in db.query(Application.applied_date).filter(Application.applied_date >= since).all()
        ]

        return {
            "kpis": {
                "totalUsers": db.query(User).count(),
                "activeRecruiters": db.query(User).filter(User.role == RECRUITER).count(),
                "totalJobs": db.query(Job).count(),
                "activeApplications": db.query(Application).count(),
            },
            "usersGrowth": _daily_counts(user_dates, days),
            "applicationsByDay": _daily_counts(application_dates, days),
            "recentActivity": self._recent_activity(db),
        }

    def _recent_activity(self, db: Session) -> list[dict[str, Any]]:
        limit = self.recent_limit
        activity: list[dict[str, Any]] = []

        for user in db.query(User).order_by(User.created_at.desc(), User.id.desc()).limit(limit):
            activity.append(
                {"id": f"u-{user.id}", "type": "signup", "text": f"{user.name} signed up", "time": _iso(user.created_at)}
            )
        for job in db.query(Job).order_by(Job.created_at.desc(), Job.id.desc()).limit(limit):
            activity.append(
                {"id": f"j-{job.id}", "type": "job_post", "text": f"{job.title} posted", "time": _iso(job.created_at)}
            )
        for application in db.query(Application).order_by(Application.applied_date.desc(), Application.id.desc()).limit(limit):
            activity.append(
                {
                    "id": f"a-{application.id}",
                    "type": "application",
                    "text": "Application submitted",
                    "time": _iso(application.applied_date),
                }
            )

        activity.sort(key=lambda item: item["time"], reverse=True)
        return activity
