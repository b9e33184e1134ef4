from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from ats.api import admin, applications, auth, jobs, resumes
from ats.bootstrap import create_tables, seed_admin
from ats.config import settings
from ats.database import SessionLocal, engine, ping_database
from ats import models  # noqa: F401


logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Validation failed"
    first = errors[0]
    message = str(first.get("msg", "Validation failed"))
    if first.get("type") == "value_error":
        return message.removeprefix("Value error, ")
    field = next((str(part) for part in reversed(first.get("loc", ())) if isinstance(part, str)), None)
    if field and field not in ("body", "query", "path"):
        return f"{field}: {message}"
    return message


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"message": _validation_message(exc)})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error method=%s path=%s", request.method, request.url.path)
    content = {"message": "Internal server error"}
    if settings.is_development:
        content["error"] = str(exc)
    return JSONResponse(status_code=500, content=content)


def create_app() -> FastAPI:
    settings.validate()
    settings.ensure_directories()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        create_tables(engine)
        seed_admin(engine)
        yield

    application = FastAPI(title=settings.app_name, lifespan=lifespan)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_exception_handler(StarletteHTTPException, http_error_handler)
    application.add_exception_handler(RequestValidationError, validation_error_handler)
    application.add_exception_handler(Exception, unhandled_error_handler)

    @application.get("/api/health")
    def health() -> dict[str, str]:
        with SessionLocal() as db:
            connected = ping_database(db)
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "database": "connected" if connected else "disconnected",
        }

    application.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    application.include_router(jobs.router, prefix="/api/jobs", tags=["jobs"])
    application.include_router(applications.router, prefix="/api/applications", tags=["applications"])
    application.include_router(resumes.router, prefix="/api/resumes", tags=["resumes"])
    application.include_router(admin.router, prefix="/api/admin", tags=["admin"])

    application.mount(
        settings.resume_url_prefix.rstrip("/"),
        StaticFiles(directory=settings.upload_dir),
        name="resumes",
    )
    return application


app = create_app()
