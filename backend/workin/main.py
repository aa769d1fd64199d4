from __future__ import annotations

import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from workin.api import applications, auth, jobs
from workin.config import settings
from workin.database import Base, engine
from workin.errors import register_exception_handlers
from workin.logging_config import get_logger, setup_logging
from workin.models import application, job, user  # noqa: F401


setup_logging(settings.log_level, json_logs=settings.json_logs)
logger = get_logger(__name__)

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
)
register_exception_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


@app.on_event("startup")
def on_startup() -> None:
    settings.ensure_directories()
    Base.metadata.create_all(bind=engine)
    logger.info("%s API started (%s)", settings.app_name, settings.environment)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": f"{settings.app_name} Backend API is running!", "status": "OK"}


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(jobs.router, prefix="/api/jobs", tags=["jobs"])
app.include_router(applications.job_router, prefix="/api/jobs", tags=["applications"])
app.include_router(applications.router, prefix="/api/applications", tags=["applications"])
