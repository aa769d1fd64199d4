from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session, joinedload, load_only

from workin.auth import get_current_user
from workin.config import settings
from workin.database import commit, get_db
from workin.errors import Conflict, InvalidStatus, NotFound, Unauthorized, parse_identifier
from workin.logging_config import get_logger
from workin.models.application import APPLICATION_STATUSES, Application
from workin.models.job import Job
from workin.models.user import User
from workin.schemas.application import (
    ApplicationDetailOut,
    ApplicationListResponse,
    ApplicationMutationResponse,
    ApplicationOut,
    ApplicationStatusUpdate,
)
from workin.schemas.common import MessageResponse
from workin.services.filters import build_application_predicate
from workin.services.listing import execute_listing
from workin.services.pagination import PageEnvelope, PageRequest, validate_pagination
from workin.services.sorting import APPLICATION_SORT_FIELDS, resolve_sort


# Mounted under /api/applications
router = APIRouter()
# Mounted under /api/jobs, for routes keyed by a job
job_router = APIRouter()
logger = get_logger(__name__)

APPLICATION_SORT_COLUMNS = {
    "createdAt": Application.created_at,
    "status": Application.status,
}
DUPLICATE_APPLICATION_MESSAGE = "Already applied for this job"
# Everything ApplicationDetailOut reads, fetched in the page query.
APPLICATION_LOAD_OPTIONS = (
    joinedload(Application.job).options(
        load_only(Job.title, Job.company, Job.location, Job.type, Job.hr_id),
        joinedload(Job.hr).load_only(User.name, User.email),
    ),
    joinedload(Application.candidate).load_only(User.name, User.email, User.phone_number),
)


def _list_applications(
    db: Session,
    page_request: PageRequest,
    sort_by: str | None,
    sort_order: str | None,
    *,
    candidate_id: int | None = None,
    job_id: int | None = None,
    status_filter: str | None = None,
) -> PageEnvelope:
    return execute_listing(
        db.query(Application),
        build_application_predicate(candidate_id=candidate_id, job_id=job_id, status=status_filter),
        resolve_sort(sort_by, sort_order, APPLICATION_SORT_FIELDS),
        page_request,
        APPLICATION_SORT_COLUMNS,
        options=APPLICATION_LOAD_OPTIONS,
        tiebreaker=Application.id,
    )


def _list_response(envelope: PageEnvelope) -> ApplicationListResponse:
    return ApplicationListResponse(
        applications=[ApplicationDetailOut.model_validate(app) for app in envelope.items],
        pagination=envelope.pagination(),
    )


@job_router.post(
    "/apply/{job_id}/{candidate_id}",
    response_model=ApplicationMutationResponse,
    status_code=status.HTTP_201_CREATED,
)
def apply_for_job(
    job_id: str,
    candidate_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ApplicationMutationResponse:
    job_id_num = parse_identifier(job_id, "job")
    candidate_id_num = parse_identifier(candidate_id, "candidate")

    if not db.get(Job, job_id_num):
        raise NotFound("Job not found")
    if not db.get(User, candidate_id_num):
        raise NotFound("Candidate not found")

    existing = (
        db.query(Application)
        .filter(Application.job_id == job_id_num, Application.candidate_id == candidate_id_num)
        .first()
    )
    if existing:
        logger.info("Candidate %s already applied for job %s", candidate_id_num, job_id_num)
        raise Conflict(DUPLICATE_APPLICATION_MESSAGE)

    application = Application(job_id=job_id_num, candidate_id=candidate_id_num, status="pending")
    db.add(application)
    # A concurrent apply for the same pair is rejected by the unique constraint.
    commit(db, conflict_message=DUPLICATE_APPLICATION_MESSAGE)
    db.refresh(application)
    logger.info(
        "User %s submitted application %s (job %s, candidate %s)",
        current_user.id,
        application.id,
        job_id_num,
        candidate_id_num,
    )
    return ApplicationMutationResponse(
        message="Application submitted successfully",
        application=ApplicationOut.model_validate(application),
    )


@job_router.get("/{job_id}/applications", response_model=ApplicationListResponse)
def list_applications_by_job(
    job_id: str,
    page: str = Query(default="1"),
    limit: str | None = Query(default=None),
    status_filter: str | None = Query(default=None, alias="status"),
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_order: str | None = Query(default=None, alias="sortOrder"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ApplicationListResponse:
    job_id_num = parse_identifier(job_id, "job")
    page_request = validate_pagination(page, limit if limit is not None else settings.default_page_limit)
    envelope = _list_applications(
        db,
        page_request,
        sort_by,
        sort_order,
        job_id=job_id_num,
        status_filter=status_filter,
    )
    return _list_response(envelope)


@router.get("/candidate/{candidate_id}", response_model=ApplicationListResponse)
def list_applications_by_candidate(
    candidate_id: str,
    page: str = Query(default="1"),
    limit: str | None = Query(default=None),
    status_filter: str | None = Query(default=None, alias="status"),
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_order: str | None = Query(default=None, alias="sortOrder"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ApplicationListResponse:
    candidate_id_num = parse_identifier(candidate_id, "candidate")
    page_request = validate_pagination(page, limit if limit is not None else settings.default_page_limit)
    envelope = _list_applications(
        db,
        page_request,
        sort_by,
        sort_order,
        candidate_id=candidate_id_num,
        status_filter=status_filter,
    )
    return _list_response(envelope)


@router.patch("/{application_id}/status", response_model=ApplicationMutationResponse)
def update_application_status(
    application_id: str,
    payload: ApplicationStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ApplicationMutationResponse:
    application_id_num = parse_identifier(application_id, "application")
    if payload.status not in APPLICATION_STATUSES:
        raise InvalidStatus("Invalid status")

    application = db.get(Application, application_id_num)
    if not application:
        raise NotFound("Application not found")

    application.status = payload.status
    application.response = payload.response or None
    db.add(application)
    commit(db)
    db.refresh(application)
    logger.info("User %s set application %s to %s", current_user.id, application.id, application.status)
    return ApplicationMutationResponse(
        message="Application status updated successfully",
        application=ApplicationOut.model_validate(application),
    )


@router.delete("/{application_id}/candidate/{candidate_id}", response_model=MessageResponse)
def delete_application(
    application_id: str,
    candidate_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    application_id_num = parse_identifier(application_id, "application")
    candidate_id_num = parse_identifier(candidate_id, "candidate")

    application = db.get(Application, application_id_num)
    if not application:
        raise NotFound("Application not found")
    if application.candidate_id != candidate_id_num:
        logger.warning(
            "Candidate %s tried to delete application %s owned by %s",
            candidate_id_num,
            application_id_num,
            application.candidate_id,
        )
        raise Unauthorized("Unauthorized to delete this application")

    db.delete(application)
    commit(db)
    logger.info("User %s deleted application %s", current_user.id, application_id_num)
    return MessageResponse(message="Application deleted successfully")
