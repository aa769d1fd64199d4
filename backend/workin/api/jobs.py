from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session, joinedload

from workin.auth import get_current_user
from workin.config import settings
from workin.database import commit, get_db
from workin.errors import InvalidPayload, NotFound, parse_identifier
from workin.logging_config import get_logger
from workin.models.job import Job
from workin.models.user import User
from workin.schemas.common import MessageResponse
from workin.schemas.job import JobCreate, JobListFilters, JobListResponse, JobMutationResponse, JobOut, JobUpdate
from workin.services.filters import build_job_predicate
from workin.services.listing import execute_listing
from workin.services.pagination import validate_pagination
from workin.services.sorting import JOB_SORT_FIELDS, resolve_sort


router = APIRouter()
logger = get_logger(__name__)

JOB_SORT_COLUMNS = {
    "createdAt": Job.created_at,
    "title": Job.title,
    "company": Job.company,
    "location": Job.location,
    "type": Job.type,
}
REQUIRED_JOB_FIELDS = ("title", "company", "location", "description", "requirements")
DEFAULT_JOB_TYPE = "full-time"


def _trimmed(value: str | None) -> str:
    return value.strip() if isinstance(value, str) else ""


def _get_job_or_404(db: Session, job_id: int, with_hr: bool = False) -> Job:
    query = db.query(Job)
    if with_hr:
        query = query.options(joinedload(Job.hr))
    job = query.filter(Job.id == job_id).first()
    if not job:
        raise NotFound("Job not found")
    return job


def _page_limit(limit: str | None) -> str | int:
    return limit if limit is not None else settings.default_page_limit


@router.get("", response_model=JobListResponse)
def list_jobs(
    page: str = Query(default="1"),
    limit: str | None = Query(default=None),
    search: str | None = Query(default=None),
    location: str | None = Query(default=None),
    company: str | None = Query(default=None),
    job_type: str | None = Query(default=None, alias="type"),
    skills: str | None = Query(default=None),
    salary_min: str | None = Query(default=None, alias="salaryMin"),
    salary_max: str | None = Query(default=None, alias="salaryMax"),
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_order: str | None = Query(default=None, alias="sortOrder"),
    db: Session = Depends(get_db),
) -> JobListResponse:
    page_request = validate_pagination(page, _page_limit(limit))
    predicate = build_job_predicate(
        search=search,
        location=location,
        company=company,
        job_type=job_type,
        skills=skills,
        salary_min=salary_min,
        salary_max=salary_max,
    )
    sort_spec = resolve_sort(sort_by, sort_order, JOB_SORT_FIELDS)

    envelope = execute_listing(
        db.query(Job),
        predicate,
        sort_spec,
        page_request,
        JOB_SORT_COLUMNS,
        options=(joinedload(Job.hr),),
        tiebreaker=Job.id,
    )
    return JobListResponse(
        jobs=[JobOut.model_validate(job) for job in envelope.items],
        pagination=envelope.pagination(),
        filters=JobListFilters(
            search=search,
            location=location,
            company=company,
            type=job_type,
            skills=skills,
            salaryMin=salary_min,
            salaryMax=salary_max,
            sortBy=sort_spec.field,
            sortOrder=sort_spec.direction,
        ),
    )


@router.post("/hr/{hr_id}", response_model=JobMutationResponse, status_code=status.HTTP_201_CREATED)
def create_job(
    hr_id: str,
    payload: JobCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> JobMutationResponse:
    fields = {name: _trimmed(getattr(payload, name)) for name in REQUIRED_JOB_FIELDS}
    if not all(fields.values()):
        raise InvalidPayload("All required fields must be filled")
    hr_id_num = parse_identifier(hr_id, "HR")

    hr = db.get(User, hr_id_num)
    if not hr:
        raise NotFound("HR user not found")

    job = Job(
        **fields,
        salary=_trimmed(payload.salary) or None,
        type=_trimmed(payload.type) or DEFAULT_JOB_TYPE,
        hr_id=hr_id_num,
    )
    db.add(job)
    commit(db)
    db.refresh(job)
    logger.info("User %s created job %s for HR %s", current_user.id, job.id, hr_id_num)
    return JobMutationResponse(message="Job created successfully", job=JobOut.model_validate(job))


@router.get("/hr/{hr_id}", response_model=JobListResponse)
def list_jobs_by_hr(
    hr_id: str,
    page: str = Query(default="1"),
    limit: str | None = Query(default=None),
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_order: str | None = Query(default=None, alias="sortOrder"),
    db: Session = Depends(get_db),
) -> JobListResponse:
    hr_id_num = parse_identifier(hr_id, "HR")
    page_request = validate_pagination(page, _page_limit(limit))
    sort_spec = resolve_sort(sort_by, sort_order, JOB_SORT_FIELDS)

    envelope = execute_listing(
        db.query(Job),
        build_job_predicate(hr_id=hr_id_num),
        sort_spec,
        page_request,
        JOB_SORT_COLUMNS,
        options=(joinedload(Job.hr),),
        tiebreaker=Job.id,
    )
    logger.debug("HR %s has %s jobs", hr_id_num, envelope.total)
    return JobListResponse(
        jobs=[JobOut.model_validate(job) for job in envelope.items],
        pagination=envelope.pagination(),
    )


@router.get("/{job_id}", response_model=JobOut)
def get_job(job_id: str, db: Session = Depends(get_db)) -> JobOut:
    job = _get_job_or_404(db, parse_identifier(job_id, "job"), with_hr=True)
    return JobOut.model_validate(job)


@router.put("/{job_id}", response_model=JobMutationResponse)
def update_job(
    job_id: str,
    payload: JobUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> JobMutationResponse:
    job = _get_job_or_404(db, parse_identifier(job_id, "job"))

    changes = payload.model_dump(exclude_unset=True)
    for key, value in changes.items():
        if isinstance(value, str):
            value = value.strip()
        if key in REQUIRED_JOB_FIELDS + ("type",) and not value:
            raise InvalidPayload(f"{key} cannot be empty")
        setattr(job, key, value or None)

    db.add(job)
    commit(db)
    db.refresh(job)
    logger.info("User %s updated job %s (%s)", current_user.id, job.id, ", ".join(sorted(changes)) or "no changes")
    return JobMutationResponse(message="Job updated successfully", job=JobOut.model_validate(job))


@router.delete("/{job_id}", response_model=MessageResponse)
def delete_job(
    job_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    job_id_num = parse_identifier(job_id, "job")
    job = _get_job_or_404(db, job_id_num)
    db.delete(job)
    commit(db)
    logger.info("User %s deleted job %s", current_user.id, job_id_num)
    return MessageResponse(message="Job deleted successfully")
