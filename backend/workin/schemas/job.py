from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from workin.schemas.common import HrSummary, PaginationOut


class JobCreate(BaseModel):
    title: str | None = None
    company: str | None = None
    location: str | None = None
    description: str | None = None
    requirements: str | None = None
    salary: str | None = Field(default=None, max_length=255)
    type: str | None = Field(default=None, max_length=50)


class JobUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    company: str | None = Field(default=None, min_length=1, max_length=255)
    location: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    requirements: str | None = Field(default=None, min_length=1)
    salary: str | None = Field(default=None, max_length=255)
    type: str | None = Field(default=None, min_length=1, max_length=50)


class JobOut(BaseModel):
    id: int
    title: str
    company: str
    location: str
    description: str
    requirements: str
    salary: str | None = None
    type: str
    hr_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
    hr: HrSummary | None = None

    class Config:
        from_attributes = True


class JobListFilters(BaseModel):
    search: str | None = None
    location: str | None = None
    company: str | None = None
    type: str | None = None
    skills: str | None = None
    salaryMin: str | None = None
    salaryMax: str | None = None
    sortBy: str
    sortOrder: str


class JobListResponse(BaseModel):
    jobs: list[JobOut]
    pagination: PaginationOut
    filters: JobListFilters | None = None


class JobMutationResponse(BaseModel):
    message: str
    job: JobOut
