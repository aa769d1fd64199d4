from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from workin.schemas.common import CandidateSummary, HrSummary, PaginationOut


class ApplicationStatusUpdate(BaseModel):
    status: str = ""
    response: str | None = Field(default=None, max_length=5000)


class ApplicationJobSummary(BaseModel):
    id: int
    title: str
    company: str
    location: str
    type: str
    hr: HrSummary | None = None

    class Config:
        from_attributes = True


class ApplicationOut(BaseModel):
    id: int
    job_id: int
    candidate_id: int
    status: str
    response: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class ApplicationDetailOut(ApplicationOut):
    job: ApplicationJobSummary | None = None
    candidate: CandidateSummary | None = None


class ApplicationListResponse(BaseModel):
    applications: list[ApplicationDetailOut]
    pagination: PaginationOut


class ApplicationMutationResponse(BaseModel):
    message: str
    application: ApplicationOut
