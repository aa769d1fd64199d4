from __future__ import annotations

from pydantic import BaseModel


class PaginationOut(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class MessageResponse(BaseModel):
    message: str


class HrSummary(BaseModel):
    name: str
    email: str | None = None

    class Config:
        from_attributes = True


class CandidateSummary(BaseModel):
    name: str
    email: str
    phone_number: str | None = None

    class Config:
        from_attributes = True
