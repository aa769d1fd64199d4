from workin.schemas.application import (
    ApplicationDetailOut,
    ApplicationListResponse,
    ApplicationMutationResponse,
    ApplicationOut,
    ApplicationStatusUpdate,
)
from workin.schemas.auth import AuthResponse, LoginRequest, MeResponse, SignupRequest, UserProfileOut
from workin.schemas.common import CandidateSummary, HrSummary, MessageResponse, PaginationOut
from workin.schemas.job import JobCreate, JobListFilters, JobListResponse, JobMutationResponse, JobOut, JobUpdate

__all__ = [
    "SignupRequest",
    "LoginRequest",
    "AuthResponse",
    "MeResponse",
    "UserProfileOut",
    "PaginationOut",
    "MessageResponse",
    "HrSummary",
    "CandidateSummary",
    "JobCreate",
    "JobUpdate",
    "JobOut",
    "JobListFilters",
    "JobListResponse",
    "JobMutationResponse",
    "ApplicationStatusUpdate",
    "ApplicationOut",
    "ApplicationDetailOut",
    "ApplicationListResponse",
    "ApplicationMutationResponse",
]
