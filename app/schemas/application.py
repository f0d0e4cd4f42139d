"""
Pydantic schemas for Application APIs
Request/Response models
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


# ==================== Requests ====================

class ApplicationCreate(BaseModel):
    """Body of an application submission. Length and word rules are enforced by the service."""
    message: str = Field(..., description="Message to the organization (50-500 characters, at least 10 words)")


class ApplicationStatusUpdate(BaseModel):
    """Requested status; validated by the service after authorization."""
    status: str = Field(..., description="One of: pending, viewed, contacted, archived")


# ==================== Summaries ====================

class OrganizationSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    slug: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None


class JobSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    role: Optional[str] = None
    status: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None


class JobWithOrganization(JobSummary):
    organization: Optional[OrganizationSummary] = None


class ApplicantSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    display_name: str
    country: Optional[str] = None


# ==================== Responses ====================

class ApplicationResponse(BaseModel):
    """Application record."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    job_id: UUID
    applicant_id: UUID
    message: str
    status: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    viewed_at: Optional[datetime] = None
    contacted_at: Optional[datetime] = None


class OrganizationApplicationResponse(ApplicationResponse):
    """Application as seen by the hiring organization."""
    job: Optional[JobSummary] = None
    applicant: Optional[ApplicantSummary] = None


class CrewApplicationResponse(ApplicationResponse):
    """Application as seen by the applicant."""
    job: Optional[JobWithOrganization] = None


class HasAppliedResponse(BaseModel):
    has_applied: bool
    application: Optional[ApplicationResponse] = None


class OrganizationApplicationsResponse(BaseModel):
    total: int
    applications: List[OrganizationApplicationResponse]


class CrewApplicationsResponse(BaseModel):
    total: int
    applications: List[CrewApplicationResponse]


class ApplicationStatsResponse(BaseModel):
    total: int = 0
    pending: int = 0
    viewed: int = 0
    contacted: int = 0
    archived: int = 0
