"""Job endpoints - apply to a job and check application state."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.api.deps import (
    get_application_queries,
    get_application_service,
    get_current_user_optional,
)
from app.models.user import User
from app.schemas.application import ApplicationCreate, ApplicationResponse, HasAppliedResponse
from app.services.application_queries import ApplicationQueries
from app.services.application_service import ApplicationService

router = APIRouter()


@router.post("/{job_id}/apply", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
async def apply_to_job(
    job_id: UUID,
    application_in: ApplicationCreate,
    current_user: Optional[User] = Depends(get_current_user_optional),
    service: ApplicationService = Depends(get_application_service),
):
    """
    Submit an application for a job

    **Auth**: Crew member (JWT required)

    **Errors**:
    - 401: not authenticated
    - 400: message shorter than 50 / longer than 500 characters, or fewer than 10 words
    - 404: job does not exist
    - 409: already applied to this job
    """
    applicant_id = current_user.id if current_user else None
    return await service.create_application(job_id, applicant_id, application_in.message)


@router.get("/{job_id}/applications", response_model=HasAppliedResponse)
async def check_if_applied(
    job_id: UUID,
    current_user: Optional[User] = Depends(get_current_user_optional),
    queries: ApplicationQueries = Depends(get_application_queries),
):
    """
    Check if the current user has applied to a job

    **Auth**: Optional. Anonymous callers always get `has_applied: false`.
    """
    identity = current_user.id if current_user else None
    application = await queries.get_application_for(job_id, identity)
    return HasAppliedResponse(
        has_applied=application is not None,
        application=ApplicationResponse.model_validate(application) if application else None,
    )
