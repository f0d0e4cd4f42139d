"""Crew endpoints - an applicant's own applications."""

from fastapi import APIRouter, Depends

from app.api.deps import get_application_queries, get_current_user
from app.models.user import User
from app.schemas.application import CrewApplicationResponse, CrewApplicationsResponse
from app.services.application_queries import ApplicationQueries

router = APIRouter()


@router.get("/applications", response_model=CrewApplicationsResponse)
async def list_my_applications(
    current_user: User = Depends(get_current_user),
    queries: ApplicationQueries = Depends(get_application_queries),
):
    """
    List the current user's applications with job and organization details

    **Auth**: Crew member (JWT required)
    """
    applications = await queries.list_for_applicant(current_user.id)
    return CrewApplicationsResponse(
        total=len(applications),
        applications=[CrewApplicationResponse.model_validate(a) for a in applications],
    )
