"""Application endpoints - status changes by the hiring organization."""

from uuid import UUID

from fastapi import APIRouter, Depends

from app.api.deps import get_application_service, get_current_user
from app.models.user import User
from app.schemas.application import ApplicationResponse, ApplicationStatusUpdate
from app.services.application_service import ApplicationService

router = APIRouter()


@router.patch("/{application_id}", response_model=ApplicationResponse)
async def update_application_status(
    application_id: UUID,
    update: ApplicationStatusUpdate,
    current_user: User = Depends(get_current_user),
    service: ApplicationService = Depends(get_application_service),
):
    """
    Update application status

    **Auth**: Owner of the organization that posted the job

    **Errors**:
    - 401: not authenticated
    - 403: the job belongs to another organization
    - 404: unknown application, or the caller owns no organization
    - 400: status is not one of pending, viewed, contacted, archived
    """
    return await service.update_status(application_id, update.status, current_user.id)
