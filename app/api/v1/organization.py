"""Organization endpoints - applications received on the organization's jobs."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_application_queries, get_owned_organization_ids
from app.core.exceptions import Forbidden
from app.schemas.application import (
    ApplicationStatsResponse,
    OrganizationApplicationResponse,
    OrganizationApplicationsResponse,
)
from app.services.application_queries import ApplicationQueries

router = APIRouter()


def _scope(owned: List[UUID], organization_id: Optional[UUID]) -> List[UUID]:
    """Organizations a request covers; an explicit id must be one the caller owns."""
    if organization_id is None:
        return owned
    if organization_id not in owned:
        raise Forbidden()
    return [organization_id]


@router.get("/applications", response_model=OrganizationApplicationsResponse)
async def list_organization_applications(
    organization_id: Optional[UUID] = Query(None, description="Limit to one owned organization"),
    owned: List[UUID] = Depends(get_owned_organization_ids),
    queries: ApplicationQueries = Depends(get_application_queries),
):
    """
    List applications for the organization's jobs, newest first

    **Auth**: Organization owner (JWT required)

    Without `organization_id`, applications across every organization the
    caller owns are returned.
    """
    scope = _scope(owned, organization_id)
    if len(scope) == 1:
        applications = await queries.list_for_organization(scope[0])
    else:
        applications = await queries.list_for_organizations(scope)

    return OrganizationApplicationsResponse(
        total=len(applications),
        applications=[OrganizationApplicationResponse.model_validate(a) for a in applications],
    )


@router.get("/applications/stats", response_model=ApplicationStatsResponse)
async def organization_application_stats(
    organization_id: Optional[UUID] = Query(None, description="Limit to one owned organization"),
    owned: List[UUID] = Depends(get_owned_organization_ids),
    queries: ApplicationQueries = Depends(get_application_queries),
):
    """
    Count applications per status

    **Auth**: Organization owner (JWT required)
    """
    totals = {"total": 0, "pending": 0, "viewed": 0, "contacted": 0, "archived": 0}
    for org_id in _scope(owned, organization_id):
        stats = await queries.stats_for_organization(org_id)
        for key, value in stats.items():
            totals[key] += value

    return ApplicationStatsResponse(**totals)
