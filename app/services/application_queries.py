"""Read-side access to applications."""

from typing import Dict, Iterable, List, Optional
from uuid import UUID

from app.models.application import Application, ApplicationStatus
from app.services.application_store import ApplicationStore


class ApplicationQueries:
    """
    Query facade over the application store.

    The organization-scoped methods trust their caller: the API boundary must
    prove ownership of the organization before calling them.
    """

    def __init__(self, store: ApplicationStore):
        self.store = store

    async def get_application_for(self, job_id: UUID, identity: Optional[UUID]) -> Optional[Application]:
        if identity is None:
            return None
        return await self.store.find_application(job_id, identity)

    async def has_applied(self, job_id: UUID, identity: Optional[UUID]) -> bool:
        """Anonymous callers have never applied."""
        return await self.get_application_for(job_id, identity) is not None

    async def list_for_organization(self, organization_id: UUID) -> List[Application]:
        return await self.store.list_for_organizations([organization_id])

    async def list_for_organizations(self, organization_ids: Iterable[UUID]) -> List[Application]:
        return await self.store.list_for_organizations(organization_ids)

    async def list_for_applicant(self, identity: UUID) -> List[Application]:
        return await self.store.list_for_applicant(identity)

    async def stats_for_organization(self, organization_id: UUID) -> Dict[str, int]:
        counts = await self.store.count_by_status(organization_id)
        stats = {status.value: counts.get(status.value, 0) for status in ApplicationStatus}
        stats["total"] = sum(stats.values())
        return stats
