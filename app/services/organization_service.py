"""
Organization ownership resolution.

Answers two questions for authorization:
- which organizations does an identity administer
- which organization owns a given job
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Set
from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.job import Job
from app.models.organization import Organization

logger = structlog.get_logger(__name__)


class OrganizationDirectory(ABC):
    """Read access to organization ownership data."""

    @abstractmethod
    async def list_owned_organization_ids(self, owner_profile_id: UUID) -> List[UUID]:
        """Organizations whose owner_profile_id matches, oldest first."""

    @abstractmethod
    async def get_job_organization_id(self, job_id: UUID) -> Optional[UUID]:
        """Organization owning the job, or None if the job does not exist."""


class SQLAlchemyOrganizationDirectory(OrganizationDirectory):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_owned_organization_ids(self, owner_profile_id: UUID) -> List[UUID]:
        result = await self.db.execute(
            select(Organization.id)
            .where(Organization.owner_profile_id == owner_profile_id)
            .order_by(Organization.created_at.asc())
        )
        return list(result.scalars().all())

    async def get_job_organization_id(self, job_id: UUID) -> Optional[UUID]:
        result = await self.db.execute(
            select(Job.organization_id).where(Job.id == job_id)
        )
        return result.scalar_one_or_none()


class OrganizationOwnershipResolver:
    """
    Resolves the authorization scope of an identity.

    Ownership is checked by walking job -> organization -> owner, so an
    identity owning several organizations is authorized for all of them.
    """

    def __init__(self, directory: OrganizationDirectory):
        self.directory = directory

    async def resolve_owned_organizations(self, identity: UUID) -> Set[UUID]:
        """
        Get the organizations administered by an identity.

        Args:
            identity: Authenticated user id (callers reject anonymous requests first)

        Returns:
            Set of organization ids, possibly empty
        """
        return set(await self.owned_organizations_in_order(identity))

    async def owned_organizations_in_order(self, identity: UUID) -> List[UUID]:
        owned = await self.directory.list_owned_organization_ids(identity)
        logger.debug("owned_organizations_resolved", identity=str(identity), count=len(owned))
        return owned

    async def organization_for_job(self, job_id: UUID) -> Optional[UUID]:
        return await self.directory.get_job_organization_id(job_id)
