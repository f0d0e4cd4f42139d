"""
Application persistence.

The store is the only writer of application rows and the final authority on
the one-application-per-applicant-per-job rule: a rejected insert surfaces as
DuplicateApplication no matter which backend enforces it.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional
from uuid import UUID

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import DuplicateApplication
from app.models.application import Application
from app.models.job import Job

logger = structlog.get_logger(__name__)

UNIQUE_VIOLATION_SQLSTATE = "23505"
UNIQUE_CONSTRAINT_NAME = "uq_applications_job_applicant"


class ApplicationStore(ABC):
    """Storage contract used by the lifecycle service and query facade."""

    @abstractmethod
    async def get_job(self, job_id: UUID) -> Optional[Job]:
        ...

    @abstractmethod
    async def get_application(self, application_id: UUID) -> Optional[Application]:
        ...

    @abstractmethod
    async def find_application(self, job_id: UUID, applicant_id: UUID) -> Optional[Application]:
        ...

    @abstractmethod
    async def insert_application(self, application: Application) -> Application:
        """Persist a new application. Raises DuplicateApplication on a uniqueness violation."""

    @abstractmethod
    async def save_application(self, application: Application) -> Application:
        ...

    @abstractmethod
    async def list_for_organizations(self, organization_ids: Iterable[UUID]) -> List[Application]:
        """Applications on jobs of the given organizations, newest first, with job and applicant loaded."""

    @abstractmethod
    async def list_for_applicant(self, applicant_id: UUID) -> List[Application]:
        """Applications by one applicant, newest first, with job and organization loaded."""

    @abstractmethod
    async def count_by_status(self, organization_id: UUID) -> Dict[str, int]:
        ...


def is_unique_violation(exc: IntegrityError) -> bool:
    """Tell a uniqueness violation apart from other integrity errors (e.g. a foreign key)."""
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate is not None:
        return sqlstate == UNIQUE_VIOLATION_SQLSTATE

    text = str(orig).lower()
    return UNIQUE_CONSTRAINT_NAME in text or "unique constraint" in text


class SQLAlchemyApplicationStore(ApplicationStore):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_job(self, job_id: UUID) -> Optional[Job]:
        result = await self.db.execute(select(Job).where(Job.id == job_id))
        return result.scalar_one_or_none()

    async def get_application(self, application_id: UUID) -> Optional[Application]:
        result = await self.db.execute(
            select(Application).where(Application.id == application_id)
        )
        return result.scalar_one_or_none()

    async def find_application(self, job_id: UUID, applicant_id: UUID) -> Optional[Application]:
        result = await self.db.execute(
            select(Application).where(
                Application.job_id == job_id,
                Application.applicant_id == applicant_id,
            )
        )
        return result.scalar_one_or_none()

    async def insert_application(self, application: Application) -> Application:
        self.db.add(application)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if is_unique_violation(e):
                logger.info(
                    "application_unique_violation",
                    job_id=str(application.job_id),
                    applicant_id=str(application.applicant_id),
                )
                raise DuplicateApplication(str(e.orig)) from e
            raise

        await self.db.refresh(application)
        return application

    async def save_application(self, application: Application) -> Application:
        await self.db.commit()
        await self.db.refresh(application)
        return application

    async def list_for_organizations(self, organization_ids: Iterable[UUID]) -> List[Application]:
        organization_ids = list(organization_ids)
        if not organization_ids:
            return []

        result = await self.db.execute(
            select(Application)
            .join(Job, Application.job_id == Job.id)
            .where(Job.organization_id.in_(organization_ids))
            .options(
                selectinload(Application.job).selectinload(Job.organization),
                selectinload(Application.applicant),
            )
            .order_by(Application.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_for_applicant(self, applicant_id: UUID) -> List[Application]:
        result = await self.db.execute(
            select(Application)
            .where(Application.applicant_id == applicant_id)
            .options(selectinload(Application.job).selectinload(Job.organization))
            .order_by(Application.created_at.desc())
        )
        return list(result.scalars().all())

    async def count_by_status(self, organization_id: UUID) -> Dict[str, int]:
        result = await self.db.execute(
            select(Application.status, func.count(Application.id))
            .join(Job, Application.job_id == Job.id)
            .where(Job.organization_id == organization_id)
            .group_by(Application.status)
        )
        return {row[0]: row[1] for row in result.fetchall()}
