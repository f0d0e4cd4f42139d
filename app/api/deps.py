"""
API Dependencies
Common dependencies for API endpoints (authentication, authorization, service wiring)
"""

from typing import List

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.error_reporting import ErrorReporter, get_error_reporter
from app.core.exceptions import NotFound
from app.core.security import get_current_user, get_current_user_optional  # noqa: F401
from app.db.session import get_db
from app.models.user import User
from app.services.application_queries import ApplicationQueries
from app.services.application_service import ApplicationService, get_transition_policy
from app.services.application_store import SQLAlchemyApplicationStore
from app.services.organization_service import (
    OrganizationOwnershipResolver,
    SQLAlchemyOrganizationDirectory,
)


def get_ownership_resolver(db: AsyncSession = Depends(get_db)) -> OrganizationOwnershipResolver:
    return OrganizationOwnershipResolver(SQLAlchemyOrganizationDirectory(db))


def get_application_service(
    db: AsyncSession = Depends(get_db),
    organizations: OrganizationOwnershipResolver = Depends(get_ownership_resolver),
    reporter: ErrorReporter = Depends(get_error_reporter),
) -> ApplicationService:
    return ApplicationService(
        store=SQLAlchemyApplicationStore(db),
        organizations=organizations,
        reporter=reporter,
        transition_policy=get_transition_policy(settings.APPLICATION_STATUS_TRANSITIONS),
    )


def get_application_queries(db: AsyncSession = Depends(get_db)) -> ApplicationQueries:
    return ApplicationQueries(SQLAlchemyApplicationStore(db))


async def get_owned_organization_ids(
    current_user: User = Depends(get_current_user),
    organizations: OrganizationOwnershipResolver = Depends(get_ownership_resolver),
) -> List:
    """
    Organizations administered by the current user, oldest first.

    Raises 404 when the user administers none.
    """
    owned = await organizations.owned_organizations_in_order(current_user.id)
    if not owned:
        raise NotFound("No organization found")
    return owned
