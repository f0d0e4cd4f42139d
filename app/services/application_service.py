"""
Application Lifecycle Service

Creates applications and moves them between statuses. Every write to an
application goes through here, after these checks:
- the caller is authenticated
- the message passes the length and word-count rules (creation)
- the acting identity owns the organization behind the job (status changes)
"""

import uuid
from datetime import datetime
from typing import Callable, Dict, FrozenSet, Optional
from uuid import UUID

import structlog

from app.config import settings
from app.core.error_reporting import ErrorReporter
from app.core.exceptions import (
    Conflict,
    DuplicateApplication,
    Forbidden,
    InvalidInput,
    NotFound,
    Unauthenticated,
)
from app.models.application import Application, ApplicationStatus
from app.services.application_store import ApplicationStore
from app.services.organization_service import OrganizationOwnershipResolver
from app.utils.validators import validate_application_message

logger = structlog.get_logger(__name__)

VALID_STATUSES: FrozenSet[str] = frozenset(s.value for s in ApplicationStatus)


class TransitionPolicy:
    """Any status may follow any other."""

    name = "permissive"

    def allows(self, current: str, requested: str) -> bool:
        return True


class DirectedTransitionPolicy(TransitionPolicy):
    """Forward-only transitions; staying on the current status is always allowed."""

    name = "directed"

    GRAPH: Dict[str, FrozenSet[str]] = {
        ApplicationStatus.PENDING.value: frozenset({"viewed", "archived"}),
        ApplicationStatus.VIEWED.value: frozenset({"contacted", "archived"}),
        ApplicationStatus.CONTACTED.value: frozenset({"archived"}),
        ApplicationStatus.ARCHIVED.value: frozenset(),
    }

    def allows(self, current: str, requested: str) -> bool:
        return current == requested or requested in self.GRAPH.get(current, frozenset())


TRANSITION_POLICIES = {
    TransitionPolicy.name: TransitionPolicy,
    DirectedTransitionPolicy.name: DirectedTransitionPolicy,
}


def get_transition_policy(name: str) -> TransitionPolicy:
    try:
        return TRANSITION_POLICIES[name]()
    except KeyError:
        raise ValueError(f"Unknown status transition policy: {name}")


class ApplicationService:
    """Enforces creation and status-transition rules before delegating to the store."""

    def __init__(
        self,
        store: ApplicationStore,
        organizations: OrganizationOwnershipResolver,
        reporter: Optional[ErrorReporter] = None,
        transition_policy: Optional[TransitionPolicy] = None,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.store = store
        self.organizations = organizations
        self.reporter = reporter or ErrorReporter()
        self.transition_policy = transition_policy or TransitionPolicy()
        self.clock = clock

    async def create_application(
        self,
        job_id: UUID,
        applicant_id: Optional[UUID],
        message: str,
    ) -> Application:
        """
        Submit an application for a job.

        Args:
            job_id: Job being applied to
            applicant_id: Authenticated identity of the applicant, None if anonymous
            message: Free-text message to the organization

        Returns:
            The persisted application with status "pending"

        Raises:
            Unauthenticated, InvalidInput, NotFound, Conflict
        """
        if applicant_id is None:
            raise Unauthenticated()

        is_valid, errors = validate_application_message(
            message,
            min_length=settings.APPLICATION_MESSAGE_MIN_LENGTH,
            max_length=settings.APPLICATION_MESSAGE_MAX_LENGTH,
            min_words=settings.APPLICATION_MESSAGE_MIN_WORDS,
        )
        if not is_valid:
            raise InvalidInput("; ".join(errors))

        job = await self.store.get_job(job_id)
        if job is None:
            raise NotFound("Job not found")

        # Fast path for a friendly error; the store's unique constraint is the real guard
        existing = await self.store.find_application(job_id, applicant_id)
        if existing is not None:
            raise Conflict()

        now = self.clock()
        application = Application(
            id=uuid.uuid4(),
            job_id=job_id,
            applicant_id=applicant_id,
            message=message,
            status=ApplicationStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )

        try:
            application = await self.store.insert_application(application)
        except DuplicateApplication:
            self.reporter.warning(
                "application_duplicate_race",
                job_id=str(job_id),
                applicant_id=str(applicant_id),
            )
            raise Conflict()

        logger.info(
            "application_created",
            application_id=str(application.id),
            job_id=str(job_id),
            applicant_id=str(applicant_id),
        )
        return application

    async def update_status(
        self,
        application_id: UUID,
        requested_status: str,
        acting_identity: Optional[UUID],
    ) -> Application:
        """
        Move an application to a new status on behalf of the job's organization.

        Raises:
            Unauthenticated, NotFound, Forbidden, InvalidInput
        """
        if acting_identity is None:
            raise Unauthenticated()

        owned = await self.organizations.resolve_owned_organizations(acting_identity)
        if not owned:
            raise NotFound("No organization found")

        application = await self.store.get_application(application_id)
        if application is None:
            raise NotFound("Application not found")

        organization_id = await self.organizations.organization_for_job(application.job_id)
        if organization_id is None or organization_id not in owned:
            logger.warning(
                "application_status_forbidden",
                application_id=str(application_id),
                acting_identity=str(acting_identity),
            )
            raise Forbidden()

        if requested_status not in VALID_STATUSES:
            raise InvalidInput(
                f"Invalid status '{requested_status}'. Must be one of: {', '.join(sorted(VALID_STATUSES))}"
            )

        previous_status = application.status
        if not self.transition_policy.allows(previous_status, requested_status):
            raise InvalidInput(
                f"Cannot move application from '{previous_status}' to '{requested_status}'"
            )

        now = self.clock()
        application.status = requested_status
        application.updated_at = now
        if requested_status == ApplicationStatus.VIEWED.value and application.viewed_at is None:
            application.viewed_at = now
        elif requested_status == ApplicationStatus.CONTACTED.value and application.contacted_at is None:
            application.contacted_at = now

        application = await self.store.save_application(application)

        logger.info(
            "application_status_updated",
            application_id=str(application_id),
            from_status=previous_status,
            to_status=requested_status,
        )
        return application
