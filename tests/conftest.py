"""Pytest configuration and fixtures."""

import asyncio
import os
import uuid
from datetime import datetime, timedelta
from types import SimpleNamespace
from typing import Dict, Iterable, List, Optional

import pytest

# Unit tests never touch a real database or Sentry
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-only-secret-key")
os.environ.setdefault("SENTRY_DSN", "")
os.environ.setdefault("LOG_FORMAT", "console")

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core.error_reporting import NullErrorReporter  # noqa: E402
from app.core.exceptions import DuplicateApplication  # noqa: E402
from app.core.security import create_access_token  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.db.session import get_db  # noqa: E402
from app.models import Application, Job, Organization, User  # noqa: E402
from app.services.application_store import ApplicationStore  # noqa: E402
from app.services.organization_service import OrganizationDirectory  # noqa: E402

VALID_MESSAGE = (
    "I have taught surfing in Portugal for three seasons and "
    "would love to join your coaching team this summer."
)


class InMemoryMarketplace(ApplicationStore, OrganizationDirectory):
    """Dict-backed store that yields to the event loop on every access, like real I/O."""

    def __init__(self):
        self.jobs: Dict[uuid.UUID, Job] = {}
        self.organizations: Dict[uuid.UUID, Organization] = {}
        self.applications: Dict[uuid.UUID, Application] = {}
        self.writes = 0

    def add_organization(self, owner_id: uuid.UUID, name: str = "Ericeira Surf School") -> Organization:
        organization = Organization(
            id=uuid.uuid4(),
            owner_profile_id=owner_id,
            name=name,
            created_at=datetime.utcnow() + timedelta(microseconds=len(self.organizations)),
        )
        self.organizations[organization.id] = organization
        return organization

    def add_job(self, organization_id: uuid.UUID, title: str = "Surf Coach") -> Job:
        job = Job(id=uuid.uuid4(), organization_id=organization_id, title=title, status="active")
        self.jobs[job.id] = job
        return job

    # OrganizationDirectory

    async def list_owned_organization_ids(self, owner_profile_id):
        await asyncio.sleep(0)
        owned = [o for o in self.organizations.values() if o.owner_profile_id == owner_profile_id]
        return [o.id for o in sorted(owned, key=lambda o: o.created_at)]

    async def get_job_organization_id(self, job_id):
        await asyncio.sleep(0)
        job = self.jobs.get(job_id)
        return job.organization_id if job else None

    # ApplicationStore

    async def get_job(self, job_id) -> Optional[Job]:
        await asyncio.sleep(0)
        return self.jobs.get(job_id)

    async def get_application(self, application_id) -> Optional[Application]:
        await asyncio.sleep(0)
        return self.applications.get(application_id)

    async def find_application(self, job_id, applicant_id) -> Optional[Application]:
        await asyncio.sleep(0)
        for application in self.applications.values():
            if application.job_id == job_id and application.applicant_id == applicant_id:
                return application
        return None

    async def insert_application(self, application: Application) -> Application:
        await asyncio.sleep(0)
        for existing in self.applications.values():
            if existing.job_id == application.job_id and existing.applicant_id == application.applicant_id:
                raise DuplicateApplication("uq_applications_job_applicant")
        self.applications[application.id] = application
        self.writes += 1
        return application

    async def save_application(self, application: Application) -> Application:
        await asyncio.sleep(0)
        self.applications[application.id] = application
        self.writes += 1
        return application

    async def list_for_organizations(self, organization_ids: Iterable[uuid.UUID]) -> List[Application]:
        organization_ids = set(organization_ids)
        matches = [
            a for a in self.applications.values()
            if self.jobs[a.job_id].organization_id in organization_ids
        ]
        return sorted(matches, key=lambda a: a.created_at, reverse=True)

    async def list_for_applicant(self, applicant_id) -> List[Application]:
        matches = [a for a in self.applications.values() if a.applicant_id == applicant_id]
        return sorted(matches, key=lambda a: a.created_at, reverse=True)

    async def count_by_status(self, organization_id) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for application in await self.list_for_organizations([organization_id]):
            counts[application.status] = counts.get(application.status, 0) + 1
        return counts


class TickingClock:
    """Clock that advances one second per call so timestamps strictly increase."""

    def __init__(self, start: datetime = datetime(2026, 6, 1, 9, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def valid_message():
    return VALID_MESSAGE


@pytest.fixture
def memory_store():
    return InMemoryMarketplace()


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def reporter():
    return NullErrorReporter()


# ==================== SQLite-backed fixtures ====================

@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def marketplace(session_factory):
    """
    Crew member `crew`, organization owner `owner` (organization `org`, job `job`)
    and a second owner `rival` (organization `rival_org`, job `rival_job`).
    """
    async with session_factory() as session:
        crew = User(id=uuid.uuid4(), email="kai@example.com", display_name="Kai", kind="person")
        second_crew = User(id=uuid.uuid4(), email="mia@example.com", display_name="Mia", kind="person")
        owner = User(id=uuid.uuid4(), email="owner@ericeira.example", display_name="Rita", kind="org")
        rival = User(id=uuid.uuid4(), email="owner@peniche.example", display_name="Joao", kind="org")
        session.add_all([crew, second_crew, owner, rival])
        await session.flush()

        org = Organization(id=uuid.uuid4(), owner_profile_id=owner.id, name="Ericeira Surf School", slug="ericeira")
        rival_org = Organization(id=uuid.uuid4(), owner_profile_id=rival.id, name="Peniche Surf Camp", slug="peniche")
        session.add_all([org, rival_org])
        await session.flush()

        job = Job(id=uuid.uuid4(), organization_id=org.id, title="Surf Coach", role="coach", status="active")
        rival_job = Job(id=uuid.uuid4(), organization_id=rival_org.id, title="Camp Host", role="camp_staff", status="active")
        session.add_all([job, rival_job])
        await session.commit()

    return SimpleNamespace(
        crew=crew,
        second_crew=second_crew,
        owner=owner,
        rival=rival,
        org=org,
        rival_org=rival_org,
        job=job,
        rival_job=rival_job,
    )


def auth_headers(user: User) -> dict:
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for():
    return auth_headers


@pytest_asyncio.fixture
async def client(session_factory):
    from app.main import app

    async def _override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _override_get_db
    app.state.error_reporter = NullErrorReporter()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
