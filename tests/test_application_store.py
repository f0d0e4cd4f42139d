"""Tests for the SQLAlchemy application store and ownership directory (SQLite)."""

import uuid
from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import Conflict, DuplicateApplication
from app.models import Application, Organization
from app.services.application_service import ApplicationService
from app.services.application_store import SQLAlchemyApplicationStore, is_unique_violation
from app.services.organization_service import (
    OrganizationOwnershipResolver,
    SQLAlchemyOrganizationDirectory,
)


def new_application(job_id, applicant_id, message="x" * 60, created_at=None):
    now = created_at or datetime.utcnow()
    return Application(
        id=uuid.uuid4(),
        job_id=job_id,
        applicant_id=applicant_id,
        message=message,
        status="pending",
        created_at=now,
        updated_at=now,
    )


async def count_applications(db) -> int:
    result = await db.execute(select(func.count(Application.id)))
    return result.scalar_one()


class TestSQLAlchemyApplicationStore:

    async def test_insert_and_find(self, db, marketplace):
        store = SQLAlchemyApplicationStore(db)
        application = await store.insert_application(
            new_application(marketplace.job.id, marketplace.crew.id)
        )

        found = await store.find_application(marketplace.job.id, marketplace.crew.id)
        assert found.id == application.id
        assert (await store.get_application(application.id)).status == "pending"

    async def test_duplicate_insert_is_rejected_by_the_constraint(self, session_factory, marketplace):
        async with session_factory() as first_session:
            await SQLAlchemyApplicationStore(first_session).insert_application(
                new_application(marketplace.job.id, marketplace.crew.id)
            )

        async with session_factory() as second_session:
            store = SQLAlchemyApplicationStore(second_session)
            with pytest.raises(DuplicateApplication):
                await store.insert_application(
                    new_application(marketplace.job.id, marketplace.crew.id)
                )
            assert await count_applications(second_session) == 1

    async def test_race_past_the_pre_check_still_conflicts(self, session_factory, marketplace, reporter):
        """A request that misses the pre-check is stopped by the unique constraint."""

        class BlindStore(SQLAlchemyApplicationStore):
            async def find_application(self, job_id, applicant_id):
                return None

        message = "Ten years of lifeguarding on the Algarve coast, happy to help out at the camp."
        async with session_factory() as session:
            store = BlindStore(session)
            service = ApplicationService(
                store=store,
                organizations=OrganizationOwnershipResolver(SQLAlchemyOrganizationDirectory(session)),
                reporter=reporter,
            )
            await service.create_application(marketplace.job.id, marketplace.crew.id, message)
            with pytest.raises(Conflict):
                await service.create_application(marketplace.job.id, marketplace.crew.id, message)

            assert await count_applications(session) == 1

    async def test_list_for_organizations_loads_job_and_applicant(self, db, marketplace):
        store = SQLAlchemyApplicationStore(db)
        base = datetime(2026, 5, 1, 8, 0, 0)
        older = await store.insert_application(
            new_application(marketplace.job.id, marketplace.crew.id, created_at=base)
        )
        newer = await store.insert_application(
            new_application(marketplace.job.id, marketplace.second_crew.id, created_at=base + timedelta(hours=1))
        )
        await store.insert_application(
            new_application(marketplace.rival_job.id, marketplace.crew.id, created_at=base + timedelta(hours=2))
        )

        applications = await store.list_for_organizations([marketplace.org.id])

        assert [a.id for a in applications] == [newer.id, older.id]
        assert applications[0].job.title == "Surf Coach"
        assert applications[0].job.organization.name == "Ericeira Surf School"
        assert applications[0].applicant.display_name == "Mia"

    async def test_list_for_no_organizations(self, db):
        assert await SQLAlchemyApplicationStore(db).list_for_organizations([]) == []

    async def test_list_for_applicant(self, db, marketplace):
        store = SQLAlchemyApplicationStore(db)
        base = datetime(2026, 5, 1, 8, 0, 0)
        await store.insert_application(new_application(marketplace.job.id, marketplace.crew.id, created_at=base))
        await store.insert_application(
            new_application(marketplace.rival_job.id, marketplace.crew.id, created_at=base + timedelta(days=1))
        )

        applications = await store.list_for_applicant(marketplace.crew.id)

        assert [a.job_id for a in applications] == [marketplace.rival_job.id, marketplace.job.id]
        assert applications[0].job.organization.name == "Peniche Surf Camp"

    async def test_count_by_status(self, db, marketplace):
        store = SQLAlchemyApplicationStore(db)
        first = await store.insert_application(new_application(marketplace.job.id, marketplace.crew.id))
        await store.insert_application(new_application(marketplace.job.id, marketplace.second_crew.id))
        first.status = "contacted"
        await store.save_application(first)

        assert await store.count_by_status(marketplace.org.id) == {"contacted": 1, "pending": 1}
        assert await store.count_by_status(marketplace.rival_org.id) == {}


class TestUniqueViolationDetection:

    @staticmethod
    def integrity_error(orig):
        return IntegrityError("INSERT INTO applications ...", {}, orig)

    def test_postgres_unique_violation(self):
        assert is_unique_violation(self.integrity_error(SimpleNamespace(sqlstate="23505")))

    def test_postgres_foreign_key_violation(self):
        assert not is_unique_violation(self.integrity_error(SimpleNamespace(sqlstate="23503")))

    def test_pgcode_fallback(self):
        assert is_unique_violation(self.integrity_error(SimpleNamespace(sqlstate=None, pgcode="23505")))

    def test_sqlite_message(self):
        orig = Exception("UNIQUE constraint failed: applications.job_id, applications.applicant_id")
        assert is_unique_violation(self.integrity_error(orig))

    def test_sqlite_foreign_key_message(self):
        assert not is_unique_violation(self.integrity_error(Exception("FOREIGN KEY constraint failed")))


class TestOwnershipResolver:

    async def test_resolves_owned_organizations(self, db, marketplace):
        resolver = OrganizationOwnershipResolver(SQLAlchemyOrganizationDirectory(db))

        assert await resolver.resolve_owned_organizations(marketplace.owner.id) == {marketplace.org.id}
        assert await resolver.resolve_owned_organizations(marketplace.crew.id) == set()

    async def test_multiple_organizations_in_creation_order(self, db, marketplace):
        shop = Organization(
            id=uuid.uuid4(),
            owner_profile_id=marketplace.owner.id,
            name="Ericeira Surf Shop",
            created_at=datetime.utcnow() + timedelta(days=1),
        )
        db.add(shop)
        await db.commit()
        resolver = OrganizationOwnershipResolver(SQLAlchemyOrganizationDirectory(db))

        owned = await resolver.owned_organizations_in_order(marketplace.owner.id)

        assert owned == [marketplace.org.id, shop.id]

    async def test_organization_for_job(self, db, marketplace):
        resolver = OrganizationOwnershipResolver(SQLAlchemyOrganizationDirectory(db))

        assert await resolver.organization_for_job(marketplace.rival_job.id) == marketplace.rival_org.id
        assert await resolver.organization_for_job(uuid.uuid4()) is None
