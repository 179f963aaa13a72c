"""SQLAlchemy repositories against an in-memory SQLite store."""

import unittest
from datetime import datetime, timedelta, timezone
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from nebula_api.config import IssueCategory, Severity, TicketStatus
from nebula_api.infrastructure.database import Base
from nebula_api.tickets.domain import MaintenanceRequest, TriageClassification
from nebula_api.tickets.infrastructure import (
    MaintenanceRequestModel,
    SQLAlchemyMaintenanceRequestRepository,
    SQLAlchemyTechnicianRepository,
    TechnicianModel,
)

HVAC_LOW = TriageClassification(IssueCategory.HVAC, Severity.LOW, "Replace the filter")


class RepositoryTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.engine = create_async_engine(
            "sqlite+aiosqlite:///:memory:",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        maker = async_sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
        self.session = maker()
        self.requests = SQLAlchemyMaintenanceRequestRepository(self.session)

    async def asyncTearDown(self) -> None:
        await self.session.close()
        await self.engine.dispose()

    async def test_create_assigns_id_and_timestamp(self) -> None:
        tenant = uuid4()

        saved = await self.requests.create(MaintenanceRequest.triaged(
            "AC blows warm air", HVAC_LOW, photo_url="https://example.com/a.jpg", tenant_id=tenant
        ))

        self.assertIsNotNone(saved.id)
        self.assertIsNotNone(saved.created_at)
        self.assertEqual(saved.status, TicketStatus.TRIAGED)
        self.assertEqual(saved.category, IssueCategory.HVAC)

        fetched = await self.requests.get_by_id(str(saved.id))
        self.assertEqual(fetched.description, "AC blows warm air")
        self.assertEqual(fetched.photo_url, "https://example.com/a.jpg")
        self.assertEqual(fetched.tenant_id, tenant)

    async def test_created_at_is_set_by_the_store(self) -> None:
        column = MaintenanceRequestModel.__table__.c.created_at
        self.assertIsNone(column.default)
        self.assertIsNotNone(column.server_default)

        saved = await self.requests.create(MaintenanceRequest.triaged("Radiator is cold", HVAC_LOW))

        self.assertIsNotNone(saved.created_at)
        stored = await self.session.scalar(
            select(MaintenanceRequestModel.created_at).where(MaintenanceRequestModel.id == saved.id)
        )
        self.assertEqual(saved.created_at, stored)

    async def test_get_by_id_missing_or_malformed(self) -> None:
        self.assertIsNone(await self.requests.get_by_id(str(uuid4())))
        self.assertIsNone(await self.requests.get_by_id("not-a-uuid"))

    async def test_list_recent_is_newest_first(self) -> None:
        base = datetime(2026, 10, 1, 8, 0, tzinfo=timezone.utc)
        for offset, text in [(1, "middle"), (0, "oldest"), (2, "newest")]:
            self.session.add(MaintenanceRequestModel(
                description=text,
                status="Triaged",
                category="other",
                severity="medium",
                created_at=base + timedelta(minutes=offset),
            ))
        await self.session.commit()

        tickets = await self.requests.list_recent()

        self.assertEqual([t.description for t in tickets], ["newest", "middle", "oldest"])

    async def test_update_writes_assignment(self) -> None:
        saved = await self.requests.create(MaintenanceRequest.triaged("AC blows warm air", HVAC_LOW))
        technician = uuid4()
        when = datetime(2026, 10, 20, 14, 0, tzinfo=timezone.utc)

        await self.requests.update(saved.scheduled(technician, when))

        fetched = await self.requests.get_by_id(str(saved.id))
        self.assertEqual(fetched.status, TicketStatus.SCHEDULED)
        self.assertEqual(fetched.technician_id, technician)
        # SQLite drops the offset
        self.assertEqual(fetched.scheduled_at.replace(tzinfo=None), when.replace(tzinfo=None))

    async def test_technicians_sorted_by_name(self) -> None:
        self.session.add_all([
            TechnicianModel(name="Lee Park", specialty="HVAC"),
            TechnicianModel(name="Dana Ruiz", specialty="plumbing", phone="555-0101"),
        ])
        await self.session.commit()

        technicians = await SQLAlchemyTechnicianRepository(self.session).list_all()

        self.assertEqual([t.name for t in technicians], ["Dana Ruiz", "Lee Park"])
        self.assertEqual(technicians[0].phone, "555-0101")


if __name__ == "__main__":
    unittest.main()
