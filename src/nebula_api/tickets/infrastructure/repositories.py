"""
Ticket Infrastructure Repositories
====================================

SQLAlchemy implementations of ticket repositories.

Every store error is re-raised as RepositoryException carrying the store's message.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from nebula_api.config import IssueCategory, Severity, TicketStatus
from nebula_api.core import RepositoryException
from nebula_api.tickets.application import IMaintenanceRequestRepository, ITechnicianRepository
from nebula_api.tickets.domain import MaintenanceRequest, Technician
from nebula_api.tickets.infrastructure.models import MaintenanceRequestModel, TechnicianModel


def _store_error(e: SQLAlchemyError) -> RepositoryException:
    message = str(getattr(e, "orig", None) or e)
    return RepositoryException(message, {"error_type": type(e).__name__})


def _to_domain(model: MaintenanceRequestModel) -> MaintenanceRequest:
    return MaintenanceRequest(
        id=model.id,
        description=model.description,
        status=TicketStatus(model.status),
        category=IssueCategory(model.category),
        severity=Severity(model.severity),
        photo_url=model.photo_url,
        tenant_id=model.tenant_id,
        property_id=model.property_id,
        technician_id=model.technician_id,
        scheduled_at=model.scheduled_at,
        created_at=model.created_at
    )


class SQLAlchemyMaintenanceRequestRepository(IMaintenanceRequestRepository):
    """SQLAlchemy implementation for maintenance requests."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def _get_model(self, ticket_id: str) -> Optional[MaintenanceRequestModel]:
        try:
            ticket_uuid = UUID(str(ticket_id))
        except ValueError:
            return None

        stmt = select(MaintenanceRequestModel).where(MaintenanceRequestModel.id == ticket_uuid)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, ticket: MaintenanceRequest) -> MaintenanceRequest:
        """Insert a new ticket."""
        model = MaintenanceRequestModel(
            description=ticket.description,
            status=ticket.status.value,
            category=ticket.category.value,
            severity=ticket.severity.value,
            photo_url=ticket.photo_url,
            tenant_id=ticket.tenant_id,
            property_id=ticket.property_id
        )

        try:
            self._session.add(model)
            await self._session.flush()
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise _store_error(e)

        return _to_domain(model)

    async def get_by_id(self, ticket_id: str) -> Optional[MaintenanceRequest]:
        """Get ticket by ID."""
        try:
            model = await self._get_model(ticket_id)
        except SQLAlchemyError as e:
            raise _store_error(e)
        return _to_domain(model) if model else None

    async def list_recent(self) -> List[MaintenanceRequest]:
        """All tickets ordered by creation time, newest first."""
        stmt = select(MaintenanceRequestModel).order_by(
            MaintenanceRequestModel.created_at.desc(),
            MaintenanceRequestModel.id.desc()
        )
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise _store_error(e)
        return [_to_domain(m) for m in result.scalars().all()]

    async def update(self, ticket: MaintenanceRequest) -> MaintenanceRequest:
        """Write technician, schedule and status of an existing ticket."""
        try:
            model = await self._get_model(str(ticket.id))
            if model is None:
                raise RepositoryException(f"Ticket with id '{ticket.id}' not found")

            model.technician_id = ticket.technician_id
            model.scheduled_at = ticket.scheduled_at
            model.status = ticket.status.value

            await self._session.flush()
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise _store_error(e)

        return _to_domain(model)


class SQLAlchemyTechnicianRepository(ITechnicianRepository):
    """SQLAlchemy implementation for technicians."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_all(self) -> List[Technician]:
        stmt = select(TechnicianModel).order_by(TechnicianModel.name)
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise _store_error(e)

        return [
            Technician(
                id=m.id,
                name=m.name,
                email=m.email,
                phone=m.phone,
                specialty=m.specialty,
                created_at=m.created_at
            )
            for m in result.scalars().all()
        ]
