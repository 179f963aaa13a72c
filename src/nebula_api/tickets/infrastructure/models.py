"""
Ticket Infrastructure Models
=============================

SQLAlchemy ORM models mapping the hosted store's tables.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import String, DateTime, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from nebula_api.infrastructure.database import Base


class MaintenanceRequestModel(Base):
    """
    Database model for MaintenanceRequest entity.

    Enum columns are stored as their string values. created_at is set by
    the store at insert time and read back after the flush.
    """
    __tablename__ = "requests"
    __mapper_args__ = {"eager_defaults": True}

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="Triaged")
    category: Mapped[str] = mapped_column(String(20), nullable=False, default="other")
    severity: Mapped[str] = mapped_column(String(10), nullable=False, default="medium")

    photo_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    tenant_id: Mapped[Optional[UUID]] = mapped_column(Uuid, nullable=True, index=True)
    property_id: Mapped[Optional[UUID]] = mapped_column(Uuid, nullable=True, index=True)

    # Assignment
    technician_id: Mapped[Optional[UUID]] = mapped_column(Uuid, nullable=True)
    scheduled_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True
    )


class TechnicianModel(Base):
    """Database model for Technician entity."""
    __tablename__ = "technicians"
    __mapper_args__ = {"eager_defaults": True}

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    specialty: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now()
    )
