"""
Ticket Infrastructure Layer
============================

Infrastructure implementations for the maintenance ticket module.

Contains:
- Models: SQLAlchemy ORM models
- Repositories: Data access implementations
- External: Scheduling webhook notifier
"""

from nebula_api.tickets.infrastructure.models import MaintenanceRequestModel, TechnicianModel
from nebula_api.tickets.infrastructure.repositories import (
    SQLAlchemyMaintenanceRequestRepository,
    SQLAlchemyTechnicianRepository,
)
from nebula_api.tickets.infrastructure.external import WebhookNotifier

__all__ = [
    "MaintenanceRequestModel",
    "TechnicianModel",
    "SQLAlchemyMaintenanceRequestRepository",
    "SQLAlchemyTechnicianRepository",
    "WebhookNotifier",
]
