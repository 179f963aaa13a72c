"""
Ticket Application Layer
=========================

Application layer for the maintenance ticket module.

Contains:
- Services: Business logic orchestration
- DTOs: Data transfer objects for API serialization
"""

from nebula_api.tickets.application.dto import (
    IngestTicketRequest,
    AssignTicketRequest,
    TriageInfo,
    MaintenanceRequestDTO,
    IngestTicketResponse,
    TicketListResponse,
    AssignTicketResponse,
    TechnicianDTO,
    TechnicianListResponse,
)
from nebula_api.tickets.application.services import (
    TriageService,
    TicketIngestionService,
    TicketAssignmentService,
    TicketQueryService,
    IngestionResult,
    ScheduleNotification,
    NotificationResult,
    IMaintenanceRequestRepository,
    ITechnicianRepository,
    INotifier,
)

__all__ = [
    # DTOs
    "IngestTicketRequest",
    "AssignTicketRequest",
    "TriageInfo",
    "MaintenanceRequestDTO",
    "IngestTicketResponse",
    "TicketListResponse",
    "AssignTicketResponse",
    "TechnicianDTO",
    "TechnicianListResponse",
    # Services
    "TriageService",
    "TicketIngestionService",
    "TicketAssignmentService",
    "TicketQueryService",
    "IngestionResult",
    "ScheduleNotification",
    "NotificationResult",
    # Interfaces
    "IMaintenanceRequestRepository",
    "ITechnicianRepository",
    "INotifier",
]
