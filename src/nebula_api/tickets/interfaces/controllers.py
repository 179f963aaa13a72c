"""
Ticket Controllers (API Routes)
================================

FastAPI routes for maintenance tickets and technicians.

Controllers delegate to application services.
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from nebula_api.core import ConfigurationException
from nebula_api.infrastructure.database import get_session
from nebula_api.shared.infrastructure.logging import get_logger
from nebula_api.tickets.application import (
    TriageService,
    TicketIngestionService,
    TicketAssignmentService,
    TicketQueryService,
    IngestTicketRequest,
    IngestTicketResponse,
    AssignTicketRequest,
    AssignTicketResponse,
    TicketListResponse,
    TechnicianListResponse,
    MaintenanceRequestDTO,
    TechnicianDTO,
    TriageInfo,
    IMaintenanceRequestRepository,
    ITechnicianRepository,
    INotifier,
)
from nebula_api.tickets.infrastructure import (
    SQLAlchemyMaintenanceRequestRepository,
    SQLAlchemyTechnicianRepository,
)

logger = get_logger(__name__)
router = APIRouter(tags=["Maintenance Tickets"])


# ========== Example payloads for Swagger ==========

INGEST_REQUEST_EXAMPLE = {
    "text": "Sink is leaking badly",
    "photoUrl": None,
    "tenantId": "6f1c2a4e-3b7d-4c1e-9a52-0d8e7f6a5b43",
    "propertyId": None
}

INGEST_RESPONSE_EXAMPLE = {
    "request": {
        "id": "123e4567-e89b-12d3-a456-426614174000",
        "description": "Sink is leaking badly",
        "status": "Triaged",
        "category": "plumbing",
        "severity": "medium",
        "photo_url": None,
        "tenant_id": "6f1c2a4e-3b7d-4c1e-9a52-0d8e7f6a5b43",
        "property_id": None,
        "technician_id": None,
        "scheduled_at": None,
        "created_at": "2026-10-17T09:30:00Z"
    },
    "ai": {
        "category": "plumbing",
        "severity": "medium",
        "suggestion": "Shut off valve"
    }
}


# ========== Dependencies ==========

def get_triage_service(request: Request) -> TriageService:
    """Triage service created at startup."""
    service = getattr(request.app.state, "triage_service", None)
    if service is None:
        raise ConfigurationException("Classification service not configured")
    return service


def get_notifier(request: Request) -> INotifier:
    """Scheduling notifier created at startup."""
    notifier = getattr(request.app.state, "notifier", None)
    if notifier is None:
        raise ConfigurationException("Notifier not configured")
    return notifier


def get_request_repository(db: AsyncSession = Depends(get_session)) -> IMaintenanceRequestRepository:
    return SQLAlchemyMaintenanceRequestRepository(db)


def get_technician_repository(db: AsyncSession = Depends(get_session)) -> ITechnicianRepository:
    return SQLAlchemyTechnicianRepository(db)


def get_ingestion_service(
    triage: TriageService = Depends(get_triage_service),
    requests: IMaintenanceRequestRepository = Depends(get_request_repository)
) -> TicketIngestionService:
    return TicketIngestionService(triage, requests)


def get_assignment_service(
    requests: IMaintenanceRequestRepository = Depends(get_request_repository),
    notifier: INotifier = Depends(get_notifier)
) -> TicketAssignmentService:
    return TicketAssignmentService(requests, notifier)


def get_query_service(
    requests: IMaintenanceRequestRepository = Depends(get_request_repository),
    technicians: ITechnicianRepository = Depends(get_technician_repository)
) -> TicketQueryService:
    return TicketQueryService(requests, technicians)


def _correlation_id(request: Request) -> str:
    return getattr(request.state, "correlation_id", "unknown")


# ========== Route Handlers ==========

@router.get(
    "/tickets",
    response_model=TicketListResponse,
    summary="List maintenance requests, newest first"
)
async def list_tickets(service: TicketQueryService = Depends(get_query_service)):
    tickets = await service.list_tickets()
    return TicketListResponse(tickets=[MaintenanceRequestDTO.from_domain(t) for t in tickets])


@router.post(
    "/tickets/ingest",
    response_model=IngestTicketResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Triage and store a tenant's maintenance request",
    description="""
    Classifies the request text with the triage model and stores it with
    status `Triaged`.

    If triage fails for any reason the request is still stored, with
    category `other`, severity `medium` and a generic suggestion.

    Errors:
    - `400` invalid body (text shorter than 5 characters, malformed URL or UUID)
    - `500` the store rejected the insert
    """,
    responses={
        201: {
            "description": "Request stored",
            "content": {"application/json": {"example": INGEST_RESPONSE_EXAMPLE}}
        },
        400: {"description": "Invalid request body"}
    }
)
async def ingest_ticket(
    request: Request,
    payload: IngestTicketRequest,
    service: TicketIngestionService = Depends(get_ingestion_service)
):
    result = await service.ingest(
        text=payload.text,
        photo_url=payload.photoUrl,
        tenant_id=payload.tenantId,
        property_id=payload.propertyId,
        correlation_id=_correlation_id(request)
    )
    return IngestTicketResponse(
        request=MaintenanceRequestDTO.from_domain(result.ticket),
        ai=TriageInfo.from_domain(result.classification)
    )


@router.get(
    "/technicians",
    response_model=TechnicianListResponse,
    summary="List technicians"
)
async def list_technicians(service: TicketQueryService = Depends(get_query_service)):
    technicians = await service.list_technicians()
    return TechnicianListResponse(technicians=[TechnicianDTO.from_domain(t) for t in technicians])


@router.post(
    "/tickets/{ticket_id}/assign",
    response_model=AssignTicketResponse,
    summary="Schedule a technician on a request",
    description="""
    Sets the technician and appointment time and moves the request to
    `Scheduled`, then notifies the scheduling webhook if one is configured.
    Notification failures do not change the response. The webhook receives
    `scheduledAt` exactly as sent.

    Errors:
    - `400` invalid body (technicianId not a UUID, scheduledAt not an ISO-8601 string)
    - `404` no ticket with this id (unknown or malformed id)
    """,
    responses={
        400: {"description": "Invalid request body"},
        404: {"description": "Ticket not found (unknown or malformed id)"}
    }
)
async def assign_ticket(
    request: Request,
    ticket_id: str,
    payload: AssignTicketRequest,
    service: TicketAssignmentService = Depends(get_assignment_service)
):
    ticket = await service.assign(
        ticket_id=ticket_id,
        technician_id=payload.technicianId,
        scheduled_at=payload.scheduled_at,
        correlation_id=_correlation_id(request),
        requested_time=payload.scheduledAt
    )
    return AssignTicketResponse(ticket=MaintenanceRequestDTO.from_domain(ticket))


# Export router for inclusion in main app
tickets_router = router
