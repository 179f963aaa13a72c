"""
Ticket Application DTOs
========================

Data Transfer Objects for the ticket API layer.

Pydantic models for request/response validation. Request bodies use the
front end's camelCase keys; records use the store's snake_case columns.
"""

from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import AnyUrl, BaseModel, Field, TypeAdapter, ValidationError, field_validator

from nebula_api.config import MIN_DESCRIPTION_LENGTH, MAX_SUGGESTION_LENGTH
from nebula_api.tickets.domain import MaintenanceRequest, Technician, TriageClassification


# ========== Type Aliases for Literals ==========
IssueCategoryStr = Literal["HVAC", "plumbing", "electrical", "other"]
SeverityStr = Literal["low", "medium", "high"]
TicketStatusStr = Literal["Triaged", "Scheduled", "Completed"]

_url_adapter = TypeAdapter(AnyUrl)
_datetime_adapter = TypeAdapter(datetime)


# ========== Request DTOs ==========

class IngestTicketRequest(BaseModel):
    """Request model for ticket ingestion."""
    text: str = Field(..., min_length=MIN_DESCRIPTION_LENGTH, description="Tenant's description of the issue")
    photoUrl: Optional[str] = Field(None, description="Link to a photo of the issue")
    tenantId: Optional[UUID] = Field(None, description="Submitting tenant")
    propertyId: Optional[UUID] = Field(None, description="Property the issue is at")

    @field_validator("photoUrl")
    @classmethod
    def validate_photo_url(cls, v: Optional[str]) -> Optional[str]:
        """Check the URL parses but keep the caller's exact string."""
        if v is None:
            return v
        try:
            _url_adapter.validate_python(v)
        except ValidationError:
            raise ValueError("photoUrl must be a valid URL")
        return v


class AssignTicketRequest(BaseModel):
    """Request model for scheduling a technician."""
    technicianId: UUID = Field(..., description="Technician to assign")
    scheduledAt: str = Field(..., description="ISO-8601 appointment time, forwarded to the webhook as sent")

    @field_validator("scheduledAt", mode="before")
    @classmethod
    def require_iso_string(cls, v):
        if not isinstance(v, str):
            raise ValueError("scheduledAt must be an ISO-8601 string")
        try:
            _datetime_adapter.validate_python(v)
        except ValidationError:
            raise ValueError("scheduledAt must be an ISO-8601 string")
        return v

    @property
    def scheduled_at(self) -> datetime:
        return _datetime_adapter.validate_python(self.scheduledAt)


# ========== Response DTOs ==========

class TriageInfo(BaseModel):
    """Classification used for a ticket."""
    category: IssueCategoryStr
    severity: SeverityStr
    suggestion: str = Field(..., max_length=MAX_SUGGESTION_LENGTH)

    @classmethod
    def from_domain(cls, classification: TriageClassification) -> "TriageInfo":
        return cls(
            category=classification.category.value,
            severity=classification.severity.value,
            suggestion=classification.suggestion
        )


class MaintenanceRequestDTO(BaseModel):
    """A persisted maintenance request."""
    id: UUID
    description: str
    status: TicketStatusStr
    category: IssueCategoryStr
    severity: SeverityStr
    photo_url: Optional[str] = None
    tenant_id: Optional[UUID] = None
    property_id: Optional[UUID] = None
    technician_id: Optional[UUID] = None
    scheduled_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, ticket: MaintenanceRequest) -> "MaintenanceRequestDTO":
        return cls(
            id=ticket.id,
            description=ticket.description,
            status=ticket.status.value,
            category=ticket.category.value,
            severity=ticket.severity.value,
            photo_url=ticket.photo_url,
            tenant_id=ticket.tenant_id,
            property_id=ticket.property_id,
            technician_id=ticket.technician_id,
            scheduled_at=ticket.scheduled_at,
            created_at=ticket.created_at
        )


class IngestTicketResponse(BaseModel):
    """Response model for ticket ingestion."""
    request: MaintenanceRequestDTO
    ai: TriageInfo


class TicketListResponse(BaseModel):
    """Response model for the ticket list."""
    tickets: List[MaintenanceRequestDTO]


class AssignTicketResponse(BaseModel):
    """Response model for technician assignment."""
    ticket: MaintenanceRequestDTO


class TechnicianDTO(BaseModel):
    id: UUID
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    specialty: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, technician: Technician) -> "TechnicianDTO":
        return cls(
            id=technician.id,
            name=technician.name,
            email=technician.email,
            phone=technician.phone,
            specialty=technician.specialty,
            created_at=technician.created_at
        )


class TechnicianListResponse(BaseModel):
    technicians: List[TechnicianDTO]
