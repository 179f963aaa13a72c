"""
Ticket Domain Entities
======================

Domain entities for maintenance tickets and their AI triage.

Contains pure Python business objects; no framework or database imports.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Generic, Optional, TypeVar
from uuid import UUID

from nebula_api.config import (
    IssueCategory,
    Severity,
    TicketStatus,
    STATUS_ORDER,
    MIN_DESCRIPTION_LENGTH,
    MAX_SUGGESTION_LENGTH,
)
from nebula_api.core import DomainException


@dataclass(frozen=True)
class TriageClassification:
    """
    Category, severity and next-step suggestion for a ticket.

    Produced by the triage classifier, or FALLBACK_CLASSIFICATION when it fails.
    """
    category: IssueCategory
    severity: Severity
    suggestion: str

    def __post_init__(self):
        if len(self.suggestion) > MAX_SUGGESTION_LENGTH:
            raise ValueError(f"Suggestion must be at most {MAX_SUGGESTION_LENGTH} characters")


FALLBACK_CLASSIFICATION = TriageClassification(
    category=IssueCategory.OTHER,
    severity=Severity.MEDIUM,
    suggestion="We received your request and will review shortly.",
)


T = TypeVar("T")


@dataclass(frozen=True)
class TriageOutcome(Generic[T]):
    """
    Result of a triage attempt: either a value or the error that prevented one.

    Callers decide what a failure means by collapsing it explicitly:

        classification = outcome.unwrap_or(FALLBACK_CLASSIFICATION)
    """
    value: Optional[T] = None
    error: Optional[Exception] = None

    @classmethod
    def ok(cls, value: T) -> "TriageOutcome[T]":
        return cls(value=value)

    @classmethod
    def failed(cls, error: Exception) -> "TriageOutcome[T]":
        return cls(error=error)

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.value is not None

    def unwrap_or(self, default: T) -> T:
        return self.value if self.succeeded else default


@dataclass
class MaintenanceRequest:
    """
    A tenant-submitted maintenance issue.

    Created once by ingestion (status Triaged) and changed afterwards
    only by technician assignment.
    """
    id: Optional[UUID]  # None until the store assigns one
    description: str
    status: TicketStatus
    category: IssueCategory
    severity: Severity
    photo_url: Optional[str] = None
    tenant_id: Optional[UUID] = None
    property_id: Optional[UUID] = None
    technician_id: Optional[UUID] = None
    scheduled_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def triaged(
        cls,
        description: str,
        classification: TriageClassification,
        photo_url: Optional[str] = None,
        tenant_id: Optional[UUID] = None,
        property_id: Optional[UUID] = None,
    ) -> "MaintenanceRequest":
        """Build a new, not yet persisted, ticket from a classification."""
        if len(description) < MIN_DESCRIPTION_LENGTH:
            raise DomainException(
                f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters"
            )
        return cls(
            id=None,
            description=description,
            status=TicketStatus.TRIAGED,
            category=classification.category,
            severity=classification.severity,
            photo_url=photo_url,
            tenant_id=tenant_id,
            property_id=property_id,
        )

    def scheduled(self, technician_id: UUID, scheduled_at: datetime) -> "MaintenanceRequest":
        """Copy of this ticket assigned to a technician."""
        if technician_id is None or scheduled_at is None:
            raise DomainException("Scheduling requires a technician and a time")
        return replace(
            self,
            technician_id=technician_id,
            scheduled_at=scheduled_at,
            status=TicketStatus.SCHEDULED,
        )

    @property
    def is_past_scheduling(self) -> bool:
        """True when the ticket already moved beyond Scheduled."""
        return STATUS_ORDER.index(self.status) > STATUS_ORDER.index(TicketStatus.SCHEDULED)


@dataclass
class Technician:
    """A maintenance technician available for assignment."""
    id: UUID
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    specialty: Optional[str] = None
    created_at: Optional[datetime] = None


class TriagePromptBuilder:
    """
    Builds prompts for maintenance triage.

    All prompt text lives here.
    """

    SYSTEM_PROMPT = f"""You are a property maintenance triage agent.
Return compact JSON:
- category: one of HVAC, plumbing, electrical, other
- severity: one of low, medium, high
- suggestion: <= {MAX_SUGGESTION_LENGTH} chars, practical next step."""

    @classmethod
    def build_prompt(cls, text: str) -> str:
        """Embed the tenant's description as a quoted ticket."""
        return f'Ticket: """{text}"""'

    @classmethod
    def get_system_prompt(cls) -> str:
        return cls.SYSTEM_PROMPT

    @classmethod
    def build_messages(cls, text: str) -> list:
        return [
            {"role": "system", "content": cls.get_system_prompt()},
            {"role": "user", "content": cls.build_prompt(text)},
        ]
