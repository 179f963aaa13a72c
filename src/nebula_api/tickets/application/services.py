"""
Ticket Application Services
============================

Application services for maintenance ticket triage, ingestion and scheduling.

Orchestrates business logic between domain entities and repositories.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from nebula_api.config import IssueCategory, Severity, MAX_SUGGESTION_LENGTH
from nebula_api.core import LLMException, ResourceNotFoundException
from nebula_api.infrastructure.llm import ILLMClient
from nebula_api.shared.infrastructure.logging import get_logger, log_latency
from nebula_api.tickets.domain import (
    FALLBACK_CLASSIFICATION,
    MaintenanceRequest,
    Technician,
    TriageClassification,
    TriageOutcome,
    TriagePromptBuilder,
)

logger = get_logger(__name__)


# ========== Repository Interfaces ==========

class IMaintenanceRequestRepository(ABC):
    """Interface for maintenance request data access."""

    @abstractmethod
    async def create(self, ticket: MaintenanceRequest) -> MaintenanceRequest:
        """Insert a new ticket and return it with store-assigned fields."""

    @abstractmethod
    async def get_by_id(self, ticket_id: str) -> Optional[MaintenanceRequest]:
        """Get ticket by ID; None when missing or malformed."""

    @abstractmethod
    async def list_recent(self) -> List[MaintenanceRequest]:
        """All tickets, newest first."""

    @abstractmethod
    async def update(self, ticket: MaintenanceRequest) -> MaintenanceRequest:
        """Persist assignment fields of an existing ticket."""


class ITechnicianRepository(ABC):
    """Interface for technician data access."""

    @abstractmethod
    async def list_all(self) -> List[Technician]:
        """All technicians."""


@dataclass
class ScheduleNotification:
    """Payload sent when a technician is scheduled."""
    ticket_id: str
    summary: str
    scheduled_at: str

    def to_payload(self) -> dict:
        return {
            "ticketId": self.ticket_id,
            "summary": self.summary,
            "scheduledAt": self.scheduled_at,
        }


@dataclass
class NotificationResult:
    """What happened to a notification attempt."""
    skipped: bool = False
    status_code: Optional[int] = None
    error: Optional[str] = None

    @property
    def delivered(self) -> bool:
        return self.status_code is not None and 200 <= self.status_code < 300


class INotifier(ABC):
    """Interface for outbound scheduling notifications."""

    @abstractmethod
    async def notify_scheduled(self, notification: ScheduleNotification) -> NotificationResult:
        """Send one notification. Must not raise."""


# ========== Application Services ==========

class TriageService:
    """
    Service for maintenance ticket triage using an LLM.

    One best-effort round trip per call: no retry, no caching.
    """

    _CATEGORIES = {c.value.lower(): c for c in IssueCategory}
    _SEVERITIES = {s.value.lower(): s for s in Severity}

    def __init__(self, llm_client: ILLMClient, temperature: float = 0.2, max_tokens: int = 300):
        self._llm = llm_client
        self._temperature = temperature
        self._max_tokens = max_tokens

    async def classify(self, text: str) -> TriageClassification:
        """
        Classify a ticket description.

        Args:
            text: Tenant's description of the issue

        Returns:
            TriageClassification with category, severity and suggestion

        Raises:
            LLMException: If the call fails or the reply cannot be parsed
        """
        response = await self._llm.chat_completion(
            messages=TriagePromptBuilder.build_messages(text),
            temperature=self._temperature,
            max_tokens=self._max_tokens,
            response_format={"type": "json_object"},
            operation="triage"
        )
        return self.parse_classification(response.content)

    async def try_classify(self, text: str) -> TriageOutcome[TriageClassification]:
        """Like classify(), but reports failure as a value instead of raising."""
        try:
            return TriageOutcome.ok(await self.classify(text))
        except Exception as e:
            return TriageOutcome.failed(e)

    @classmethod
    def parse_classification(cls, content: str) -> TriageClassification:
        """Parse the model's JSON object into a TriageClassification."""
        try:
            data = json.loads(content)
        except (TypeError, json.JSONDecodeError) as e:
            raise LLMException(f"Failed to parse triage response: {e}")

        if not isinstance(data, dict):
            raise LLMException("Triage response is not a JSON object")

        category = cls._CATEGORIES.get(str(data.get("category", "")).strip().lower())
        if category is None:
            raise LLMException(f"Unknown category in triage response: {data.get('category')!r}")

        severity = cls._SEVERITIES.get(str(data.get("severity", "")).strip().lower())
        if severity is None:
            raise LLMException(f"Unknown severity in triage response: {data.get('severity')!r}")

        suggestion = data.get("suggestion")
        if not isinstance(suggestion, str) or not suggestion.strip():
            raise LLMException("Triage response has no suggestion")

        return TriageClassification(
            category=category,
            severity=severity,
            suggestion=suggestion.strip()[:MAX_SUGGESTION_LENGTH]
        )


@dataclass
class IngestionResult:
    ticket: MaintenanceRequest
    classification: TriageClassification
    triaged_by_ai: bool


class TicketIngestionService:
    """
    Validated tenant text -> triage (with fallback) -> one insert.
    """

    def __init__(self, triage: TriageService, requests: IMaintenanceRequestRepository):
        self._triage = triage
        self._requests = requests

    async def ingest(
        self,
        text: str,
        photo_url: Optional[str] = None,
        tenant_id: Optional[UUID] = None,
        property_id: Optional[UUID] = None,
        correlation_id: Optional[str] = None
    ) -> IngestionResult:
        """
        Triage and store a new maintenance request.

        Triage failures never propagate: FALLBACK_CLASSIFICATION is used
        instead. Store failures do propagate (RepositoryException).
        """
        with log_latency(logger, "triage", correlation_id=correlation_id):
            outcome = await self._triage.try_classify(text)
        if not outcome.succeeded:
            logger.warning(
                "Triage failed, using fallback classification",
                extra={
                    "correlation_id": correlation_id,
                    "error": str(outcome.error),
                    "error_type": type(outcome.error).__name__
                }
            )
        classification = outcome.unwrap_or(FALLBACK_CLASSIFICATION)

        ticket = MaintenanceRequest.triaged(
            description=text,
            classification=classification,
            photo_url=photo_url,
            tenant_id=tenant_id,
            property_id=property_id
        )
        saved = await self._requests.create(ticket)

        logger.info(
            "Ticket ingested",
            extra={
                "correlation_id": correlation_id,
                "ticket_id": str(saved.id),
                "category": saved.category.value,
                "severity": saved.severity.value,
                "triaged_by_ai": outcome.succeeded
            }
        )
        return IngestionResult(
            ticket=saved,
            classification=classification,
            triaged_by_ai=outcome.succeeded
        )


class TicketAssignmentService:
    """Schedules technicians on tickets and notifies the scheduling webhook."""

    def __init__(self, requests: IMaintenanceRequestRepository, notifier: INotifier):
        self._requests = requests
        self._notifier = notifier

    async def assign(
        self,
        ticket_id: str,
        technician_id: UUID,
        scheduled_at: datetime,
        correlation_id: Optional[str] = None,
        requested_time: Optional[str] = None
    ) -> MaintenanceRequest:
        """
        Assign a technician and time, moving the ticket to Scheduled.

        The webhook receives `requested_time` (the caller's own timestamp
        string) when given, otherwise scheduled_at in ISO-8601.

        Raises:
            ResourceNotFoundException: If the ticket does not exist
        """
        ticket = await self._requests.get_by_id(ticket_id)
        if ticket is None:
            raise ResourceNotFoundException("Ticket", ticket_id)

        if ticket.is_past_scheduling:
            logger.warning(
                "Re-scheduling a ticket past the Scheduled state",
                extra={
                    "correlation_id": correlation_id,
                    "ticket_id": ticket_id,
                    "status": ticket.status.value
                }
            )

        updated = await self._requests.update(ticket.scheduled(technician_id, scheduled_at))

        result = await self._notifier.notify_scheduled(ScheduleNotification(
            ticket_id=str(updated.id),
            summary=f"{updated.category.value if updated.category else 'Issue'} scheduled",
            scheduled_at=requested_time or scheduled_at.isoformat()
        ))

        logger.info(
            "Ticket scheduled",
            extra={
                "correlation_id": correlation_id,
                "ticket_id": str(updated.id),
                "technician_id": str(technician_id),
                "notification_skipped": result.skipped,
                "notification_delivered": result.delivered
            }
        )
        return updated


class TicketQueryService:
    """Read-only listings."""

    def __init__(
        self,
        requests: IMaintenanceRequestRepository,
        technicians: ITechnicianRepository
    ):
        self._requests = requests
        self._technicians = technicians

    async def list_tickets(self) -> List[MaintenanceRequest]:
        return await self._requests.list_recent()

    async def list_technicians(self) -> List[Technician]:
        return await self._technicians.list_all()
