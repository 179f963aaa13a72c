"""In-memory stand-ins for the store, the LLM and the webhook."""

import json
from datetime import datetime, timedelta, timezone
from typing import List, Optional
from uuid import uuid4

from fastapi.testclient import TestClient

from nebula_api.core import LLMException, RepositoryException
from nebula_api.infrastructure.llm import ChatCompletionResult, ILLMClient
from nebula_api.main import app
from nebula_api.tickets.application import (
    IMaintenanceRequestRepository,
    INotifier,
    ITechnicianRepository,
    NotificationResult,
    ScheduleNotification,
    TriageService,
)
from nebula_api.tickets.domain import MaintenanceRequest, Technician
from nebula_api.tickets.interfaces import controllers


class StubLLMClient(ILLMClient):
    """Returns a canned reply, or raises when `error` is set."""

    def __init__(self, reply: Optional[dict] = None, raw: Optional[str] = None, error: Optional[Exception] = None):
        self.reply = reply
        self.raw = raw
        self.error = error
        self.calls: List[dict] = []

    async def chat_completion(self, messages, temperature=0.2, max_tokens=300,
                              response_format=None, operation="chat_completion"):
        self.calls.append({
            "messages": messages,
            "response_format": response_format,
            "operation": operation,
        })
        if self.error is not None:
            raise self.error
        content = self.raw if self.raw is not None else json.dumps(self.reply)
        return ChatCompletionResult(
            content=content, model="stub", prompt_tokens=1, completion_tokens=1, latency_ms=0
        )


def plumbing_llm() -> StubLLMClient:
    return StubLLMClient(reply={
        "category": "plumbing",
        "severity": "medium",
        "suggestion": "Shut off valve",
    })


def failing_llm() -> StubLLMClient:
    return StubLLMClient(error=LLMException("Chat completion failed: connection reset"))


class FakeRequestRepository(IMaintenanceRequestRepository):
    """Dict-backed store; created_at advances one second per insert."""

    def __init__(self):
        self.rows = {}
        self.fail_writes = False
        self._clock = datetime(2026, 10, 1, 9, 0, tzinfo=timezone.utc)

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def seed(self, ticket: MaintenanceRequest) -> MaintenanceRequest:
        if ticket.id is None:
            ticket.id = uuid4()
        if ticket.created_at is None:
            ticket.created_at = self._tick()
        self.rows[str(ticket.id)] = ticket
        return ticket

    async def create(self, ticket):
        if self.fail_writes:
            raise RepositoryException('insert into "requests" failed: connection refused')
        ticket.id = uuid4()
        ticket.created_at = self._tick()
        self.rows[str(ticket.id)] = ticket
        return ticket

    async def get_by_id(self, ticket_id):
        return self.rows.get(str(ticket_id))

    async def list_recent(self):
        return sorted(self.rows.values(), key=lambda t: t.created_at, reverse=True)

    async def update(self, ticket):
        if self.fail_writes:
            raise RepositoryException("update failed: connection refused")
        self.rows[str(ticket.id)] = ticket
        return ticket


class FakeTechnicianRepository(ITechnicianRepository):
    def __init__(self, technicians=None):
        self.technicians = technicians or []

    async def list_all(self):
        return list(self.technicians)


def sample_technicians() -> List[Technician]:
    return [
        Technician(id=uuid4(), name="Dana Ruiz", specialty="plumbing", phone="555-0101"),
        Technician(id=uuid4(), name="Lee Park", specialty="HVAC"),
    ]


class RecordingNotifier(INotifier):
    def __init__(self, result: Optional[NotificationResult] = None):
        self.sent: List[ScheduleNotification] = []
        self.result = result or NotificationResult(status_code=200)

    async def notify_scheduled(self, notification):
        self.sent.append(notification)
        return self.result


def client_for(
    llm: ILLMClient,
    requests: IMaintenanceRequestRepository,
    technicians: ITechnicianRepository,
    notifier: INotifier,
) -> TestClient:
    """TestClient with the store, classifier and webhook replaced.

    The app's lifespan is not run; call clear_overrides() afterwards.
    """
    triage = TriageService(llm)
    app.dependency_overrides[controllers.get_triage_service] = lambda: triage
    app.dependency_overrides[controllers.get_request_repository] = lambda: requests
    app.dependency_overrides[controllers.get_technician_repository] = lambda: technicians
    app.dependency_overrides[controllers.get_notifier] = lambda: notifier
    return TestClient(app)


def clear_overrides() -> None:
    app.dependency_overrides.clear()
