"""
Ticket Domain Layer
===================

Domain layer for the maintenance ticket module.

Contains:
- Entities: MaintenanceRequest, Technician, TriageClassification
- Result type: TriageOutcome
- Prompt builder: TriagePromptBuilder

This layer is framework-agnostic and contains pure business logic.
"""

from nebula_api.tickets.domain.entities import (
    FALLBACK_CLASSIFICATION,
    MaintenanceRequest,
    Technician,
    TriageClassification,
    TriageOutcome,
    TriagePromptBuilder,
)

__all__ = [
    "FALLBACK_CLASSIFICATION",
    "MaintenanceRequest",
    "Technician",
    "TriageClassification",
    "TriageOutcome",
    "TriagePromptBuilder",
]
