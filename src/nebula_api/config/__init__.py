"""
Configuration Module
====================

Application settings and configuration management using Pydantic.
"""

from enum import Enum
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety.
    """

    # ========== Application ==========
    app_name: str = Field(default="nebula-maintenance-api", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root log level")

    # ========== Server ==========
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, description="Server port", ge=1, le=65535)

    # ========== Hosted Store ==========
    database_url: Optional[str] = Field(
        default=None,
        description="Async SQLAlchemy URL of the hosted store, credentials included "
                    "(e.g. postgresql+asyncpg://postgres:<key>@db.<ref>.supabase.co:5432/postgres)"
    )
    db_pool_size: int = Field(default=5, description="Database connection pool size", ge=1)
    db_max_overflow: int = Field(default=10, description="Max overflow connections", ge=0)

    # ========== Classification Service (OpenAI) ==========
    openai_api_key: Optional[str] = Field(
        default=None,
        description="OpenAI API key for ticket triage"
    )
    llm_model: str = Field(
        default="gpt-4o-mini",
        description="Chat model used for triage"
    )
    llm_temperature: float = Field(
        default=0.2,
        description="Sampling temperature for triage",
        ge=0.0,
        le=2.0
    )
    llm_max_tokens: int = Field(
        default=300,
        description="Max tokens for the triage completion",
        ge=1,
        le=4000
    )
    llm_timeout_seconds: float = Field(
        default=20.0,
        description="Timeout for a single classification call",
        gt=0
    )
    mock_llm: bool = Field(
        default=False,
        description="Use a deterministic local classifier (no API calls)"
    )

    # ========== Scheduling Notifications (n8n webhook) ==========
    n8n_webhook_url: Optional[str] = Field(
        default=None,
        description="Webhook notified when a technician is scheduled"
    )
    webhook_timeout_seconds: float = Field(
        default=5.0,
        description="Timeout for webhook calls",
        ge=0.1,
        le=30
    )

    # ========== CORS ==========
    cors_origins: List[str] = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is one of allowed values."""
        allowed = {"development", "staging", "production"}
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    @field_validator("n8n_webhook_url", "openai_api_key", "database_url")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty environment values as unset."""
        if v is not None and not v.strip():
            return None
        return v

    def missing_credentials(self) -> List[str]:
        """Names of required settings that are not configured."""
        missing = []
        if not self.database_url:
            missing.append("DATABASE_URL")
        if not self.openai_api_key and not self.mock_llm:
            missing.append("OPENAI_API_KEY")
        return missing


@lru_cache()
def get_settings() -> Settings:
    """Returns cached Settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


# ========== Constants ==========

class TicketStatus(str, Enum):
    """Maintenance request lifecycle statuses."""
    TRIAGED = "Triaged"
    SCHEDULED = "Scheduled"
    COMPLETED = "Completed"


class IssueCategory(str, Enum):
    """Trade categories used for triage."""
    HVAC = "HVAC"
    PLUMBING = "plumbing"
    ELECTRICAL = "electrical"
    OTHER = "other"


class Severity(str, Enum):
    """Triage severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# Forward order of the status lifecycle
STATUS_ORDER = [TicketStatus.TRIAGED, TicketStatus.SCHEDULED, TicketStatus.COMPLETED]

MIN_DESCRIPTION_LENGTH = 5
MAX_SUGGESTION_LENGTH = 120
