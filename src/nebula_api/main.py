"""
Nebula Maintenance API - Main Application
==========================================

Backend for the Nebula property-management front end.

Modules:
- Tickets: tenant maintenance requests, AI triage, technician scheduling

Clean Architecture Layers:
- Interfaces: FastAPI controllers
- Application: Services and DTOs
- Domain: Entities and value objects
- Infrastructure: Hosted store, LLM, webhook
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Configuration and Core
from nebula_api.config import settings
from nebula_api.core import ConfigurationException

# Infrastructure
from nebula_api.infrastructure.database import init_database, close_database, create_tables
from nebula_api.infrastructure.llm import build_llm_client

# Tickets module
from nebula_api.tickets.application import TriageService
from nebula_api.tickets.infrastructure import WebhookNotifier
from nebula_api.tickets.interfaces import tickets_router

# Shared
from nebula_api.shared.api.middleware import (
    CorrelationIDMiddleware,
    LoggingMiddleware,
    register_exception_handlers,
)
from nebula_api.shared.infrastructure.logging import setup_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager.

    STARTUP:
    1. Setup structured logging
    2. Check required credentials (store, classification service)
    3. Initialize the store engine
    4. Initialize LLM client and triage service
    5. Initialize webhook notifier

    SHUTDOWN:
    1. Close webhook and LLM clients
    2. Close database connections
    """
    # === STARTUP ===
    setup_logging(settings.log_level, settings.environment)
    logger.info("Starting Nebula Maintenance API", extra={
        "version": settings.app_version,
        "environment": settings.environment
    })

    missing = settings.missing_credentials()
    if missing:
        logger.error("Missing required configuration", extra={"missing": missing})
        raise ConfigurationException(
            f"Missing required configuration: {', '.join(missing)}",
            {"missing": missing}
        )

    logger.info("Initializing database")
    init_database()

    if settings.environment == "development":
        # The hosted store owns its schema; local databases get tables created here
        try:
            await create_tables()
        except Exception as e:
            logger.warning(f"Could not create tables - running against existing schema: {e}")

    logger.info("Initializing LLM client", extra={"mock": settings.mock_llm, "model": settings.llm_model})
    llm_client = build_llm_client()
    app.state.llm_client = llm_client
    app.state.triage_service = TriageService(
        llm_client,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens
    )

    notifier = WebhookNotifier.from_settings()
    if not notifier.enabled:
        logger.info("N8N_WEBHOOK_URL not set - scheduling notifications disabled")
    app.state.notifier = notifier

    logger.info("Nebula Maintenance API started successfully")

    yield  # Application runs here

    # === SHUTDOWN ===
    logger.info("Shutting down Nebula Maintenance API")

    await notifier.close()
    await llm_client.close()
    await close_database()

    logger.info("Nebula Maintenance API shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="Nebula Maintenance API",
    description="""
    ## Property maintenance requests with AI triage

    **Endpoints:**
    - `GET /tickets` - Maintenance requests, newest first
    - `POST /tickets/ingest` - Submit a request; it is triaged by category and severity
    - `POST /tickets/{id}/assign` - Schedule a technician
    - `GET /technicians` - Technicians available for scheduling

    **Triage categories:** HVAC, plumbing, electrical, other

    **Severities:** low, medium, high

    **Lifecycle:** Triaged → Scheduled → Completed

    Errors are returned as `{"error": "<message>"}`.
    """,
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# === CORS Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# === Custom Middleware (from shared) ===
app.add_middleware(LoggingMiddleware)
app.add_middleware(CorrelationIDMiddleware)
register_exception_handlers(app)

# === Include Module Routers ===
app.include_router(tickets_router)


# === Health Check Endpoint ===

@app.get("/health", tags=["Health"], responses={
    200: {
        "description": "Service is up",
        "content": {"application/json": {"example": {"ok": True}}}
    }
})
async def health_check():
    """Liveness check for load balancers."""
    return {"ok": True}


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "health": "/health",
        "endpoints": [
            "GET /tickets - List maintenance requests",
            "POST /tickets/ingest - Submit and triage a request",
            "POST /tickets/{id}/assign - Schedule a technician",
            "GET /technicians - List technicians"
        ]
    }


# === Development Entry Point ===

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "nebula_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level="info"
    )
