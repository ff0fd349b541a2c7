"""GET /health - Check health of all services."""

from datetime import UTC, datetime

from fastapi import Depends
from pydantic import BaseModel, Field

from config import Settings, get_settings
from dependencies import get_document_store
from services.store import DocumentStore

# --- Response Schemas ---


class ServiceStatus(BaseModel):
    """Status of an individual service."""

    name: str
    status: str = Field(..., description="healthy, degraded, or unhealthy")
    documents: int | None = Field(None, description="Documents held, if applicable")
    error: str | None = Field(None, description="Error message if unhealthy")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status: healthy, degraded, unhealthy")
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Environment name")
    services: list[ServiceStatus] = Field(
        ..., description="Individual service statuses"
    )
    timestamp: datetime


# --- Handler ---


async def check_health(
    settings: Settings = Depends(get_settings),
    store: DocumentStore = Depends(get_document_store),
) -> HealthResponse:
    """Check health of all services."""
    services = [
        ServiceStatus(
            name="document_store",
            status="healthy",
            documents=len(store) if hasattr(store, "__len__") else None,
        ),
    ]

    statuses = [s.status for s in services]
    if all(s == "healthy" for s in statuses):
        overall = "healthy"
    elif any(s == "unhealthy" for s in statuses):
        overall = "unhealthy"
    else:
        overall = "degraded"

    return HealthResponse(
        status=overall,
        version="0.1.0",
        environment=settings.environment,
        services=services,
        timestamp=datetime.now(UTC),
    )
