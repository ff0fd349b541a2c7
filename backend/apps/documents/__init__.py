"""Documents module - PDF ingestion and clause search."""

from apps.documents.routes import router

__all__ = ["router"]
