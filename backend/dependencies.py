"""FastAPI dependency injection for services.

Replaces global singleton pattern with proper DI using Depends().
The document store is cached with @lru_cache() so every request shares it.
"""

from functools import lru_cache

from fastapi import Depends

from config import Settings, get_settings
from services.document import DocumentParser
from services.store import DocumentStore, InMemoryDocumentStore
from services.tools import ClauseTools

# --- Cached Singletons ---
# These are created once and reused across all requests


@lru_cache
def get_document_store() -> DocumentStore:
    """Get the process-wide document store."""
    return InMemoryDocumentStore()


# --- Lightweight Services (per-request is fine) ---


def get_document_parser(settings: Settings = Depends(get_settings)) -> DocumentParser:
    """Get document parser (stateless, cheap to create)."""
    return DocumentParser(settings)


# --- Composed Services ---
# Use Depends() for proper FastAPI DI chaining


def get_clause_tools(
    store: DocumentStore = Depends(get_document_store),
    parser: DocumentParser = Depends(get_document_parser),
    settings: Settings = Depends(get_settings),
) -> ClauseTools:
    """Get tool service with injected dependencies.

    FastAPI will automatically inject the cached dependencies.
    """
    return ClauseTools(store=store, parser=parser, settings=settings)
