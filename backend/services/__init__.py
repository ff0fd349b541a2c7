"""Services module for document ingestion and clause search.

Contains the domain logic shared by the HTTP API and the stdio tool server:
- PDF parsing and page reconstruction
- Text normalization and query tokenization
- Relevance scoring, excerpt selection and ranking
- Document storage
- Pattern-based field, deadline and notice e-mail helpers
- Tool dispatch

Note: Service instances are managed via dependencies.py using FastAPI DI.
"""

from services.document import (
    DocumentParseError,
    DocumentParser,
    FileTooLargeError,
    UnsupportedFileTypeError,
)
from services.layout import reconstruct_page_text
from services.ranking import build_citations, rank_pages
from services.scoring import ScoringPolicy, score_page, select_excerpt
from services.store import DocumentNotFoundError, DocumentStore, InMemoryDocumentStore
from services.text import normalize, tokenize_query
from services.tools import ClauseTools, ToolInputError, UnknownToolError
from services.types import Citation, ScoredExcerpt, StoredDocument, TextFragment

__all__ = [
    # Document services
    "DocumentParser",
    "DocumentParseError",
    "FileTooLargeError",
    "UnsupportedFileTypeError",
    "reconstruct_page_text",
    # Search
    "normalize",
    "tokenize_query",
    "ScoringPolicy",
    "score_page",
    "select_excerpt",
    "rank_pages",
    "build_citations",
    # Storage
    "DocumentStore",
    "InMemoryDocumentStore",
    "DocumentNotFoundError",
    # Tools
    "ClauseTools",
    "ToolInputError",
    "UnknownToolError",
    # Types
    "Citation",
    "ScoredExcerpt",
    "StoredDocument",
    "TextFragment",
]
