"""Document handlers."""

from apps.documents.handlers.find_clauses import find_clauses
from apps.documents.handlers.get_document import get_document
from apps.documents.handlers.upload_document import upload_document

__all__ = [
    "upload_document",
    "get_document",
    "find_clauses",
]
