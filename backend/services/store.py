"""In-memory document store.

Documents are keyed by a content hash of the source PDF and never evicted.
Page texts are immutable once stored, so readers need no locking; a document
is only put after all of its pages have been reconstructed.
"""

import logging
from typing import Protocol

from services.types import StoredDocument

logger = logging.getLogger(__name__)


class DocumentNotFoundError(KeyError):
    """Raised when a document id is not in the store."""

    def __init__(self, doc_id: str) -> None:
        super().__init__(doc_id)
        self.doc_id = doc_id

    def __str__(self) -> str:
        return f"Unknown doc_id: {self.doc_id}"


class DocumentStore(Protocol):
    """Keyed storage of ingested documents."""

    def put(self, document: StoredDocument) -> None: ...

    def get(self, doc_id: str) -> StoredDocument: ...

    def has(self, doc_id: str) -> bool: ...


class InMemoryDocumentStore:
    """Process-lifetime document store backed by a dict."""

    def __init__(self) -> None:
        self._documents: dict[str, StoredDocument] = {}

    def put(self, document: StoredDocument) -> None:
        """Store a document, replacing any previous one with the same id."""
        self._documents[document.doc_id] = document
        logger.info(
            "Stored document %s (%s, %d pages)",
            document.doc_id,
            document.filename,
            document.page_count,
        )

    def get(self, doc_id: str) -> StoredDocument:
        """Get a document by id.

        Raises:
            DocumentNotFoundError: If the id is unknown.
        """
        try:
            return self._documents[doc_id]
        except KeyError:
            raise DocumentNotFoundError(doc_id) from None

    def has(self, doc_id: str) -> bool:
        return doc_id in self._documents

    def __len__(self) -> int:
        return len(self._documents)
