"""Tests for the in-memory document store."""

import pytest

from services.store import DocumentNotFoundError, InMemoryDocumentStore
from services.types import StoredDocument


class TestInMemoryDocumentStore:
    """Tests for InMemoryDocumentStore."""

    def setup_method(self):
        """Set up test fixtures."""
        self.store = InMemoryDocumentStore()
        self.document = StoredDocument(
            doc_id="doc_abc", filename="lease.pdf", pages=("page one", "page two")
        )

    def test_put_and_get(self):
        """Test a stored document can be read back."""
        self.store.put(self.document)

        assert self.store.has("doc_abc")
        assert self.store.get("doc_abc") is self.document
        assert len(self.store) == 1

    def test_unknown_id(self):
        """Test lookups of unknown ids fail with a clear message."""
        assert not self.store.has("doc_missing")
        with pytest.raises(DocumentNotFoundError) as exc_info:
            self.store.get("doc_missing")

        assert exc_info.value.doc_id == "doc_missing"
        assert str(exc_info.value) == "Unknown doc_id: doc_missing"

    def test_not_found_is_key_error(self):
        """Test the lookup failure is a KeyError."""
        with pytest.raises(KeyError):
            self.store.get("doc_missing")

    def test_put_same_id_replaces(self):
        """Test identical uploads map to one entry."""
        self.store.put(self.document)
        self.store.put(
            StoredDocument(doc_id="doc_abc", filename="copy.pdf", pages=self.document.pages)
        )

        assert len(self.store) == 1
        assert self.store.get("doc_abc").filename == "copy.pdf"

    def test_page_count(self):
        """Test page count follows the page tuple."""
        assert self.document.page_count == 2
