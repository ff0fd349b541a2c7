"""Pytest configuration and fixtures for ClauseFinder tests."""

import base64
import os
import sys

import fitz  # PyMuPDF
import pytest

# Add backend to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from config import Settings  # noqa: E402
from services.store import InMemoryDocumentStore  # noqa: E402


def build_pdf(pages: list[list[tuple[float, float, str]]]) -> bytes:
    """Build a PDF in memory.

    Args:
        pages: One list per page of ``(x, y, text)`` insertions, ``y`` measured
            from the top of the page as PyMuPDF does.
    """
    doc = fitz.open()
    try:
        for insertions in pages:
            page = doc.new_page()
            for x, y, text in insertions:
                page.insert_text((x, y), text, fontsize=11)
        return doc.tobytes()
    finally:
        doc.close()


@pytest.fixture
def settings():
    """Application settings with defaults only."""
    return Settings(_env_file=None)


@pytest.fixture
def store():
    """Empty in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def contract_pdf():
    """A three-page contract-like PDF."""
    return build_pdf(
        [
            [
                (72, 72, "MASTER SERVICES AGREEMENT"),
                (72, 110, "Effective Date: 2024-01-15"),
            ],
            [
                # Inserted bottom line first; reading order must still be top-down
                (72, 300, "upon 30 days written notice to the other party."),
                (72, 100, "This Agreement may be terminated by either party"),
            ],
            [
                (72, 72, "Notices shall be sent to 100 Main Street Springfield"),
                (72, 100, "or by email to legal@example.com."),
            ],
        ]
    )


@pytest.fixture
def contract_pdf_base64(contract_pdf):
    """The contract PDF as a base64 string."""
    return base64.b64encode(contract_pdf).decode("ascii")


@pytest.fixture
def sample_pages():
    """Reconstructed page texts for ranking tests."""
    return [
        "MASTER SERVICES AGREEMENT\nEffective Date: 2024-01-15",
        "This Agreement may be terminated by either party\n"
        "upon 30 days written notice to the other party.",
        "Payment terms: invoices are due within 30 days.",
        "",
        "Termination for cause. Either party may terminate this Agreement "
        "immediately upon written notice if the other party breaches it.",
    ]
