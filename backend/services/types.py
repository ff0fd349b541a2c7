"""Shared types and dataclasses for services.

Provides typed alternatives to dict[str, Any] for better type safety.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TextFragment:
    """One positioned text span from a page's content stream.

    Coordinates use PDF user space: ``y`` grows towards the top of the page.
    ``sequence_index`` is the emission order reported by the parser.
    """

    text: str
    x: float = 0.0
    y: float = 0.0
    sequence_index: int = 0


@dataclass(frozen=True)
class StoredDocument:
    """An ingested document with its reconstructed page texts (1-indexed by position)."""

    doc_id: str
    filename: str
    pages: tuple[str, ...]

    @property
    def page_count(self) -> int:
        return len(self.pages)


@dataclass(frozen=True)
class ScoredExcerpt:
    """A page matched against a query, quoted verbatim from the page text."""

    page: int
    exact_text: str
    match_reason: str
    score: int


@dataclass(frozen=True)
class Citation:
    """Caller-facing proof of provenance for a quoted excerpt."""

    page: int
    exact_text: str


@dataclass(frozen=True)
class KeyFields:
    """Fields pulled out of quoted clauses by pattern matching."""

    effective_date: str = ""
    termination_date: str = ""
    notice_address_line: str = ""
    email_address: str = ""


@dataclass(frozen=True)
class NoticeEmail:
    """A rendered notice e-mail."""

    to: str
    sender: str
    subject: str
    body: str
