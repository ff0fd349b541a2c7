"""Document parsing service for PDF files.

Handles:
- File validation (extension, MIME type, size)
- Base64 payload decoding for tool calls
- Positioned text extraction from PDF pages (PyMuPDF)
- Reading-order page reconstruction
- Content hashing for stable document ids

All blocking PDF operations are wrapped with asyncio.to_thread for proper async handling.
"""

import asyncio
import base64
import binascii
import hashlib
import logging
import re
from pathlib import Path

import fitz  # PyMuPDF

from config import Settings, get_settings
from services.layout import reconstruct_page_text
from services.types import StoredDocument, TextFragment

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = frozenset({".pdf"})
PDF_MIME_TYPE = "application/pdf"
DOC_ID_PREFIX = "doc_"
DOC_ID_HASH_LENGTH = 24


class DocumentParseError(Exception):
    """Raised when document parsing fails."""

    pass


class UnsupportedFileTypeError(Exception):
    """Raised when file type is not supported."""

    pass


class FileTooLargeError(Exception):
    """Raised when file exceeds size limit."""

    pass


def page_fragments(page: fitz.Page) -> list[TextFragment]:
    """Collect the text spans of a page as positioned fragments.

    PyMuPDF reports span origins with ``y`` growing downwards; they are
    flipped into PDF user space so the top line has the largest ``y``.
    """
    page_top = page.rect.y1
    fragments: list[TextFragment] = []

    content = page.get_text("dict")
    for block in content.get("blocks", []):
        if block.get("type") != 0:
            continue
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                origin = span.get("origin")
                x, y = (origin[0], page_top - origin[1]) if origin else (0.0, 0.0)
                fragments.append(
                    TextFragment(
                        text=span.get("text", ""),
                        x=float(x),
                        y=float(y),
                        sequence_index=len(fragments),
                    )
                )

    return fragments


class DocumentParser:
    """Service for turning PDF bytes into stored documents.

    All file I/O operations are non-blocking, using asyncio.to_thread
    to avoid blocking the event loop.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize document parser."""
        self.settings = settings or get_settings()

    def sanitize_filename(self, filename: str) -> str:
        """Sanitize filename to prevent path traversal and other issues."""
        filename = Path(filename).name
        filename = re.sub(r'[<>:"/\\|?*\x00-\x1f]', "_", filename)

        max_length = 255
        if len(filename) > max_length:
            name, ext = Path(filename).stem, Path(filename).suffix
            filename = name[: max_length - len(ext)] + ext

        if not filename or filename.startswith("."):
            filename = "document" + (Path(filename).suffix or ".pdf")

        return filename

    def validate_file(
        self,
        filename: str,
        file_size: int,
        content_type: str | None = None,
    ) -> str:
        """Validate uploaded file and return extension."""
        if not filename:
            raise ValueError("Filename cannot be empty")

        if file_size <= 0:
            raise ValueError("File size must be positive")

        if file_size > self.settings.max_file_size_bytes:
            raise FileTooLargeError(
                f"File size {file_size} exceeds limit of {self.settings.max_file_size_mb}MB"
            )

        ext = Path(filename).suffix.lower()
        if ext not in SUPPORTED_EXTENSIONS:
            raise UnsupportedFileTypeError(
                f"File type '{ext}' not supported. Supported: {', '.join(sorted(SUPPORTED_EXTENSIONS))}"
            )

        self.validate_mime_type(content_type)
        return ext

    def validate_mime_type(self, content_type: str | None) -> None:
        """Accept only PDF content (a missing type is left to the extension check)."""
        if content_type is None:
            return
        if content_type.split(";")[0].strip().lower() != PDF_MIME_TYPE:
            raise UnsupportedFileTypeError(f"Only {PDF_MIME_TYPE} is accepted")

    def decode_base64(self, payload: str) -> bytes:
        """Decode a base64 PDF payload and enforce the size limit."""
        try:
            content = base64.b64decode(payload.strip(), validate=True)
        except (binascii.Error, ValueError) as e:
            raise DocumentParseError(f"Invalid base64 payload: {e}") from e

        if not content:
            raise DocumentParseError("Decoded PDF payload is empty")
        if len(content) > self.settings.max_file_size_bytes:
            raise FileTooLargeError(
                f"File size {len(content)} exceeds limit of {self.settings.max_file_size_mb}MB"
            )
        return content

    def compute_doc_id(self, content: bytes) -> str:
        """Derive the document id from a SHA256 hash of the raw bytes."""
        digest = hashlib.sha256(content).hexdigest()
        return f"{DOC_ID_PREFIX}{digest[:DOC_ID_HASH_LENGTH]}"

    async def parse_pdf(self, content: bytes, filename: str) -> StoredDocument:
        """Parse PDF bytes into a document with one reconstructed text per page.

        Raises:
            DocumentParseError: If the PDF cannot be opened or a page fails.
        """
        pages = await asyncio.to_thread(self._extract_pages_sync, content)

        document = StoredDocument(
            doc_id=self.compute_doc_id(content),
            filename=self.sanitize_filename(filename),
            pages=tuple(pages),
        )

        if not any(pages):
            logger.warning(
                "Document %s has no extractable text (%d pages)",
                document.doc_id,
                document.page_count,
            )
        return document

    def _extract_pages_sync(self, content: bytes) -> list[str]:
        """Extract reconstructed page texts using PyMuPDF (synchronous)."""
        doc = None
        try:
            doc = fitz.open(stream=content, filetype="pdf")
            pages: list[str] = []

            for page_num, page in enumerate(doc, start=1):
                try:
                    fragments = page_fragments(page)
                except Exception as e:
                    # Page numbers are positional, a skipped page would shift the rest
                    raise DocumentParseError(
                        f"Failed to extract text from page {page_num}: {e}"
                    ) from e
                pages.append(
                    reconstruct_page_text(fragments, self.settings.line_tolerance)
                )

            return pages

        except DocumentParseError:
            raise
        except Exception as e:
            raise DocumentParseError(f"Failed to parse PDF: {e}") from e
        finally:
            if doc is not None:
                doc.close()
