"""Tests for the document parsing service."""

import base64

import pytest

from services.document import (
    DocumentParseError,
    DocumentParser,
    FileTooLargeError,
    UnsupportedFileTypeError,
)


class TestDocumentParser:
    """Tests for DocumentParser validation helpers."""

    @pytest.fixture(autouse=True)
    def setup_parser(self, settings):
        """Set up test fixtures."""
        self.settings = settings
        self.parser = DocumentParser(settings)

    def test_sanitize_filename_basic(self):
        """Test basic filename sanitization."""
        assert self.parser.sanitize_filename("lease.pdf") == "lease.pdf"

    def test_sanitize_filename_path_traversal(self):
        """Test path traversal prevention."""
        result = self.parser.sanitize_filename("../../../etc/passwd")
        assert "/" not in result
        assert ".." not in result

    def test_sanitize_filename_special_chars(self):
        """Test special character removal."""
        result = self.parser.sanitize_filename('doc<>:"|?*.pdf')
        assert "<" not in result
        assert ">" not in result
        assert ":" not in result
        assert result.endswith(".pdf")

    def test_sanitize_filename_long_name(self):
        """Test long filename truncation."""
        result = self.parser.sanitize_filename("a" * 300 + ".pdf")
        assert len(result) <= 255
        assert result.endswith(".pdf")

    def test_sanitize_filename_empty(self):
        """Test empty filename handling."""
        assert self.parser.sanitize_filename("") == "document.pdf"

    def test_sanitize_filename_dot_start(self):
        """Test dot-starting filename handling."""
        assert not self.parser.sanitize_filename(".hidden").startswith(".")

    def test_validate_file_pdf(self):
        """Test PDFs pass validation."""
        assert self.parser.validate_file("lease.PDF", 1000) == ".pdf"
        assert self.parser.validate_file("lease.pdf", 1000, "application/pdf") == ".pdf"

    def test_validate_file_unsupported_type(self):
        """Test rejection of non-PDF files."""
        for name in ["notes.txt", "lease.docx", "scan.jpg"]:
            with pytest.raises(UnsupportedFileTypeError):
                self.parser.validate_file(name, 1000)

    def test_validate_file_wrong_mime_type(self):
        """Test rejection of a non-PDF content type."""
        with pytest.raises(UnsupportedFileTypeError):
            self.parser.validate_file("lease.pdf", 1000, "text/plain")

    def test_validate_mime_type_with_parameters(self):
        """Test content type parameters are ignored."""
        self.parser.validate_mime_type("Application/PDF; charset=binary")
        self.parser.validate_mime_type(None)

    def test_validate_file_too_large(self):
        """Test rejection of oversized files."""
        with pytest.raises(FileTooLargeError):
            self.parser.validate_file("lease.pdf", self.settings.max_file_size_bytes + 1)

    def test_validate_file_empty(self):
        """Test rejection of empty files and names."""
        with pytest.raises(ValueError):
            self.parser.validate_file("lease.pdf", 0)
        with pytest.raises(ValueError):
            self.parser.validate_file("", 1000)

    def test_decode_base64(self, contract_pdf, contract_pdf_base64):
        """Test a valid payload decodes to the original bytes."""
        assert self.parser.decode_base64(contract_pdf_base64) == contract_pdf

    def test_decode_base64_invalid(self):
        """Test malformed and empty payloads are rejected."""
        with pytest.raises(DocumentParseError):
            self.parser.decode_base64("not base64!!")
        with pytest.raises(DocumentParseError):
            self.parser.decode_base64("")

    def test_decode_base64_too_large(self):
        """Test decoded payloads respect the size limit."""
        payload = base64.b64encode(b"x" * (self.settings.max_file_size_bytes + 1)).decode()
        with pytest.raises(FileTooLargeError):
            self.parser.decode_base64(payload)

    def test_compute_doc_id(self):
        """Test ids are stable, prefixed and content-derived."""
        first = self.parser.compute_doc_id(b"%PDF-1.7 one")
        second = self.parser.compute_doc_id(b"%PDF-1.7 one")
        other = self.parser.compute_doc_id(b"%PDF-1.7 two")

        assert first == second
        assert first != other
        assert first.startswith("doc_")
        assert len(first) == len("doc_") + 24


class TestParsePdf:
    """Tests for PDF text extraction."""

    @pytest.mark.asyncio
    async def test_parse_contract(self, settings, contract_pdf):
        """Test pages come back in order with reconstructed text."""
        parser = DocumentParser(settings)
        document = await parser.parse_pdf(contract_pdf, "contract.pdf")

        assert document.doc_id == parser.compute_doc_id(contract_pdf)
        assert document.filename == "contract.pdf"
        assert document.page_count == 3
        assert "MASTER SERVICES AGREEMENT" in document.pages[0]
        assert "2024-01-15" in document.pages[0]
        assert "legal@example.com" in document.pages[2]

    @pytest.mark.asyncio
    async def test_reading_order_is_top_down(self, settings, contract_pdf):
        """Test lines are ordered by position, not insertion order."""
        document = await DocumentParser(settings).parse_pdf(contract_pdf, "contract.pdf")
        lines = document.pages[1].splitlines()

        assert len(lines) == 2
        assert lines[0].startswith("This Agreement may be terminated")
        assert lines[1].startswith("upon 30 days written notice")

    @pytest.mark.asyncio
    async def test_same_bytes_same_id(self, settings, contract_pdf):
        """Test repeated parses give the same document id."""
        parser = DocumentParser(settings)
        first = await parser.parse_pdf(contract_pdf, "a.pdf")
        second = await parser.parse_pdf(contract_pdf, "b.pdf")

        assert first.doc_id == second.doc_id

    @pytest.mark.asyncio
    async def test_corrupt_pdf(self, settings):
        """Test unreadable bytes raise a parse error."""
        with pytest.raises(DocumentParseError):
            await DocumentParser(settings).parse_pdf(b"this is not a pdf", "bad.pdf")
