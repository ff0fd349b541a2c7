"""POST /documents/upload - Upload a PDF and extract its page texts."""

import logging
import uuid

from fastapi import Depends, File, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from dependencies import get_clause_tools, get_document_parser
from responses import ResponseCode, error_response, success_response
from services import ClauseTools, DocumentParser
from services.document import (
    DocumentParseError,
    FileTooLargeError,
    UnsupportedFileTypeError,
)

logger = logging.getLogger(__name__)


# --- Response Schema ---


class DocumentSummary(BaseModel):
    """Summary of an ingested document."""

    doc_id: str = Field(..., description="Content-hash document identifier")
    filename: str = Field(..., description="Sanitized filename")
    page_count: int = Field(..., description="Number of pages")


# --- Error mapping ---

UPLOAD_ERROR_MAP = {
    UnsupportedFileTypeError: ResponseCode.UNSUPPORTED_FILE_TYPE,
    FileTooLargeError: ResponseCode.FILE_TOO_LARGE,
    DocumentParseError: ResponseCode.CORRUPTED_FILE,
    ValueError: ResponseCode.VALIDATION_ERROR,
}


# --- Handler ---


async def upload_document(
    file: UploadFile = File(...),
    document_parser: DocumentParser = Depends(get_document_parser),
    tools: ClauseTools = Depends(get_clause_tools),
) -> JSONResponse:
    """Upload and process a PDF.

    Flow:
    1. Validate file (type, size)
    2. Read bytes
    3. Extract and reconstruct page texts
    4. Store under the content-hash id
    """
    request_id = str(uuid.uuid4())[:8]

    logger.info("[%s] Upload: %s (%s bytes)", request_id, file.filename, file.size)

    try:
        # 1. Validate file
        content = await file.read()
        document_parser.validate_file(
            filename=file.filename or "unknown",
            file_size=len(content),
            content_type=file.content_type,
        )

        # 2. Parse and store
        document = await tools.ingest(content, file.filename or "document.pdf")

        summary = DocumentSummary(
            doc_id=document.doc_id,
            filename=document.filename,
            page_count=document.page_count,
        )

        logger.info(
            "[%s] Processed: %s (%d pages)", request_id, document.doc_id, document.page_count
        )
        return success_response(
            ResponseCode.DOCUMENT_EXTRACTED,
            summary.model_dump(mode="json"),
            request_id,
        )

    except tuple(UPLOAD_ERROR_MAP.keys()) as e:
        code = next(c for exc, c in UPLOAD_ERROR_MAP.items() if isinstance(e, exc))
        logger.warning("[%s] %s: %s", request_id, type(e).__name__, e)
        return error_response(code, str(e), request_id)

    except Exception as e:
        logger.exception("[%s] Unexpected error during upload", request_id)
        return error_response(ResponseCode.INTERNAL_ERROR, str(e), request_id)
