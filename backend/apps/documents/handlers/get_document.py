"""GET /documents/{doc_id} - Get an ingested document's summary."""

import uuid

from fastapi import Depends
from fastapi.responses import JSONResponse

from apps.documents.handlers.upload_document import DocumentSummary
from dependencies import get_document_store
from responses import ResponseCode, error_response, success_response
from services.store import DocumentNotFoundError, DocumentStore


async def get_document(
    doc_id: str,
    store: DocumentStore = Depends(get_document_store),
) -> JSONResponse:
    """Return id, filename and page count of a stored document."""
    request_id = str(uuid.uuid4())[:8]

    try:
        document = store.get(doc_id)
    except DocumentNotFoundError as e:
        return error_response(ResponseCode.DOCUMENT_NOT_FOUND, str(e), request_id)

    summary = DocumentSummary(
        doc_id=document.doc_id,
        filename=document.filename,
        page_count=document.page_count,
    )
    return success_response(ResponseCode.SUCCESS, summary.model_dump(mode="json"), request_id)
