"""POST /documents/{doc_id}/clauses - Rank a document's pages for a query."""

import logging
import uuid

from fastapi import Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from dependencies import get_clause_tools
from responses import ResponseCode, error_response, success_response
from services import ClauseTools
from services.store import DocumentNotFoundError
from services.tools import FindRelevantClausesArgs

logger = logging.getLogger(__name__)


# --- Request Schema ---


class ClauseSearchRequest(BaseModel):
    """Request body for clause search."""

    query: str = Field(
        ...,
        min_length=1,
        max_length=2000,
        description="Free-text query to match against page texts",
    )
    max_results: float | None = Field(None, description="Result cap, clamped to 1..10")
    excerpt_max_chars: float | None = Field(
        None, description="Excerpt length, clamped to 120..2000"
    )


# --- Handler ---


async def find_clauses(
    doc_id: str,
    request: ClauseSearchRequest,
    tools: ClauseTools = Depends(get_clause_tools),
) -> JSONResponse:
    """Find the pages that best match a query and quote them."""
    request_id = str(uuid.uuid4())[:8]
    logger.info("[%s] Clause search on %s: %s", request_id, doc_id, request.query[:100])

    try:
        args = FindRelevantClausesArgs(
            doc_id=doc_id,
            query=request.query,
            max_results=request.max_results,
            excerpt_max_chars=request.excerpt_max_chars,
        )
        result = await tools.find_relevant_clauses(args)
        return success_response(ResponseCode.SUCCESS, result, request_id)

    except DocumentNotFoundError as e:
        logger.warning("[%s] %s", request_id, e)
        return error_response(ResponseCode.DOCUMENT_NOT_FOUND, str(e), request_id)

    except ValueError as e:
        logger.warning("[%s] Invalid clause search: %s", request_id, e)
        return error_response(ResponseCode.VALIDATION_ERROR, str(e), request_id)
