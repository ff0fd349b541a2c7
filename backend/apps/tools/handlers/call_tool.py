"""POST /tools/call - Run a tool by name."""

import logging
import uuid
from typing import Any

from fastapi import Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from dependencies import get_clause_tools
from responses import ResponseCode, error_response, success_response
from services import ClauseTools
from services.document import (
    DocumentParseError,
    FileTooLargeError,
    UnsupportedFileTypeError,
)
from services.store import DocumentNotFoundError
from services.tools import ToolInputError, UnknownToolError

logger = logging.getLogger(__name__)


# --- Request Schema ---


class ToolCallRequest(BaseModel):
    """Request body for a tool call."""

    tool: str = Field(..., min_length=1, description="Registered tool name")
    args: dict[str, Any] = Field(..., description="Tool arguments")


# --- Error mapping ---

TOOL_ERROR_MAP = {
    UnknownToolError: ResponseCode.UNKNOWN_TOOL,
    DocumentNotFoundError: ResponseCode.DOCUMENT_NOT_FOUND,
    UnsupportedFileTypeError: ResponseCode.UNSUPPORTED_FILE_TYPE,
    FileTooLargeError: ResponseCode.FILE_TOO_LARGE,
    DocumentParseError: ResponseCode.CORRUPTED_FILE,
    ToolInputError: ResponseCode.VALIDATION_ERROR,
}


# --- Handler ---


async def call_tool(
    request: ToolCallRequest,
    tools: ClauseTools = Depends(get_clause_tools),
) -> JSONResponse:
    """Dispatch a tool call and wrap its output in the standard envelope."""
    request_id = str(uuid.uuid4())[:8]
    logger.info("[%s] Tool call: %s", request_id, request.tool)

    try:
        output = await tools.call(request.tool, request.args)
        return success_response(ResponseCode.SUCCESS, output, request_id)

    except ValidationError as e:
        logger.warning("[%s] Invalid args for %s: %s", request_id, request.tool, e)
        return error_response(
            ResponseCode.VALIDATION_ERROR,
            f"Invalid arguments for tool '{request.tool}'",
            request_id,
            error_details={
                "validation_errors": e.errors(include_url=False, include_context=False)
            },
        )

    except tuple(TOOL_ERROR_MAP.keys()) as e:
        code = next(c for exc, c in TOOL_ERROR_MAP.items() if isinstance(e, exc))
        logger.warning("[%s] %s: %s", request_id, type(e).__name__, e)
        return error_response(code, str(e), request_id)
