"""Standardized response infrastructure for API endpoints.

Provides consistent response format with structured codes and messages.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from fastapi.responses import JSONResponse


class ResponseCode(str, Enum):
    """Response codes for API responses.

    Ranges: 0xxx=Success, 1xxx=Client Error, 2xxx=Server Error
    """

    # Success codes
    SUCCESS = "0000"
    DOCUMENT_EXTRACTED = "0002"

    # Client errors
    VALIDATION_ERROR = "1000"
    UNSUPPORTED_FILE_TYPE = "1001"
    FILE_TOO_LARGE = "1002"
    DOCUMENT_NOT_FOUND = "1003"
    CORRUPTED_FILE = "1005"
    UNKNOWN_TOOL = "1007"
    NOT_FOUND = "1008"

    # Server errors
    INTERNAL_ERROR = "2000"


# Response messages mapped to codes
RESPONSE_MESSAGES: dict[ResponseCode, str] = {
    ResponseCode.SUCCESS: "Operation completed successfully",
    ResponseCode.DOCUMENT_EXTRACTED: "Document text extracted successfully",
    ResponseCode.VALIDATION_ERROR: "Request validation failed",
    ResponseCode.UNSUPPORTED_FILE_TYPE: "Unsupported file type. Supported: PDF",
    ResponseCode.FILE_TOO_LARGE: "File exceeds maximum allowed size",
    ResponseCode.DOCUMENT_NOT_FOUND: "Document not found",
    ResponseCode.CORRUPTED_FILE: "File appears corrupted",
    ResponseCode.UNKNOWN_TOOL: "Unknown tool",
    ResponseCode.NOT_FOUND: "Resource not found",
    ResponseCode.INTERNAL_ERROR: "An internal error occurred",
}

# HTTP status codes for each response code
HTTP_STATUS_MAP: dict[ResponseCode, int] = {
    ResponseCode.SUCCESS: 200,
    ResponseCode.DOCUMENT_EXTRACTED: 201,
    ResponseCode.VALIDATION_ERROR: 422,
    ResponseCode.UNSUPPORTED_FILE_TYPE: 400,
    ResponseCode.FILE_TOO_LARGE: 413,
    ResponseCode.DOCUMENT_NOT_FOUND: 404,
    ResponseCode.CORRUPTED_FILE: 400,
    ResponseCode.UNKNOWN_TOOL: 404,
    ResponseCode.NOT_FOUND: 404,
    ResponseCode.INTERNAL_ERROR: 500,
}


def get_message(code: ResponseCode) -> str:
    """Get the message for a response code."""
    return RESPONSE_MESSAGES.get(code, "Unknown error")


def get_http_status(code: ResponseCode) -> int:
    """Get HTTP status code for a response code."""
    return HTTP_STATUS_MAP.get(code, 500)


def success_dict(
    code: ResponseCode,
    data: Any = None,
    custom_message: str | None = None,
    request_id: str | None = None,
) -> dict[str, Any]:
    """Build a standardized success response dictionary."""
    return {
        "code": code.value,
        "success": True,
        "message": custom_message or get_message(code),
        "timestamp": datetime.now(UTC).isoformat(),
        "request_id": request_id,
        "data": data,
    }


def error_dict(
    code: ResponseCode,
    custom_message: str | None = None,
    error_details: dict[str, Any] | None = None,
    request_id: str | None = None,
) -> dict[str, Any]:
    """Build a standardized error response dictionary."""
    return {
        "code": code.value,
        "success": False,
        "message": custom_message or get_message(code),
        "timestamp": datetime.now(UTC).isoformat(),
        "request_id": request_id,
        "error_details": error_details,
    }


# --- JSONResponse helpers ---


def success_response(
    code: ResponseCode,
    data: Any = None,
    request_id: str | None = None,
) -> JSONResponse:
    """Create a JSONResponse with success format."""
    return JSONResponse(
        content=success_dict(code, data, request_id=request_id),
        status_code=get_http_status(code),
    )


def error_response(
    code: ResponseCode,
    custom_message: str | None = None,
    request_id: str | None = None,
    error_details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Create a JSONResponse with error format."""
    return JSONResponse(
        content=error_dict(code, custom_message, error_details, request_id),
        status_code=get_http_status(code),
    )
