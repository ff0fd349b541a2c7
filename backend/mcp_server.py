"""ClauseFinder stdio tool server.

Exposes the same five tools as ``POST /api/tools/call`` through FastMCP so
an agent can ingest a PDF and search it over stdio. All tools share one
in-memory document store for the lifetime of the process.

Run with ``python mcp_server.py`` or the ``clausefinder-mcp`` script.
"""

import logging
import sys
from typing import Any

from fastmcp import FastMCP
from fastmcp.tools import Tool
from fastmcp.tools.tool_transform import ArgTransform

from config import Settings, get_settings, setup_logging
from services.store import DocumentStore, InMemoryDocumentStore
from services.tools import TOOL_SPECS, ClauseTools

logger = logging.getLogger(__name__)


def create_mcp_server(
    store: DocumentStore | None = None,
    settings: Settings | None = None,
) -> FastMCP:
    """Build a FastMCP server whose tools run against ``store``."""
    tools = ClauseTools(store=store or InMemoryDocumentStore(), settings=settings)
    mcp = FastMCP("clausefinder")

    @mcp.tool(description=TOOL_SPECS["extract_document_text"].description)
    async def extract_document_text(
        filename: str, mime_type: str, pdf_base64: str
    ) -> dict[str, Any]:
        return await tools.call(
            "extract_document_text",
            {"filename": filename, "mime_type": mime_type, "pdf_base64": pdf_base64},
        )

    @mcp.tool(description=TOOL_SPECS["find_relevant_clauses"].description)
    async def find_relevant_clauses(
        doc_id: str,
        query: str,
        max_results: float | None = None,
        excerpt_max_chars: float | None = None,
    ) -> dict[str, Any]:
        return await tools.call(
            "find_relevant_clauses",
            {
                "doc_id": doc_id,
                "query": query,
                "max_results": max_results,
                "excerpt_max_chars": excerpt_max_chars,
            },
        )

    @mcp.tool(description=TOOL_SPECS["extract_key_fields"].description)
    async def extract_key_fields(
        doc_id: str, clauses: list[Any] | None = None
    ) -> dict[str, Any]:
        return await tools.call("extract_key_fields", {"doc_id": doc_id, "clauses": clauses})

    @mcp.tool(description=TOOL_SPECS["compute_deadlines"].description)
    async def compute_deadlines(
        doc_id: str,
        clauses: list[Any] | None = None,
        reference_date: str | None = None,
    ) -> dict[str, Any]:
        return await tools.call(
            "compute_deadlines",
            {"doc_id": doc_id, "clauses": clauses, "reference_date": reference_date},
        )

    async def generate_notice_email(
        doc_id: str,
        to: str,
        sender: str,
        purpose: str,
        clauses: list[Any] | None = None,
        subject: str | None = None,
    ) -> dict[str, Any]:
        return await tools.call(
            "generate_notice_email",
            {
                "doc_id": doc_id,
                "clauses": clauses,
                "to": to,
                "from": sender,
                "purpose": purpose,
                "subject": subject,
            },
        )

    # "from" is a keyword, so the argument is renamed on the wire
    mcp.add_tool(
        Tool.from_tool(
            Tool.from_function(
                generate_notice_email,
                description=TOOL_SPECS["generate_notice_email"].description,
            ),
            transform_args={"sender": ArgTransform(name="from")},
        )
    )

    return mcp


def main() -> None:
    """Run the tool server over stdio."""
    settings = get_settings()
    setup_logging(settings.log_level, stream=sys.stderr)
    logger.info("Starting ClauseFinder tool server (stdio)")
    create_mcp_server(settings=settings).run()


if __name__ == "__main__":
    main()
