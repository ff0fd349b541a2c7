"""Tool operations exposed to agents over HTTP and stdio.

Each tool validates its arguments with a Pydantic model, runs a
deterministic operation and returns a JSON-ready dict that always carries
the tool name, the disclaimer and the document id. Only
``find_relevant_clauses`` reads the document store; the clause-based tools
work on the excerpts the caller passes back in.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config import Settings, get_settings
from services.document import DocumentParser
from services.fields import (
    combine_clause_texts,
    compute_deadline,
    extract_key_fields,
    is_valid_email,
)
from services.notice import DISCLAIMER, render_notice_email
from services.ranking import build_citations, rank_pages
from services.store import DocumentStore
from services.types import StoredDocument

logger = logging.getLogger(__name__)


class ToolInputError(ValueError):
    """Raised when tool arguments are well-formed but unacceptable."""

    pass


class UnknownToolError(LookupError):
    """Raised when a tool name is not registered."""

    pass


# --- Argument Schemas ---


class ClauseRef(BaseModel):
    """A clause previously quoted by find_relevant_clauses."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    page: int | None = Field(None, description="1-based page number")
    exact_text: str = Field("", alias="exactText", description="Verbatim excerpt")

    @field_validator("page", mode="before")
    @classmethod
    def coerce_page(cls, v: Any) -> int | None:
        if isinstance(v, bool) or not isinstance(v, int | float):
            return None
        return int(v) if float(v).is_integer() else None

    @field_validator("exact_text", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return v if isinstance(v, str) else ""


class ToolArgs(BaseModel):
    """Base for tool arguments: unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class ExtractDocumentTextArgs(ToolArgs):
    filename: str = Field(..., description="Original file name")
    mime_type: str = Field(..., description="Must be application/pdf")
    pdf_base64: str = Field(..., description="Base64-encoded PDF bytes")

    @field_validator("filename", "mime_type", "pdf_base64")
    @classmethod
    def validate_not_blank(cls, v: str, info) -> str:
        if not v.strip():
            raise ValueError(f"{info.field_name} must be a non-empty string")
        return v


class FindRelevantClausesArgs(ToolArgs):
    doc_id: str = Field(..., description="Document id from extract_document_text")
    query: str = Field(..., description="Free-text query")
    max_results: float | None = Field(None, description="Result cap, clamped to 1..10")
    excerpt_max_chars: float | None = Field(
        None, description="Excerpt length, clamped to 120..2000"
    )

    @field_validator("doc_id", "query")
    @classmethod
    def validate_not_blank(cls, v: str, info) -> str:
        if not v.strip():
            raise ValueError(f"{info.field_name} must be a non-empty string")
        return v


class ClauseArgs(ToolArgs):
    """Arguments of the tools that work on clauses quoted earlier.

    A missing or non-list ``clauses`` counts as no clauses, and entries that
    are not objects count as empty clauses.
    """

    doc_id: str
    clauses: list[ClauseRef] = Field(default_factory=list)

    @field_validator("clauses", mode="before")
    @classmethod
    def coerce_clauses(cls, v: Any) -> list[Any]:
        if not isinstance(v, list):
            return []
        return [c if isinstance(c, dict | ClauseRef) else {} for c in v]

    @field_validator("doc_id")
    @classmethod
    def validate_not_blank(cls, v: str, info) -> str:
        if not v.strip():
            raise ValueError(f"{info.field_name} must be a non-empty string")
        return v


class ExtractKeyFieldsArgs(ClauseArgs):
    pass


class ComputeDeadlinesArgs(ClauseArgs):
    reference_date: str | None = Field(None, description="Base date as YYYY-MM-DD")


class GenerateNoticeEmailArgs(ClauseArgs):
    to: str
    sender: str = Field(..., alias="from")
    purpose: str
    subject: str | None = None

    @field_validator("doc_id", "to", "sender", "purpose")
    @classmethod
    def validate_not_blank(cls, v: str, info) -> str:
        if not v.strip():
            name = "from" if info.field_name == "sender" else info.field_name
            raise ValueError(f"{name} must be a non-empty string")
        return v


@dataclass(frozen=True)
class ToolSpec:
    """Registration entry for a tool."""

    name: str
    description: str
    args_model: type[ToolArgs]


TOOL_SPECS: dict[str, ToolSpec] = {
    spec.name: spec
    for spec in (
        ToolSpec(
            "extract_document_text",
            "Extract page-numbered text from a PDF and store it in memory.",
            ExtractDocumentTextArgs,
        ),
        ToolSpec(
            "find_relevant_clauses",
            "Find relevant clauses using deterministic keyword + phrase scoring.",
            FindRelevantClausesArgs,
        ),
        ToolSpec(
            "extract_key_fields",
            "Extract key fields from quoted clauses using regex-only extraction.",
            ExtractKeyFieldsArgs,
        ),
        ToolSpec(
            "compute_deadlines",
            "Compute deadlines only when an explicit base date and explicit "
            "duration (e.g. '30 days') exist.",
            ComputeDeadlinesArgs,
        ),
        ToolSpec(
            "generate_notice_email",
            "Generate a deterministic notice email template with quoted clauses "
            "and page numbers.",
            GenerateNoticeEmailArgs,
        ),
    )
}


def describe_tools() -> list[dict[str, Any]]:
    """Tool descriptors with JSON input schemas."""
    return [
        {
            "name": spec.name,
            "description": spec.description,
            "input_schema": spec.args_model.model_json_schema(by_alias=True),
        }
        for spec in TOOL_SPECS.values()
    ]


def _clause_texts(clauses: list[ClauseRef]) -> str:
    return combine_clause_texts(c.exact_text for c in clauses)


# --- Service ---


class ClauseTools:
    """Runs tool calls against a document store."""

    def __init__(
        self,
        store: DocumentStore,
        parser: DocumentParser | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.store = store
        self.settings = settings or get_settings()
        self.parser = parser or DocumentParser(self.settings)
        self.policy = self.settings.scoring_policy
        self._handlers: dict[str, Callable[[Any], Awaitable[dict[str, Any]]]] = {
            "extract_document_text": self.extract_document_text,
            "find_relevant_clauses": self.find_relevant_clauses,
            "extract_key_fields": self.extract_key_fields,
            "compute_deadlines": self.compute_deadlines,
            "generate_notice_email": self.generate_notice_email,
        }

    async def call(self, name: str, raw_args: dict[str, Any]) -> dict[str, Any]:
        """Validate arguments and dispatch a tool call by name.

        Raises:
            UnknownToolError: If no tool has that name.
            pydantic.ValidationError: If the arguments do not fit the schema.
        """
        spec = TOOL_SPECS.get(name)
        if spec is None:
            raise UnknownToolError(f"Unknown tool: {name}")

        args = spec.args_model.model_validate(raw_args)
        return await self._handlers[name](args)

    async def ingest(self, content: bytes, filename: str) -> StoredDocument:
        """Parse a PDF and store it once every page has been reconstructed."""
        document = await self.parser.parse_pdf(content, filename)
        self.store.put(document)
        return document

    async def extract_document_text(self, args: ExtractDocumentTextArgs) -> dict[str, Any]:
        self.parser.validate_mime_type(args.mime_type)
        content = self.parser.decode_base64(args.pdf_base64)
        document = await self.ingest(content, args.filename)

        return {
            "tool": "extract_document_text",
            "disclaimer": DISCLAIMER,
            "doc_id": document.doc_id,
            "filename": document.filename,
            "page_count": document.page_count,
        }

    async def find_relevant_clauses(self, args: FindRelevantClausesArgs) -> dict[str, Any]:
        document = self.store.get(args.doc_id)

        max_results = args.max_results
        if max_results is None:
            max_results = self.settings.default_max_results
        excerpt_max_chars = args.excerpt_max_chars
        if excerpt_max_chars is None:
            excerpt_max_chars = self.settings.default_excerpt_max_chars

        excerpts = rank_pages(
            document.pages,
            args.query,
            max_results=max_results,
            excerpt_max_chars=excerpt_max_chars,
            policy=self.policy,
        )
        logger.info(
            "Clause search on %s: %d matches for %r",
            document.doc_id,
            len(excerpts),
            args.query[:100],
        )

        return {
            "tool": "find_relevant_clauses",
            "disclaimer": DISCLAIMER,
            "doc_id": args.doc_id,
            "query": args.query,
            "clauses": [
                {"page": e.page, "exactText": e.exact_text, "matchReason": e.match_reason}
                for e in excerpts
            ],
            "citations": [
                {"page": c.page, "exactText": c.exact_text}
                for c in build_citations(excerpts)
            ],
        }

    async def extract_key_fields(self, args: ExtractKeyFieldsArgs) -> dict[str, Any]:
        fields = extract_key_fields(_clause_texts(args.clauses))
        return {
            "tool": "extract_key_fields",
            "disclaimer": DISCLAIMER,
            "doc_id": args.doc_id,
            "key_fields": {
                "effective_date": fields.effective_date,
                "termination_date": fields.termination_date,
                "notice_address_line": fields.notice_address_line,
                "email_address": fields.email_address,
            },
        }

    async def compute_deadlines(self, args: ComputeDeadlinesArgs) -> dict[str, Any]:
        return {
            "tool": "compute_deadlines",
            "disclaimer": DISCLAIMER,
            "doc_id": args.doc_id,
            "deadlines": compute_deadline(_clause_texts(args.clauses), args.reference_date),
        }

    async def generate_notice_email(self, args: GenerateNoticeEmailArgs) -> dict[str, Any]:
        if not is_valid_email(args.to.strip()):
            raise ToolInputError("to must be a valid email address")
        if not is_valid_email(args.sender.strip()):
            raise ToolInputError("from must be a valid email address")

        email = render_notice_email(
            to=args.to,
            sender=args.sender,
            purpose=args.purpose,
            clauses=[(c.page, c.exact_text) for c in args.clauses],
            subject=args.subject,
        )
        return {
            "tool": "generate_notice_email",
            "disclaimer": DISCLAIMER,
            "doc_id": args.doc_id,
            "notice_email": {
                "to": email.to,
                "from": email.sender,
                "subject": email.subject,
                "body": email.body,
            },
        }
