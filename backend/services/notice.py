"""Plain-text notice e-mail template with quoted clauses."""

import re
from collections.abc import Iterable

from services.types import NoticeEmail

DISCLAIMER = (
    "Not legal advice. I'm not a lawyer. I'm only quoting the document text and "
    "doing simple, deterministic extraction without interpreting legal meaning."
)

NO_CLAUSES_PLACEHOLDER = "(No cited clauses provided.)"


def normalize_lines(text: str) -> str:
    """Unify line endings and squeeze blank-line runs to one blank line."""
    text = text.replace("\r\n", "\n")
    return re.sub(r"\n{3,}", "\n\n", text).strip()


def quote_clauses(clauses: Iterable[tuple[int | None, str]]) -> str:
    """Render ``(page, text)`` pairs as quoted blocks, skipping incomplete ones."""
    blocks = []
    for page, text in clauses:
        if not page or not text.strip():
            continue
        blocks.append(f'Page {page}:\n"""\n{normalize_lines(text)}\n"""')
    return "\n\n".join(blocks)


def render_notice_email(
    to: str,
    sender: str,
    purpose: str,
    clauses: Iterable[tuple[int | None, str]] = (),
    subject: str | None = None,
) -> NoticeEmail:
    """Render a notice e-mail quoting the given clauses verbatim."""
    to = to.strip()
    sender = sender.strip()
    subject = subject.strip() if subject and subject.strip() else f"Notice regarding: {purpose.strip()}"
    quoted = quote_clauses(clauses) or NO_CLAUSES_PLACEHOLDER

    body = (
        f"To: {to}\n"
        f"From: {sender}\n"
        f"Subject: {subject}\n\n"
        "Hello,\n\n"
        f"This email provides notice regarding: {normalize_lines(purpose)}.\n\n"
        "Relevant quoted clauses:\n\n"
        f"{quoted}\n\n"
        "Sincerely,\n"
        f"{sender}\n\n"
        "---\n"
        f"{DISCLAIMER}"
    )
    return NoticeEmail(to=to, sender=sender, subject=subject, body=body)
