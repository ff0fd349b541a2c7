"""Pattern-based extraction of key fields and deadlines from quoted clauses.

Nothing here interprets legal meaning. Fields are the first literal match of
simple patterns in the clause text the caller already quoted, and a deadline
is only computed when both an explicit base date and an explicit duration
("30 days") are present.
"""

import re
from collections.abc import Iterable
from datetime import date, timedelta
from typing import Any

from services.types import KeyFields

ISO_DATE_RE = re.compile(r"\b\d{4}-\d{2}-\d{2}\b")
US_DATE_RE = re.compile(r"\b\d{1,2}/\d{1,2}/\d{4}\b")
MONTH_DATE_RE = re.compile(
    r"\b(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|Jun(?:e)?|Jul(?:y)?"
    r"|Aug(?:ust)?|Sep(?:tember)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)"
    r"\s+\d{1,2},\s+\d{4}\b",
    re.IGNORECASE,
)
STREET_LINE_RE = re.compile(
    r"\b\d{1,6}\s+[^,]{2,40}\s+"
    r"(?:St|Street|Ave|Avenue|Rd|Road|Blvd|Boulevard|Ln|Lane|Dr|Drive)\b",
    re.IGNORECASE,
)
EMAIL_RE = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.IGNORECASE)
VALID_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
DURATION_DAYS_RE = re.compile(r"\b(\d{1,4})\s+days\b", re.IGNORECASE)

EFFECTIVE_DATE_RE = re.compile(r"\bEffective Date\b.{0,200}", re.IGNORECASE | re.DOTALL)
TERMINATION_DATE_RE = re.compile(r"\bTermination Date\b.{0,200}", re.IGNORECASE | re.DOTALL)

INSUFFICIENT_TEXT_REASON = (
    "Need an explicit base date (reference_date or ISO date in text) "
    "and an explicit duration like '30 days'."
)


def combine_clause_texts(texts: Iterable[str]) -> str:
    """Join quoted clause texts with blank lines."""
    return "\n\n".join(texts)


def is_valid_email(value: str) -> bool:
    return bool(VALID_EMAIL_RE.match(value))


def parse_iso_date(value: str) -> date | None:
    """Parse a strict ``YYYY-MM-DD`` date, None when malformed or impossible."""
    if not re.fullmatch(r"\d{4}-\d{2}-\d{2}", value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def _first_match(pattern: re.Pattern[str], text: str) -> str | None:
    match = pattern.search(text)
    return match.group(0) if match else None


def extract_date_like(text: str) -> str | None:
    """First ISO, US (mm/dd/yyyy) or month-name date in the text."""
    for pattern in (ISO_DATE_RE, US_DATE_RE, MONTH_DATE_RE):
        found = _first_match(pattern, text)
        if found:
            return found
    return None


def extract_address_line(text: str) -> str | None:
    """First line that looks like a street address."""
    for line in text.splitlines():
        line = line.strip()
        if line and STREET_LINE_RE.search(line):
            return line
    return None


def extract_email(text: str) -> str | None:
    found = _first_match(EMAIL_RE, text)
    if found and is_valid_email(found):
        return found
    return None


def extract_key_fields(text: str) -> KeyFields:
    """Extract key fields from combined clause text.

    Dates are searched in the 200 characters after an "Effective Date" or
    "Termination Date" label when one exists, otherwise in the whole text.
    """
    effective_scope = _first_match(EFFECTIVE_DATE_RE, text) or text
    termination_scope = _first_match(TERMINATION_DATE_RE, text) or text

    return KeyFields(
        effective_date=extract_date_like(effective_scope) or "",
        termination_date=extract_date_like(termination_scope) or "",
        notice_address_line=extract_address_line(text) or "",
        email_address=extract_email(text) or "",
    )


def extract_duration_days(text: str) -> int | None:
    """First positive "<n> days" duration in the text."""
    match = DURATION_DAYS_RE.search(text)
    if not match:
        return None
    days = int(match.group(1))
    return days if days > 0 else None


def compute_deadline(text: str, reference_date: str | None = None) -> dict[str, Any]:
    """Compute a deadline from explicit dates and durations only.

    Args:
        text: Combined clause text.
        reference_date: Optional ``YYYY-MM-DD`` base date, preferred over any
            ISO date found in the text.

    Returns:
        ``{"status": "computed", ...}`` with base date, its source, duration
        and deadline, or ``{"status": "insufficient_text", "reason": ...}``.
    """
    duration_days = extract_duration_days(text)

    base_date: date | None = None
    base_date_source = ""

    if reference_date and reference_date.strip():
        base_date = parse_iso_date(reference_date.strip())
        if base_date:
            base_date_source = "reference_date"

    if base_date is None:
        found = _first_match(ISO_DATE_RE, text)
        if found:
            base_date = parse_iso_date(found)
            if base_date:
                base_date_source = "clause_text"

    if base_date is None or not duration_days:
        return {"status": "insufficient_text", "reason": INSUFFICIENT_TEXT_REASON}

    deadline = base_date + timedelta(days=duration_days)
    return {
        "status": "computed",
        "base_date": base_date.isoformat(),
        "base_date_source": base_date_source,
        "duration_days": duration_days,
        "deadline_date": deadline.isoformat(),
    }
