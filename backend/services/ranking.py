"""Page ranking pipeline: score every page, order, and cap the results."""

import logging
import math
from collections.abc import Sequence

from services.scoring import DEFAULT_POLICY, ScoringPolicy, prepare_query, score_prepared
from services.types import Citation, ScoredExcerpt

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 5
MAX_RESULTS_RANGE = (1, 10)

DEFAULT_EXCERPT_MAX_CHARS = 800
EXCERPT_MAX_CHARS_RANGE = (120, 2000)


def clamp_int(value: float, lower: int, upper: int) -> int:
    """Truncate towards zero and clamp into ``[lower, upper]``."""
    return max(lower, min(upper, int(value)))


def resolve_max_results(value: float | None, default: int = DEFAULT_MAX_RESULTS) -> int:
    """Effective result cap for a caller-supplied value."""
    if value is None or not math.isfinite(value):
        value = default
    return clamp_int(value, *MAX_RESULTS_RANGE)


def resolve_excerpt_max_chars(
    value: float | None, default: int = DEFAULT_EXCERPT_MAX_CHARS
) -> int:
    """Effective excerpt length for a caller-supplied value."""
    if value is None or not math.isfinite(value):
        value = default
    return clamp_int(value, *EXCERPT_MAX_CHARS_RANGE)


def rank_pages(
    pages: Sequence[str],
    query: str,
    max_results: float | None = None,
    excerpt_max_chars: float | None = None,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> list[ScoredExcerpt]:
    """Rank the pages of a document against a query.

    Args:
        pages: Page texts, page ``n`` at index ``n - 1``.
        query: Free-text query.
        max_results: Result cap, clamped to 1..10 (default 5).
        excerpt_max_chars: Excerpt length, clamped to 120..2000 (default 800).
        policy: Scoring constants.

    Returns:
        Matches by descending score, lower page first on ties. Pages that do
        not match are left out.
    """
    limit = resolve_max_results(max_results)
    excerpt_chars = resolve_excerpt_max_chars(excerpt_max_chars)
    prepared = prepare_query(query, policy)

    candidates: list[ScoredExcerpt] = []
    for page_number, page_text in enumerate(pages, start=1):
        candidate = score_prepared(
            page_text or "",
            prepared,
            page=page_number,
            excerpt_max_chars=excerpt_chars,
            policy=policy,
        )
        if candidate is not None:
            candidates.append(candidate)

    candidates.sort(key=lambda c: (-c.score, c.page))

    logger.debug(
        "Ranked %d pages: %d matched, returning up to %d (tokens=%s)",
        len(pages),
        len(candidates),
        limit,
        list(prepared.tokens),
    )
    return candidates[:limit]


def build_citations(excerpts: Sequence[ScoredExcerpt]) -> list[Citation]:
    """Project scored excerpts onto caller-facing citations."""
    return [Citation(page=e.page, exact_text=e.exact_text) for e in excerpts]
