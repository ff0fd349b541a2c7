"""Deterministic keyword and phrase relevance scoring for page texts.

A page earns points from two independent sources:
- Phrase: the whole normalized query appears contiguously in the page
- Tokens: each significant query token appears at least once, weighted by
  its occurrence count up to a cap

The excerpt returned with a match is always quoted from the original page
text, never from its normalized form.
"""

from dataclasses import dataclass

from services.text import (
    STOPWORDS,
    count_occurrences,
    normalize,
    normalize_with_offsets,
    tokenize_query,
)
from services.types import ScoredExcerpt

PHRASE_REASON = "contains full query phrase"


@dataclass(frozen=True)
class ScoringPolicy:
    """Policy constants for relevance scoring and excerpt placement."""

    phrase_bonus: int = 50
    # Single-word queries are scored by the token rule only
    phrase_min_words: int = 2
    token_weight: int = 5
    token_occurrence_cap: int = 10
    excerpt_lead_divisor: int = 3
    stopwords: frozenset[str] = STOPWORDS


DEFAULT_POLICY = ScoringPolicy()


@dataclass(frozen=True)
class PreparedQuery:
    """A query normalized and tokenized once for scoring many pages."""

    text: str
    normalized: str
    tokens: tuple[str, ...]


def prepare_query(query: str, policy: ScoringPolicy = DEFAULT_POLICY) -> PreparedQuery:
    """Normalize and tokenize a query."""
    return PreparedQuery(
        text=query,
        normalized=normalize(query),
        tokens=tokenize_query(query, policy.stopwords),
    )


def select_excerpt(
    page_text: str,
    normalized_query: str,
    max_chars: int,
    lead_divisor: int = DEFAULT_POLICY.excerpt_lead_divisor,
) -> str:
    """Pick a bounded window of the original page text around the best match.

    When the normalized query occurs in the normalized page, the window starts
    ``max_chars // lead_divisor`` characters before the matching original
    position. Otherwise the head of the page is returned.

    Args:
        page_text: Original reconstructed page text.
        normalized_query: Query already passed through ``normalize``.
        max_chars: Window length.
        lead_divisor: Fraction of the window placed before the match.

    Returns:
        Trimmed excerpt, a contiguous slice of ``page_text``.
    """
    if not page_text:
        return ""

    match_at = -1
    if normalized_query:
        normalized_page, offsets = normalize_with_offsets(page_text)
        found = normalized_page.find(normalized_query)
        if found != -1:
            match_at = offsets[found]

    if match_at == -1:
        return page_text[:max_chars].strip()

    start = max(0, match_at - max_chars // lead_divisor)
    end = min(len(page_text), start + max_chars)
    return page_text[start:end].strip()


def score_prepared(
    page_text: str,
    query: PreparedQuery,
    page: int = 1,
    excerpt_max_chars: int = 800,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> ScoredExcerpt | None:
    """Score one page against an already prepared query.

    Returns:
        The scored excerpt, or None when the page scores nothing or has no
        quotable text.
    """
    normalized_page = normalize(page_text)

    score = 0
    reasons: list[str] = []

    if (
        query.normalized
        and len(query.normalized.split(" ")) >= policy.phrase_min_words
        and query.normalized in normalized_page
    ):
        score += policy.phrase_bonus
        reasons.append(PHRASE_REASON)

    for token in query.tokens:
        count = count_occurrences(normalized_page, token)
        if count > 0:
            score += policy.token_weight * min(count, policy.token_occurrence_cap)
            reasons.append(f'contains token "{token}" ({count}x)')

    if score <= 0:
        return None

    exact_text = select_excerpt(
        page_text, query.normalized, excerpt_max_chars, policy.excerpt_lead_divisor
    )
    if not exact_text:
        return None

    return ScoredExcerpt(
        page=page,
        exact_text=exact_text,
        match_reason="; ".join(reasons),
        score=score,
    )


def score_page(
    page_text: str,
    query: str,
    page: int = 1,
    excerpt_max_chars: int = 800,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> ScoredExcerpt | None:
    """Score one page against a free-text query."""
    return score_prepared(
        page_text,
        prepare_query(query, policy),
        page=page,
        excerpt_max_chars=excerpt_max_chars,
        policy=policy,
    )
