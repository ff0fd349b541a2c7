"""Text normalization and query tokenization.

Normalized text is only ever used to decide whether something matches.
Anything returned to a caller is sliced from the original text, so the
offset-tracking variant maps normalized positions back to original ones.
"""

import re

_DISALLOWED_RE = re.compile(r"[^a-z0-9\s]+")
_WHITESPACE_RE = re.compile(r"\s+")

STOPWORDS = frozenset(
    {
        "the",
        "a",
        "an",
        "and",
        "or",
        "to",
        "of",
        "in",
        "for",
        "on",
        "at",
        "by",
        "with",
        "from",
        "this",
        "that",
        "these",
        "those",
        "is",
        "are",
        "be",
        "as",
        "it",
    }
)


def normalize(text: str) -> str:
    """Lowercase, turn punctuation runs into spaces, collapse whitespace, trim."""
    lowered = _DISALLOWED_RE.sub(" ", text.lower())
    return _WHITESPACE_RE.sub(" ", lowered).strip()


def normalize_with_offsets(text: str) -> tuple[str, list[int]]:
    """Normalize text and record where each output character came from.

    Returns:
        Tuple of (normalized text, offsets) where ``offsets[i]`` is the index
        in ``text`` of the character that produced normalized character ``i``.
        A collapsed separator points at the first character of its run.
    """
    chars: list[str] = []
    offsets: list[int] = []
    separator_at: int | None = None

    for index, original in enumerate(text):
        # lower() can expand a character, every piece keeps the source index
        for ch in original.lower():
            if ("a" <= ch <= "z") or ("0" <= ch <= "9"):
                if separator_at is not None and chars:
                    chars.append(" ")
                    offsets.append(separator_at)
                separator_at = None
                chars.append(ch)
                offsets.append(index)
            elif separator_at is None:
                separator_at = index

    return "".join(chars), offsets


def collapse_whitespace(text: str) -> str:
    """Collapse tabs, non-breaking spaces and space runs into single spaces."""
    text = re.sub(r"[\t\u00a0]+", " ", text)
    return re.sub(r" {2,}", " ", text).strip()


def tokenize_query(query: str, stopwords: frozenset[str] = STOPWORDS) -> tuple[str, ...]:
    """Split a query into significant tokens.

    Stop-words are dropped and duplicates removed; tokens keep the order of
    their first occurrence so match reasons are reported deterministically.
    An empty or stop-word-only query yields an empty tuple.
    """
    seen: dict[str, None] = {}
    for token in normalize(query).split(" "):
        if token and token not in stopwords:
            seen.setdefault(token, None)
    return tuple(seen)


def count_occurrences(haystack: str, needle: str) -> int:
    """Count non-overlapping occurrences of needle in haystack."""
    if not needle:
        return 0
    return haystack.count(needle)
