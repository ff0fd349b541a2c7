"""Reading-order reconstruction of page text from positioned fragments.

Lines are built with first-fit grouping on the vertical position, in the
order the parser emitted fragments:
1. A fragment joins the first line whose anchor ``y`` is within tolerance
2. Otherwise it opens a new line anchored at its own ``y``
3. Lines are read top to bottom (descending ``y``)
4. Fragments within a line are read left to right, emission order breaking ties

First-fit is order dependent, so emission order is taken from the explicit
``sequence_index`` rather than from the container order.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from services.text import collapse_whitespace
from services.types import TextFragment

logger = logging.getLogger(__name__)

# In PDF user-space units
LINE_TOLERANCE = 2.0


@dataclass
class _Line:
    y: float
    fragments: list[TextFragment] = field(default_factory=list)


def group_lines(
    fragments: Iterable[TextFragment],
    line_tolerance: float = LINE_TOLERANCE,
) -> list[list[TextFragment]]:
    """Group fragments into reading-order lines.

    Args:
        fragments: Fragments of a single page, in any order.
        line_tolerance: Max vertical distance from a line's anchor.

    Returns:
        Lines from top to bottom, each sorted left to right. Fragments whose
        text is only whitespace are dropped.
    """
    ordered = sorted(fragments, key=lambda f: f.sequence_index)

    lines: list[_Line] = []
    for fragment in ordered:
        if not collapse_whitespace(fragment.text):
            continue
        line = next(
            (candidate for candidate in lines if abs(candidate.y - fragment.y) <= line_tolerance),
            None,
        )
        if line is None:
            line = _Line(y=fragment.y)
            lines.append(line)
        line.fragments.append(fragment)

    lines.sort(key=lambda candidate: candidate.y, reverse=True)
    return [
        sorted(line.fragments, key=lambda f: (f.x, f.sequence_index))
        for line in lines
    ]


def reconstruct_page_text(
    fragments: Iterable[TextFragment],
    line_tolerance: float = LINE_TOLERANCE,
) -> str:
    """Rebuild the plain text of one page.

    Fragments on a line are joined with a single space and lines with a
    newline. A page without usable fragments gives an empty string.
    """
    parts: list[str] = []
    for line in group_lines(fragments, line_tolerance):
        line_text = " ".join(collapse_whitespace(f.text) for f in line).strip()
        if line_text:
            parts.append(line_text)

    text = "\n".join(parts).strip()
    logger.debug("Reconstructed page: %d lines, %d chars", len(parts), len(text))
    return text
