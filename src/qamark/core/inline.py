"""Inline formatting: bold, links, and inline code in a single left-to-right pass"""

import re

from qamark.core.emoji import segment_emoji
from qamark.core.models import InlineSpan, SpanKind


# Alternatives are tried in this order at each position, so a bold run that
# wraps a link ('**[x](http://y)**') is one bold span with literal inner text.
INLINE_RE = re.compile(
    r"(\*\*([^*]+)\*\*)"            # 1: bold, 2: inner text
    r"|(\[([^\]]+)\]\(([^)]+)\))"   # 3: link, 4: label, 5: url
    r"|(`([^`]+)`)"                 # 6: code, 7: content
)
LINE_BREAK_RE = re.compile(r"\\n|\n")


def _match_span(m: re.Match) -> InlineSpan:
    """Convert one INLINE_RE match into its typed span."""
    if m.group(1):
        return InlineSpan(kind=SpanKind.bold, raw=m.group(0), text=m.group(2),
                          children=segment_emoji(m.group(2)))
    if m.group(3):
        return InlineSpan(kind=SpanKind.link, raw=m.group(0), text=m.group(4),
                          url=m.group(5), children=segment_emoji(m.group(4)))
    # Code content is kept literal: no emoji segmentation.
    return InlineSpan(kind=SpanKind.code, raw=m.group(0), text=m.group(7))


def format_inline(text: str) -> list[InlineSpan]:
    """Scan text into an ordered span list whose raw values reconstruct text exactly."""
    spans: list[InlineSpan] = []
    last = 0
    for m in INLINE_RE.finditer(text):
        if m.start() > last:
            spans.extend(segment_emoji(text[last:m.start()]))
        spans.append(_match_span(m))
        last = m.end()
    if last < len(text):
        spans.extend(segment_emoji(text[last:]))
    return spans


def format_cell(text: str) -> list[list[InlineSpan]]:
    """Format a table cell; literal '\\n' sequences and newlines start new lines."""
    return [format_inline(line) for line in LINE_BREAK_RE.split(text)]
