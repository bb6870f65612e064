"""Emoji segmentation for plain-text runs"""

import re

from qamark.core.models import InlineSpan, SpanKind


EMOJI_RE = re.compile(
    "["
    "\U0001F600-\U0001F64F"     # emoticons
    "\U0001F300-\U0001F5FF"     # misc symbols and pictographs
    "\U0001F680-\U0001F6FF"     # transport and map
    "\U0001F1E0-\U0001F1FF"     # regional indicators
    "\u2600-\u26FF"             # misc symbols
    "\u2700-\u27BF"             # dingbats
    "]"
)


def _text(value: str) -> InlineSpan:
    return InlineSpan(kind=SpanKind.text, raw=value, text=value)


def segment_emoji(text: str) -> list[InlineSpan]:
    """Split text into alternating text and single-emoji spans.

    The result always starts and ends with a (possibly empty) text span, so
    two adjacent emoji are separated by an empty text span and never merge.
    """
    parts = EMOJI_RE.split(text)
    emojis = EMOJI_RE.findall(text)
    spans = [_text(parts[0])]
    for emoji, part in zip(emojis, parts[1:]):
        spans.append(InlineSpan(kind=SpanKind.emoji, raw=emoji, text=emoji))
        spans.append(_text(part))
    return spans


def has_emoji(text: str) -> bool:
    return EMOJI_RE.search(text) is not None
