"""Block splitting and classification: heading, YouTube, image, table, paragraph"""

import logging
import re
from typing import Callable, Optional

from qamark.core.inline import format_cell, format_inline
from qamark.core.models import Block, BlockKind, TableCell, TableData
from qamark.core.youtube import build_embed_url, match_youtube, trim_url


logger = logging.getLogger(__name__)

HEADING_RE = re.compile(r"^(#+)\s+(.+)", re.DOTALL)
IMAGE_RE = re.compile(r"^https?://\S*\.(?:jpg|jpeg|png|gif|webp|svg)(?:\?\S*)?$", re.IGNORECASE)
SEPARATOR_RE = re.compile(r"^[\s|:-]+$")
MAX_HEADING_LEVEL = 6


def normalize_newlines(text: str) -> str:
    """Treat CRLF and literal '\\n' escape sequences as real line breaks."""
    return text.replace("\r\n", "\n").replace("\\n", "\n")


def split_blocks(text: str) -> list[str]:
    """Split text on blank lines into trimmed, non-empty blocks."""
    return [b.strip() for b in normalize_newlines(text).split("\n\n") if b.strip()]


def match_heading(block: str) -> Optional[Block]:
    """Leading '#' run plus whitespace; levels above 6 are clamped to 6."""
    m = HEADING_RE.match(block)
    if not m:
        return None
    text = m.group(2)
    return Block(
        kind=BlockKind.heading,
        raw=block,
        level=min(len(m.group(1)), MAX_HEADING_LEVEL),
        spans=format_inline(text),
    )


def match_youtube_block(block: str) -> Optional[Block]:
    m = match_youtube(block)
    if not m:
        return None
    url = trim_url(m.group(0))
    embed_url = build_embed_url(url)
    if embed_url is None:
        logger.debug("No embeddable video id in %r; rendering as link", url)
    return Block(kind=BlockKind.youtube, raw=block, video_id=m.group(1), url=url, embed_url=embed_url)


def match_image(block: str) -> Optional[Block]:
    if not IMAGE_RE.match(block):
        return None
    return Block(kind=BlockKind.image, raw=block, url=block)


def _split_row(line: str) -> list[str]:
    """Split a table row on '|', trimming cells and dropping empty edge cells."""
    cells = [c.strip() for c in line.split("|")]
    while cells and not cells[0]:
        cells.pop(0)
    while cells and not cells[-1]:
        cells.pop()
    return cells


def _cell(text: str) -> TableCell:
    return TableCell(text=text, lines=format_cell(text))


def parse_table(block: str) -> Optional[TableData]:
    """Parse a pipe table; None unless there are 3+ lines and a valid separator row.

    The separator (line 2) may hold only '|', '-', ':' and whitespace, and must
    contain both '|' and '-'. Rows that split to no cells are dropped.
    """
    lines = block.strip().split("\n")
    if len(lines) < 3:
        return None
    separator = lines[1]
    if "|" not in separator or "-" not in separator or not SEPARATOR_RE.match(separator):
        logger.debug("Rejected table candidate with separator %r", separator)
        return None

    headers = [_cell(c) for c in _split_row(lines[0])]
    rows = [[_cell(c) for c in row] for row in map(_split_row, lines[2:]) if row]
    return TableData(headers=headers, rows=rows)


def match_table(block: str) -> Optional[Block]:
    table = parse_table(block)
    if table is None:
        return None
    return Block(kind=BlockKind.table, raw=block, table=table)


def paragraph(block: str) -> Block:
    return Block(kind=BlockKind.paragraph, raw=block, spans=format_inline(block))


MATCHERS: list[Callable[[str], Optional[Block]]] = [
    match_heading,
    match_youtube_block,
    match_image,
    match_table,
]


def classify_block(block: str) -> Block:
    """Return the first matcher result in priority order, falling back to a paragraph."""
    for matcher in MATCHERS:
        result = matcher(block)
        if result is not None:
            return result
    return paragraph(block)
