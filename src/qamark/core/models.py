"""Intermediate data models: render nodes (blocks, inline spans, tables) and export records"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Direction(str, Enum):
    """Text flow direction applied to a whole render call"""
    ltr = "ltr"
    rtl = "rtl"


class SpanKind(str, Enum):
    text = "text"
    bold = "bold"
    link = "link"
    code = "code"
    emoji = "emoji"


class BlockKind(str, Enum):
    """Block classes in classifier priority order"""
    heading = "heading"
    youtube = "youtube"
    image = "image"
    table = "table"
    paragraph = "paragraph"


class InlineSpan(BaseModel):
    """A typed fragment of a block's text.

    raw holds the exact source characters consumed (delimiters included), so
    joining the raw values of a span list reproduces its source text.
    """
    model_config = ConfigDict(frozen=True)

    kind: SpanKind
    raw: str
    text: str
    url: Optional[str] = None               # links only
    children: list["InlineSpan"] = []       # emoji-segmented label/inner text


class TableCell(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    lines: list[list[InlineSpan]] = []      # one span list per line break


class TableData(BaseModel):
    model_config = ConfigDict(frozen=True)

    headers: list[TableCell]
    rows: list[list[TableCell]]


class Block(BaseModel):
    """A paragraph-level unit of input, separated from its neighbours by a blank line."""
    model_config = ConfigDict(frozen=True)

    kind: BlockKind
    raw: str
    level: Optional[int] = None             # heading level (1-6)
    spans: list[InlineSpan] = []            # headings and paragraphs
    video_id: Optional[str] = None
    url: Optional[str] = None               # matched video URL or image URL
    embed_url: Optional[str] = None         # None -> render url as a plain link
    table: Optional[TableData] = None


class RenderedDoc(BaseModel):
    """Result of one render call; direction applies to every block."""
    model_config = ConfigDict(frozen=True)

    direction: Direction
    language: str
    blocks: list[Block]


def raw_text(spans: list[InlineSpan]) -> str:
    """Concatenate span raw contents in order."""
    return "".join(s.raw for s in spans)


def plain_text(spans: list[InlineSpan]) -> str:
    """Concatenate display text, dropping markup delimiters and link URLs."""
    return "".join(s.text for s in spans)


class ExportQAPair(BaseModel):
    question: str
    answer: str
    version: int = 1
    created_at: Optional[datetime] = None


class ExportDocument(BaseModel):
    """Flattened document record consumed by the export formatters."""
    id: str
    title: str
    status: str
    created_at: Optional[datetime] = None
    submitter_email: Optional[str] = None
    trained: bool = False
    source_links: list[str] = []
    original_content: str = ""
    qa_pairs: list[ExportQAPair] = []
