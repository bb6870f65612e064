"""Serializable rich-text document model with pure editing commands.

An EditorDoc is an ordered list of blocks, each an ordered list of styled
runs. Every command takes a document and returns a new one; nothing is
mutated in place, so a document can be serialized, replayed, or diffed
between any two commands.
"""

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict

from qamark.core.blocks import split_blocks
from qamark.core.direction import detect_direction
from qamark.core.models import Direction


STYLES = ("bold", "italic", "underline")
STAR_RE = re.compile(r"(\*+)")


class Alignment(str, Enum):
    left = "left"
    center = "center"
    right = "right"


class Run(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    bold: bool = False
    italic: bool = False
    underline: bool = False

    def style(self) -> tuple[bool, ...]:
        return tuple(getattr(self, s) for s in STYLES)


class EditorBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    runs: list[Run] = []
    alignment: Alignment = Alignment.left

    @property
    def text(self) -> str:
        return "".join(r.text for r in self.runs)


class EditorDoc(BaseModel):
    model_config = ConfigDict(frozen=True)

    blocks: list[EditorBlock] = [EditorBlock()]
    direction: Direction = Direction.ltr


class Selection(BaseModel):
    """Half-open character range [start, end) within one block."""
    model_config = ConfigDict(frozen=True)

    block: int
    start: int
    end: int


# --- run helpers ---

def _merge(runs: list[Run]) -> list[Run]:
    """Drop empty runs and join neighbours that share a style."""
    merged: list[Run] = []
    for run in runs:
        if not run.text:
            continue
        if merged and merged[-1].style() == run.style():
            merged[-1] = merged[-1].model_copy(update={"text": merged[-1].text + run.text})
        else:
            merged.append(run)
    return merged


def _split(runs: list[Run], start: int, end: int) -> tuple[list[Run], list[Run], list[Run]]:
    """Partition runs into (before, inside, after) the range, splitting runs at its edges."""
    before, inside, after = [], [], []
    pos = 0
    for run in runs:
        run_end = pos + len(run.text)
        for lo, hi, bucket in ((pos, min(start, run_end), before),
                               (max(start, pos), min(end, run_end), inside),
                               (max(end, pos), run_end, after)):
            if hi > lo:
                bucket.append(run.model_copy(update={"text": run.text[lo - pos:hi - pos]}))
        pos = run_end
    return before, inside, after


def _check(doc: EditorDoc, sel: Selection) -> EditorBlock:
    if not 0 <= sel.block < len(doc.blocks):
        raise ValueError(f"Block {sel.block} out of range (document has {len(doc.blocks)})")
    block = doc.blocks[sel.block]
    if not 0 <= sel.start <= sel.end <= len(block.text):
        raise ValueError(f"Invalid selection {sel.start}:{sel.end} for block of length {len(block.text)}")
    return block


def _replace_block(doc: EditorDoc, index: int, block: EditorBlock) -> EditorDoc:
    blocks = list(doc.blocks)
    blocks[index] = block
    return doc.model_copy(update={"blocks": blocks})


# --- commands ---

def toggle_style(doc: EditorDoc, sel: Selection, style: str) -> EditorDoc:
    """Apply style to the selection unless every selected character already has it."""
    if style not in STYLES:
        raise ValueError(f"Unknown style: {style}")
    block = _check(doc, sel)
    if sel.start == sel.end:
        return doc
    before, inside, after = _split(block.runs, sel.start, sel.end)
    enable = not all(getattr(r, style) for r in inside)
    inside = [r.model_copy(update={style: enable}) for r in inside]
    return _replace_block(doc, sel.block, block.model_copy(update={"runs": _merge(before + inside + after)}))


def toggle_bold(doc: EditorDoc, sel: Selection) -> EditorDoc:
    return toggle_style(doc, sel, "bold")


def toggle_italic(doc: EditorDoc, sel: Selection) -> EditorDoc:
    return toggle_style(doc, sel, "italic")


def toggle_underline(doc: EditorDoc, sel: Selection) -> EditorDoc:
    return toggle_style(doc, sel, "underline")


def insert_text(doc: EditorDoc, sel: Selection, text: str) -> EditorDoc:
    """Replace the selection with text, styled like the character before the selection."""
    block = _check(doc, sel)
    before, _, after = _split(block.runs, sel.start, sel.end)
    template = before[-1] if before else (after[0] if after else Run(text=""))
    inserted = template.model_copy(update={"text": text})
    return _replace_block(doc, sel.block, block.model_copy(update={"runs": _merge(before + [inserted] + after)}))


def set_alignment(doc: EditorDoc, alignment: Alignment, block: int | None = None) -> EditorDoc:
    """Align one block, or every block when block is None."""
    if block is None:
        return doc.model_copy(update={
            "blocks": [b.model_copy(update={"alignment": alignment}) for b in doc.blocks]
        })
    if not 0 <= block < len(doc.blocks):
        raise ValueError(f"Block {block} out of range (document has {len(doc.blocks)})")
    return _replace_block(doc, block, doc.blocks[block].model_copy(update={"alignment": alignment}))


def set_direction(doc: EditorDoc, direction: Direction) -> EditorDoc:
    return doc.model_copy(update={"direction": direction})


def toggle_direction(doc: EditorDoc) -> EditorDoc:
    flipped = Direction.rtl if doc.direction == Direction.ltr else Direction.ltr
    return set_direction(doc, flipped)


# --- conversion ---

def from_plain_text(text: str, direction: Direction | None = None) -> EditorDoc:
    """Build an unstyled document, one block per blank-line separated paragraph.

    Direction defaults to the script detected in text.
    """
    blocks = [EditorBlock(runs=[Run(text=b)]) for b in split_blocks(text)] or [EditorBlock()]
    return EditorDoc(blocks=blocks, direction=direction or detect_direction(text))


def plain_text(doc: EditorDoc) -> str:
    return "\n\n".join(b.text for b in doc.blocks)


def character_count(doc: EditorDoc) -> int:
    return sum(len(b.text) for b in doc.blocks)


def _bold(text: str) -> str:
    """Wrap each star-free piece in '**'; bold markup cannot contain '*', so stars stay plain."""
    return "".join(
        part if part.startswith("*") or not part.strip() else f"**{part}**"
        for part in STAR_RE.split(text)
    )


def to_markdown(doc: EditorDoc) -> str:
    """Serialize to the renderer's syntax; only bold has a markup form."""
    def _run(run: Run) -> str:
        return _bold(run.text) if run.bold else run.text

    return "\n\n".join("".join(_run(r) for r in b.runs) for b in doc.blocks if b.text.strip())
