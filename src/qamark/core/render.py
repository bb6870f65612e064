"""Render entry points: text -> RenderedDoc node tree -> HTML or JSON"""

from qamark.core.blocks import classify_block, split_blocks
from qamark.core.direction import detect_direction, detect_language
from qamark.core.html import emit_html
from qamark.core.models import RenderedDoc


def render(text: str) -> RenderedDoc:
    """Build a fresh node tree for text.

    Direction is detected once on the whole input and applies to every block.
    Pure and synchronous; safe to call repeatedly with no shared state.
    """
    return RenderedDoc(
        direction=detect_direction(text),
        language=detect_language(text),
        blocks=[classify_block(b) for b in split_blocks(text)],
    )


def render_html(text: str) -> str:
    return emit_html(render(text))


def render_json(text: str, indent: int = 2) -> str:
    return render(text).model_dump_json(indent=indent)
