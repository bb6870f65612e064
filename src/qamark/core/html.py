"""HTML emission for rendered node trees"""

from markdown_it.common.normalize_url import normalizeLink, validateLink
from markdown_it.common.utils import escapeHtml

from qamark.core.models import Block, BlockKind, Direction, InlineSpan, RenderedDoc, SpanKind, TableCell


IFRAME_ALLOW = "accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; picture-in-picture"


def safe_href(url: str) -> str:
    """Normalized, escaped href; unsafe schemes (javascript:, vbscript:, ...) collapse to '#'."""
    url = url.strip()
    return escapeHtml(normalizeLink(url)) if validateLink(url) else "#"


def _text(value: str) -> str:
    return escapeHtml(value).replace("\n", "<br>")


def emit_spans(spans: list[InlineSpan]) -> str:
    parts = []
    for span in spans:
        if span.kind == SpanKind.bold:
            parts.append(f"<strong>{emit_spans(span.children)}</strong>")
        elif span.kind == SpanKind.link:
            parts.append(
                f'<a href="{safe_href(span.url)}" target="_blank" rel="noopener noreferrer">'
                f"{emit_spans(span.children)}</a>"
            )
        elif span.kind == SpanKind.code:
            parts.append(f"<code>{escapeHtml(span.text)}</code>")
        elif span.kind == SpanKind.emoji:
            parts.append(f'<span class="emoji">{escapeHtml(span.text)}</span>')
        else:
            parts.append(_text(span.text))
    return "".join(parts)


def _link(url: str) -> str:
    return (f'<a href="{safe_href(url)}" target="_blank" rel="noopener noreferrer">'
            f"{escapeHtml(url)}</a>")


def _cell(cell: TableCell, tag: str) -> str:
    return f"<{tag}>{'<br>'.join(emit_spans(line) for line in cell.lines)}</{tag}>"


def emit_table(block: Block) -> str:
    head = "".join(_cell(c, "th") for c in block.table.headers)
    body = "".join(
        f"<tr>{''.join(_cell(c, 'td') for c in row)}</tr>" for row in block.table.rows
    )
    return f"<table><thead><tr>{head}</tr></thead><tbody>{body}</tbody></table>"


def emit_block(block: Block, direction: Direction) -> str:
    """Emit one block; direction sets dir on text-bearing elements."""
    if block.kind == BlockKind.heading:
        tag = f"h{block.level}"
        return f'<{tag} dir="{direction.value}">{emit_spans(block.spans)}</{tag}>'
    if block.kind == BlockKind.youtube:
        if block.embed_url is None:
            return _link(block.url)
        return (f'<iframe src="{safe_href(block.embed_url)}" width="100%" height="315" '
                f'frameborder="0" allow="{IFRAME_ALLOW}" allowfullscreen></iframe>')
    if block.kind == BlockKind.image:
        return f'<img src="{safe_href(block.url)}" alt="Embedded image">'
    if block.kind == BlockKind.table:
        return emit_table(block)
    return f'<p dir="{direction.value}">{emit_spans(block.spans)}</p>'


def emit_html(doc: RenderedDoc) -> str:
    """Wrap all blocks in a container carrying the document direction and alignment."""
    align = "right" if doc.direction == Direction.rtl else "left"
    body = "\n".join(emit_block(b, doc.direction) for b in doc.blocks)
    return (f'<div class="message-renderer" dir="{doc.direction.value}" '
            f'style="text-align: {align}">\n{body}\n</div>')
