"""Export formatters: CSV, JSON, Word and PDF files from training document records"""

import csv
import io
import json
import logging
from pathlib import Path

from docx import Document as DocxDocument
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.shared import Pt
from markdown_it.common.utils import escapeHtml
from reportlab.lib.colors import HexColor
from reportlab.lib.enums import TA_LEFT, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from qamark.core.direction import detect_direction
from qamark.core.html import safe_href
from qamark.core.models import BlockKind, Direction, ExportDocument, InlineSpan, SpanKind, plain_text
from qamark.core.render import render


logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("csv", "json", "docx", "pdf")
CSV_HEADER = [
    "Document ID", "Title", "Status", "Created At", "Submitter Email", "Trained",
    "Source Links", "Q&A Count", "Question", "Answer", "QA Version", "QA Created At",
]
CODE_FONT = "Courier New"


def _iso(value) -> str:
    return value.isoformat() if value else ""


# --- CSV / JSON ---

def build_csv_rows(docs: list[ExportDocument]) -> list[list[str]]:
    """One row per Q&A pair; document columns are filled on the first row only.

    A document without Q&A pairs still yields one row with a count of 0.
    """
    rows = [CSV_HEADER]
    for doc in docs:
        doc_cells = [
            doc.id, doc.title, doc.status, _iso(doc.created_at), doc.submitter_email or "",
            "Yes" if doc.trained else "No", "; ".join(doc.source_links), str(len(doc.qa_pairs)),
        ]
        if not doc.qa_pairs:
            rows.append(doc_cells + ["", "", "", ""])
            continue
        for i, qa in enumerate(doc.qa_pairs):
            lead = doc_cells if i == 0 else [""] * len(doc_cells)
            rows.append(lead + [qa.question, qa.answer, str(qa.version), _iso(qa.created_at)])
    return rows


def export_csv(docs: list[ExportDocument]) -> str:
    """Every cell quoted; embedded quotes doubled."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerows(build_csv_rows(docs))
    return buf.getvalue().rstrip("\n")


def export_json(docs: list[ExportDocument]) -> str:
    return json.dumps([d.model_dump(mode="json") for d in docs], indent=2, ensure_ascii=False)


# --- Word ---

def _docx_direction(paragraph, text: str) -> None:
    """Right-align and mark bidi when the field's own text is RTL."""
    if detect_direction(text) == Direction.rtl:
        paragraph.alignment = WD_ALIGN_PARAGRAPH.RIGHT
        paragraph._p.get_or_add_pPr().append(OxmlElement("w:bidi"))


def _docx_spans(paragraph, spans: list[InlineSpan]) -> None:
    for span in spans:
        if span.kind == SpanKind.link:
            run = paragraph.add_run(span.text)
            run.underline = True
            paragraph.add_run(f" ({span.url})")
            continue
        run = paragraph.add_run(span.text)
        if span.kind == SpanKind.bold:
            run.bold = True
        elif span.kind == SpanKind.code:
            run.font.name = CODE_FONT
            run.font.size = Pt(10)


def _docx_content(document, text: str) -> None:
    """Write rendered original content; direction is detected on the whole field."""
    for block in render(text).blocks:
        if block.kind == BlockKind.heading:
            p = document.add_heading(level=block.level)
            _docx_spans(p, block.spans)
        elif block.kind == BlockKind.table:
            table = block.table
            cols = max([len(table.headers)] + [len(r) for r in table.rows])
            grid = document.add_table(rows=1 + len(table.rows), cols=cols)
            grid.style = "Table Grid"
            for r, cells in enumerate([table.headers] + table.rows):
                for c, cell in enumerate(cells):
                    grid.cell(r, c).text = "\n".join(plain_text(line) for line in cell.lines)
            continue
        elif block.kind in (BlockKind.youtube, BlockKind.image):
            p = document.add_paragraph(block.embed_url or block.url)
        else:
            p = document.add_paragraph()
            _docx_spans(p, block.spans)
        _docx_direction(p, text)


def _docx_field(document, label: str, value: str) -> None:
    p = document.add_paragraph()
    p.add_run(f"{label}: ").bold = True
    p.add_run(value)
    _docx_direction(p, value)


def build_docx(docs: list[ExportDocument]):
    """Return a python-docx Document with one section per training document."""
    document = DocxDocument()
    for i, doc in enumerate(docs):
        if i:
            document.add_page_break()
        title = document.add_heading(doc.title, level=1)
        _docx_direction(title, doc.title)
        _docx_field(document, "Status", doc.status)
        _docx_field(document, "Created At", _iso(doc.created_at))
        if doc.submitter_email:
            _docx_field(document, "Submitter", doc.submitter_email)
        _docx_field(document, "Trained", "Yes" if doc.trained else "No")
        for link in doc.source_links:
            _docx_field(document, "Source", link)

        if doc.original_content.strip():
            document.add_heading("Original Content", level=2)
            _docx_content(document, doc.original_content)

        if doc.qa_pairs:
            document.add_heading(f"Q&A Pairs ({len(doc.qa_pairs)})", level=2)
        for n, qa in enumerate(doc.qa_pairs, start=1):
            _docx_field(document, f"Q{n}", qa.question)
            _docx_field(document, f"A{n}", qa.answer)
    return document


def export_docx(docs: list[ExportDocument], path: Path) -> Path:
    build_docx(docs).save(str(path))
    return path


# --- PDF ---

def _pdf_styles() -> dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    styles = {
        "title": ParagraphStyle("QATitle", parent=base["Heading1"]),
        "h2":    ParagraphStyle("QAH2", parent=base["Heading2"]),
        "body":  ParagraphStyle("QABody", parent=base["Normal"], leading=14),
    }
    for level in range(1, 7):
        styles[f"h{level}"] = ParagraphStyle(f"QAContentH{level}", parent=base[f"Heading{level}"])
    return styles


def _aligned(style: ParagraphStyle, text: str) -> ParagraphStyle:
    """Copy of style aligned right when text is RTL."""
    rtl = detect_direction(text) == Direction.rtl
    return ParagraphStyle(f"{style.name}-{'rtl' if rtl else 'ltr'}", parent=style,
                          alignment=TA_RIGHT if rtl else TA_LEFT)


def pdf_markup(spans: list[InlineSpan]) -> str:
    """Convert spans to reportlab paragraph markup with all text escaped."""
    parts = []
    for span in spans:
        text = escapeHtml(span.text).replace("\n", "<br/>")
        if span.kind == SpanKind.bold:
            parts.append(f"<b>{text}</b>")
        elif span.kind == SpanKind.link:
            parts.append(f'<a href="{safe_href(span.url)}" color="blue"><u>{text}</u></a>')
        elif span.kind == SpanKind.code:
            parts.append(f'<font face="Courier">{text}</font>')
        else:
            parts.append(text)
    return "".join(parts)


def _pdf_content(text: str, styles: dict[str, ParagraphStyle]) -> list:
    rendered = render(text)
    story = []
    for block in rendered.blocks:
        if block.kind == BlockKind.table:
            table = block.table
            data = [
                [Paragraph("<br/>".join(pdf_markup(line) for line in cell.lines), styles["body"]) for cell in row]
                for row in [table.headers] + table.rows
            ]
            grid = Table(data, repeatRows=1)
            grid.setStyle(TableStyle([("GRID", (0, 0), (-1, -1), 0.5, HexColor("#999999"))]))
            story.append(grid)
            continue
        if block.kind == BlockKind.heading:
            markup, style = pdf_markup(block.spans), styles[f"h{block.level}"]
        elif block.kind in (BlockKind.youtube, BlockKind.image):
            url = block.embed_url or block.url
            markup, style = f'<a href="{safe_href(url)}" color="blue">{escapeHtml(url)}</a>', styles["body"]
        else:
            markup, style = pdf_markup(block.spans), styles["body"]
        story.append(Paragraph(markup, _aligned(style, text)))
    return story


def build_pdf_story(docs: list[ExportDocument]) -> list:
    styles = _pdf_styles()
    story = []
    for doc in docs:
        story.append(Paragraph(escapeHtml(doc.title), _aligned(styles["title"], doc.title)))
        meta = [f"<b>Status:</b> {escapeHtml(doc.status)}", f"<b>Created At:</b> {_iso(doc.created_at)}",
                f"<b>Trained:</b> {'Yes' if doc.trained else 'No'}"]
        if doc.submitter_email:
            meta.append(f"<b>Submitter:</b> {escapeHtml(doc.submitter_email)}")
        meta.extend(f"<b>Source:</b> {escapeHtml(link)}" for link in doc.source_links)
        story.extend(Paragraph(m, styles["body"]) for m in meta)

        if doc.original_content.strip():
            story.append(Paragraph("Original Content", styles["h2"]))
            story.extend(_pdf_content(doc.original_content, styles))

        if doc.qa_pairs:
            story.append(Paragraph(f"Q&amp;A Pairs ({len(doc.qa_pairs)})", styles["h2"]))
        for n, qa in enumerate(doc.qa_pairs, start=1):
            story.append(Paragraph(f"<b>Q{n}:</b> {escapeHtml(qa.question)}", _aligned(styles["body"], qa.question)))
            story.append(Paragraph(f"<b>A{n}:</b> {escapeHtml(qa.answer)}", _aligned(styles["body"], qa.answer)))
        story.append(Spacer(1, 8 * mm))
    return story


def export_pdf(docs: list[ExportDocument], path: Path) -> Path:
    template = SimpleDocTemplate(str(path), pagesize=A4, leftMargin=18 * mm, rightMargin=18 * mm,
                                 topMargin=18 * mm, bottomMargin=18 * mm)
    template.build(build_pdf_story(docs))
    return path


# --- writer ---

def write_export(
    docs: list[ExportDocument],
    output_dir: Path,
    fmt: str = "csv",
    filename: str | None = None,
    ) -> Path:
    """Write docs to output_dir/filename in fmt. Returns the written path.

    Raises ValueError for unknown formats and RuntimeError when writing fails.
    """
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unknown export format {fmt!r}; expected one of: {', '.join(EXPORT_FORMATS)}")
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / (filename or f"training-data.{fmt}")
    try:
        if fmt == "csv":
            path.write_text(export_csv(docs), encoding="utf-8")
        elif fmt == "json":
            path.write_text(export_json(docs), encoding="utf-8")
        elif fmt == "docx":
            export_docx(docs, path)
        else:
            export_pdf(docs, path)
    except OSError as e:
        raise RuntimeError(f"Failed to write {path}: {e}") from e
    logger.info("Exported %d document(s) to %s", len(docs), path)
    return path
