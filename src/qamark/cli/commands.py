"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from sqlmodel import Session

from qamark.config import Settings, load_config
from qamark.core.export import write_export
from qamark.core.render import render_html, render_json
from qamark.crud.database import init_db, make_engine, reset_db
from qamark.crud.documents import (
    document_stats,
    fetch_documents_for_export,
    get_by_id,
    load_documents_file,
    set_status,
)


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def setup_logging(log_level: Optional[str] = None) -> None:
    """Configure root logging from --log-level, falling back to Settings.log_level."""
    level = _settings(overrides={"log_level": log_level.upper() if log_level else None}).log_level
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", force=True)


def render_cmd(
    path: Annotated[Path, typer.Argument(help="Text or markdown file to render")],
    fmt: Annotated[Optional[str], typer.Option("--format", help="html or json")] = None,
    out: Annotated[Optional[Path], typer.Option("--out", help="Write output to this file instead of stdout")] = None,
    ):
    """Render a document's text to HTML or a JSON node tree."""
    settings = _settings(overrides={"render_format": fmt})
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        _fail(f"Cannot read {path}", e)

    output = render_json(text) if settings.render_format == "json" else render_html(text)
    if out is None:
        typer.echo(output)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(output, encoding="utf-8")
    typer.echo(f"Rendered {path} -> {out}")


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize database schema. Use --reset to clear existing data."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        reset_db(engine)
        typer.echo("Existing data cleared.")
    else:
        init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")


def import_cmd(
    path: Annotated[Path, typer.Argument(help="JSON file holding a list of documents")],
    ):
    """Import training documents and their Q&A pairs from a JSON file."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    init_db(engine)
    try:
        with Session(engine) as session:
            docs = load_documents_file(session, path)
            session.commit()
            lines = [f"  {doc.id}: {doc.title}" for doc in docs]
    except RuntimeError as e:
        _fail(str(e))
    for line in lines:
        typer.echo(line)
    typer.echo(f"Imported {len(lines)} document(s).")


def status_cmd(
    document_id: Annotated[str, typer.Argument(help="Document id")],
    status: Annotated[str, typer.Argument(help="pending, approved or rejected")],
    ):
    """Change a document's review status."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    init_db(engine)
    with Session(engine) as session:
        doc = get_by_id(session, document_id)
        if doc is None:
            _fail(f"Document not found: {document_id}")
        try:
            set_status(session, doc, status)
        except ValueError as e:
            _fail(str(e))
        session.commit()
    typer.echo(f"{document_id} -> {status}")


def export_cmd(
    status: Annotated[Optional[str], typer.Option("--status", help="Only export documents with this status; 'all' for every status")] = None,
    fmt: Annotated[Optional[str], typer.Option("--format", help="csv, json, docx or pdf")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    filename: Annotated[Optional[str], typer.Option("--filename", help="Output file name")] = None,
    ):
    """Export training documents with their current Q&A pairs."""
    settings = _settings(overrides={"export_status": status, "output_format": fmt, "output_dir": out})
    engine = make_engine(settings.db_url)
    init_db(engine)

    try:
        with Session(engine) as session:
            docs = fetch_documents_for_export(session, settings.export_status)
    except ValueError as e:
        _fail("Export failed", e)
    if not docs:
        typer.echo(f"No documents found for status: {settings.export_status}.")
        raise typer.Exit(1)

    try:
        path = write_export(docs, Path(settings.output_dir), settings.output_format, filename)
    except (ValueError, RuntimeError) as e:
        _fail("Export failed", e)
    typer.echo(f"Exported {len(docs)} document(s) to {path}")


def stats_cmd():
    """Show document counts in total and per review status."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    init_db(engine)
    with Session(engine) as session:
        counts = document_stats(session)
    for name, n in counts.items():
        typer.echo(f"{name + ':':<10}{n}")
