"""Training document persistence: documents and their Q&A pairs, status changes, export queries, JSON import and counts"""

import json
import logging
from datetime import datetime
from pathlib import Path
from uuid import UUID

from sqlalchemy import func
from sqlmodel import Session, select

from qamark.core.models import ExportDocument, ExportQAPair
from qamark.crud.models import DocumentStatusEnum, TrainingData, TrainingDocument


logger = logging.getLogger(__name__)


def add_document(
    session: Session,
    title: str,
    original_content: str,
    qa_pairs: list[dict] = None,
    source_links: list[str] = None,
    status: str = DocumentStatusEnum.pending,
    submitter_email: str | None = None,
    trained: bool = False,
    ) -> TrainingDocument:
    """Insert a document and its initial (version 1, current) Q&A pairs.

    Flushes but does not commit; caller controls the transaction.
    """
    doc = TrainingDocument(
        title=title,
        original_content=original_content,
        source_links=list(source_links or []),
        status=DocumentStatusEnum(status),
        submitter_email=submitter_email,
        trained=trained,
    )
    session.add(doc)
    session.flush()

    for qa in qa_pairs or []:
        add_qa_pair(session, doc, qa['question'], qa['answer'])
    return doc


def add_qa_pair(session: Session, doc: TrainingDocument, question: str, answer: str) -> TrainingData:
    """Attach a new Q&A lineage (version 1, current) to an existing document."""
    qa = TrainingData(training_document_id=doc.id, question=question, answer=answer)
    session.add(qa)
    session.flush()
    return qa


def get_by_id(session: Session, document_id: UUID | str) -> TrainingDocument | None:
    """Return the document with the given id, or None if not found or malformed."""
    try:
        key = document_id if isinstance(document_id, UUID) else UUID(str(document_id))
    except ValueError:
        return None
    return session.get(TrainingDocument, key)


def current_qa_pairs(session: Session, document_id: UUID) -> list[TrainingData]:
    """Current Q&A pairs of a document in creation order."""
    return list(session.exec(
        select(TrainingData)
        .where(TrainingData.training_document_id == document_id)
        .where(TrainingData.is_current == True)  # noqa: E712
        .order_by(TrainingData.created_at.asc())
    ).all())


def set_status(session: Session, doc: TrainingDocument, status: str) -> TrainingDocument:
    """Move a document to a new review status. Raises ValueError for unknown statuses."""
    try:
        doc.status = DocumentStatusEnum(status)
    except ValueError:
        valid = ", ".join(s.value for s in DocumentStatusEnum)
        raise ValueError(f"Invalid status {status!r}; expected one of: {valid}") from None
    doc.updated_at = datetime.now()
    session.add(doc)
    session.flush()
    return doc


def to_export(session: Session, doc: TrainingDocument) -> ExportDocument:
    return ExportDocument(
        id=str(doc.id),
        title=doc.title,
        status=doc.status.value if isinstance(doc.status, DocumentStatusEnum) else str(doc.status),
        created_at=doc.created_at,
        submitter_email=doc.submitter_email,
        trained=bool(doc.trained),
        source_links=list(doc.source_links or []),
        original_content=doc.original_content,
        qa_pairs=[
            ExportQAPair(question=qa.question, answer=qa.answer, version=qa.version, created_at=qa.created_at)
            for qa in current_qa_pairs(session, doc.id)
        ],
    )


def fetch_documents_for_export(session: Session, status: str | None = None) -> list[ExportDocument]:
    """Return export records, newest first, with current Q&A pairs only.

    A status of None or 'all' disables the status filter.
    """
    query = select(TrainingDocument).order_by(TrainingDocument.created_at.desc())
    if status and status != "all":
        query = query.where(TrainingDocument.status == DocumentStatusEnum(status))
    return [to_export(session, doc) for doc in session.exec(query).all()]


def load_documents_file(session: Session, path: Path) -> list[TrainingDocument]:
    """Import a JSON list of documents ({title, original_content, qa_pairs, ...}).

    Raises RuntimeError naming the file when it cannot be read or a record is invalid.
    """
    try:
        records = json.loads(Path(path).read_text(encoding='utf-8'))
        if not isinstance(records, list):
            raise ValueError(f"expected a JSON list, got {type(records).__name__}")
        docs = [
            add_document(
                session,
                title=r['title'],
                original_content=r['original_content'],
                qa_pairs=r.get('qa_pairs'),
                source_links=r.get('source_links'),
                status=r.get('status', DocumentStatusEnum.pending),
                submitter_email=r.get('submitter_email'),
                trained=bool(r.get('trained', False)),
            )
            for r in records
        ]
    except (OSError, ValueError, KeyError, TypeError) as e:
        raise RuntimeError(f"Failed to import {path}: {e}") from e
    logger.info("Imported %d document(s) from %s", len(docs), path)
    return docs


def document_stats(session: Session) -> dict[str, int]:
    """Count documents in total and per review status; every status is present, zero if unused."""
    counts = {s.value: 0 for s in DocumentStatusEnum}
    rows = session.exec(
        select(TrainingDocument.status, func.count()).group_by(TrainingDocument.status)
    ).all()
    for status, n in rows:
        counts[DocumentStatusEnum(status).value] = n
    return {"total": sum(counts.values()), **counts}
