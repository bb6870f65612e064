"""Q&A pair version history: revise, remove, list, and diff operations"""

import difflib
from uuid import UUID

from sqlmodel import Session, select

from qamark.crud.models import TrainingData


REMOVED_REASON = "Removed during verification"


def revise_qa_pair(
    session: Session,
    qa: TrainingData,
    question: str,
    answer: str,
    change_reason: str | None = None,
    ) -> TrainingData:
    """Record an edited Q&A pair as a new current version.

    The previous row is kept as history (is_current=False) and linked via
    parent_id. Flushes but does not commit; caller controls the transaction.
    Raises ValueError when qa is not the current version.
    """
    if not qa.is_current:
        raise ValueError(f"Q&A pair {qa.id} (v{qa.version}) is not the current version")

    qa.is_current = False
    session.add(qa)
    revision = TrainingData(
        training_document_id=qa.training_document_id,
        question=question,
        answer=answer,
        version=qa.version + 1,
        is_current=True,
        parent_id=qa.id,
        change_reason=change_reason,
    )
    session.add(revision)
    session.flush()
    return revision


def remove_qa_pair(
    session: Session,
    qa: TrainingData,
    change_reason: str = REMOVED_REASON,
    ) -> TrainingData:
    """Retire a Q&A lineage by marking its current row not current.

    The row is kept for history; no newer version is created.
    Raises ValueError when qa is not the current version.
    """
    if not qa.is_current:
        raise ValueError(f"Q&A pair {qa.id} (v{qa.version}) is not the current version")

    qa.is_current = False
    qa.change_reason = change_reason
    session.add(qa)
    session.flush()
    return qa


def list_qa_versions(session: Session, qa_id: UUID) -> list[TrainingData]:
    """Return the full lineage containing qa_id, ordered by version ascending."""
    chain = []
    row = session.get(TrainingData, qa_id)
    if row is not None:
        row = current_version(session, row)
    while row is not None:
        chain.append(row)
        row = session.get(TrainingData, row.parent_id) if row.parent_id else None
    return sorted(chain, key=lambda r: r.version)


def current_version(session: Session, qa: TrainingData) -> TrainingData:
    """Follow revisions forward from qa to the current row."""
    row = qa
    while not row.is_current:
        child = session.exec(select(TrainingData).where(TrainingData.parent_id == row.id)).first()
        if child is None:
            break
        row = child
    return row


def diff_qa_versions(session: Session, qa_id: UUID, from_num: int, to_num: int, context: int = 3) -> list[str]:
    """Unified diff lines of question+answer between two versions in qa_id's lineage.

    Raises ValueError if either version is missing.
    """
    by_num = {r.version: r for r in list_qa_versions(session, qa_id)}

    def _get(num: int) -> TrainingData:
        if num not in by_num:
            raise ValueError(f"Version {num} not found for Q&A pair {qa_id}")
        return by_num[num]

    def _text(r: TrainingData) -> str:
        return f"Q: {r.question}\nA: {r.answer}\n"

    old, new = _text(_get(from_num)), _text(_get(to_num))
    return list(difflib.unified_diff(
        old.splitlines(keepends=True), new.splitlines(keepends=True),
        fromfile=f"v{from_num}", tofile=f"v{to_num}", n=context,
    ))
