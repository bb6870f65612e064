"""Unit tests for crud/versioning.py"""

from uuid import uuid4

import pytest
from sqlmodel import Session, select

from qamark.crud.documents import current_qa_pairs, fetch_documents_for_export
from qamark.crud.models import TrainingData, TrainingDocument
from qamark.crud.versioning import (
    current_version, diff_qa_versions, list_qa_versions, remove_qa_pair, revise_qa_pair,
)


# --- helpers ---

def _first_pair(session: Session, doc: TrainingDocument) -> TrainingData:
    return session.exec(select(TrainingData).where(TrainingData.training_document_id == doc.id)).one()


def _revise_twice(session, doc):
    v1 = _first_pair(session, doc)
    v2 = revise_qa_pair(session, v1, v1.question, "Thirty days.", change_reason="spell out")
    v3 = revise_qa_pair(session, v2, "What is the return window?", "Thirty days.")
    return v1, v2, v3


# --- revise_qa_pair ---

def test_revise_creates_new_current_version(session, doc):
    """A revision is current, numbered +1 and linked to its parent."""
    v1 = _first_pair(session, doc)
    v2 = revise_qa_pair(session, v1, v1.question, "Thirty days.", change_reason="spell out")
    assert (v2.version, v2.is_current, v2.parent_id) == (2, True, v1.id)
    assert v2.change_reason == "spell out"
    assert v1.is_current is False


def test_revise_keeps_history_row(session, doc):
    """The previous version stays stored with its original text."""
    v1 = _first_pair(session, doc)
    revise_qa_pair(session, v1, "Q", "A")
    assert session.get(TrainingData, v1.id).answer == "30 days."


def test_revise_non_current_rejected(session, doc):
    """Only the current version can be revised."""
    v1 = _first_pair(session, doc)
    revise_qa_pair(session, v1, "Q", "A")
    with pytest.raises(ValueError, match="not the current version"):
        revise_qa_pair(session, v1, "Q2", "A2")


# --- remove_qa_pair ---

def test_remove_marks_not_current(session, doc):
    """Removal keeps the row with a default reason but drops it from current pairs."""
    qa = _first_pair(session, doc)
    remove_qa_pair(session, qa)
    assert qa.is_current is False
    assert qa.change_reason == "Removed during verification"
    assert session.get(TrainingData, qa.id) is not None
    assert current_qa_pairs(session, doc.id) == []


def test_remove_excluded_from_export(session, doc):
    """Removed pairs do not appear in export records."""
    remove_qa_pair(session, _first_pair(session, doc), change_reason="duplicate")
    [record] = fetch_documents_for_export(session)
    assert record.qa_pairs == []


def test_remove_after_revision_keeps_history(session, doc):
    """Removing the current revision leaves the whole lineage listable."""
    v1, _, v3 = _revise_twice(session, doc)
    remove_qa_pair(session, v3, change_reason="duplicate")
    assert v3.change_reason == "duplicate"
    assert [r.version for r in list_qa_versions(session, v1.id)] == [1, 2, 3]


def test_remove_non_current_rejected(session, doc):
    """Only the current version can be removed."""
    v1, _, _ = _revise_twice(session, doc)
    with pytest.raises(ValueError, match="not the current version"):
        remove_qa_pair(session, v1)


# --- list_qa_versions ---

def test_list_versions_from_any_member(session, doc):
    """The whole lineage is returned whichever version id is given."""
    v1, v2, v3 = _revise_twice(session, doc)
    for member in (v1, v2, v3):
        assert [r.version for r in list_qa_versions(session, member.id)] == [1, 2, 3]


def test_list_versions_unknown_id(session):
    """An unknown id yields an empty history."""
    assert list_qa_versions(session, uuid4()) == []


def test_current_version_follows_chain(session, doc):
    """current_version walks forward from any ancestor."""
    v1, _, v3 = _revise_twice(session, doc)
    assert current_version(session, v1).id == v3.id


# --- diff_qa_versions ---

def test_diff_versions(session, doc):
    """The diff marks removed and added question/answer lines."""
    v1, _, _ = _revise_twice(session, doc)
    lines = diff_qa_versions(session, v1.id, 1, 3)
    assert lines[0].startswith("--- v1")
    assert lines[1].startswith("+++ v3")
    assert "-A: 30 days.\n" in lines
    assert "+Q: What is the return window?\n" in lines


def test_diff_same_version_is_empty(session, doc):
    """Diffing a version against itself yields no lines."""
    v1, _, _ = _revise_twice(session, doc)
    assert diff_qa_versions(session, v1.id, 2, 2) == []


def test_diff_missing_version(session, doc):
    """Missing versions raise ValueError."""
    v1 = _first_pair(session, doc)
    with pytest.raises(ValueError, match="Version 4 not found"):
        diff_qa_versions(session, v1.id, 1, 4)
