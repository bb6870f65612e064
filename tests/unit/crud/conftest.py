"""Shared fixtures for crud unit tests"""

import pytest
from sqlalchemy import create_engine
from sqlmodel import SQLModel, Session

from qamark.crud.documents import add_document


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Fresh session per test; changes are not committed."""
    with Session(engine) as s:
        yield s


@pytest.fixture(name="doc")
def doc_fixture(session):
    """A pending document with one Q&A pair, flushed to the session."""
    return add_document(
        session,
        title="Returns policy",
        original_content="Items can be returned within **30 days**.",
        qa_pairs=[{"question": "How long is the return window?", "answer": "30 days."}],
        source_links=["https://example.com/returns"],
    )
