"""Unit tests for crud/database.py"""

from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from qamark.crud.database import init_db, make_engine, reset_db
from qamark.crud.documents import add_document
from qamark.crud.models import TrainingDocument


SQLITE_MEM = "sqlite://"


def test_make_engine_returns_engine():
    """make_engine returns an SQLAlchemy Engine instance."""
    assert isinstance(make_engine(SQLITE_MEM), Engine)


def test_init_db_creates_tables():
    """init_db creates the document and Q&A tables."""
    engine = make_engine(SQLITE_MEM)
    init_db(engine)
    tables = set(inspect(engine).get_table_names())
    assert {"training_documents", "training_data"} <= tables


def test_init_db_is_idempotent(tmp_path):
    """Running init_db twice keeps existing rows."""
    engine = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(engine)
    with Session(engine) as s:
        add_document(s, title="Keep me", original_content="body")
        s.commit()
    init_db(engine)
    with Session(engine) as s:
        assert len(s.exec(select(TrainingDocument)).all()) == 1


def test_reset_db_drops_rows(tmp_path):
    """reset_db recreates empty tables."""
    engine = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(engine)
    with Session(engine) as s:
        add_document(s, title="Gone", original_content="body")
        s.commit()
    reset_db(engine)
    with Session(engine) as s:
        assert s.exec(select(TrainingDocument)).all() == []
