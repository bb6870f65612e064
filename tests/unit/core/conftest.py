"""Shared fixtures for core unit tests"""

from datetime import datetime

import pytest

from qamark.core.models import ExportDocument, ExportQAPair


SAMPLE_TEXT = """\
# Getting Started

Welcome to the **training** guide 😀. See [the docs](https://example.com/docs) or run `pip install`.

https://youtu.be/dQw4w9WgXcQ?t=90

https://example.com/images/diagram.png

| Term | Meaning |
|------|---------|
| QA | Question **and** answer |
| RTL | Right to left |
"""

RTL_TEXT = "مرحبا بكم\n\nهذا **نص** تجريبي"


@pytest.fixture(name="sample_text")
def sample_text_fixture():
    return SAMPLE_TEXT


@pytest.fixture(name="export_docs")
def export_docs_fixture():
    """Two export records: one with Q&A pairs, one without."""
    return [
        ExportDocument(
            id="doc-1",
            title="Onboarding",
            status="approved",
            created_at=datetime(2026, 1, 15, 10, 30),
            submitter_email="reviewer@example.com",
            trained=True,
            source_links=["https://example.com/a", "https://example.com/b"],
            original_content="# Intro\n\nSay \"hello\" **loudly**.",
            qa_pairs=[
                ExportQAPair(question='What is "QA"?', answer="Question and answer.", version=2,
                             created_at=datetime(2026, 1, 16)),
                ExportQAPair(question="Who reviews?", answer="Admins.", version=1,
                             created_at=datetime(2026, 1, 16)),
            ],
        ),
        ExportDocument(
            id="doc-2",
            title="مستند",
            status="pending",
            created_at=datetime(2026, 1, 14),
            original_content=RTL_TEXT,
        ),
    ]


@pytest.fixture(name="rtl_text")
def rtl_text_fixture():
    return RTL_TEXT
