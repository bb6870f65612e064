"""Database table definitions for training documents and their Q&A pairs"""

from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, DateTime, Text
from sqlmodel import Field, SQLModel


class DocumentStatusEnum(str, Enum):
    """Review states a submitted document moves through"""
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class TrainingDocument(SQLModel, table=True):
    """A submitted free-text document and the metadata extracted from it"""
    __tablename__ = "training_documents"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(..., sa_column=Column(Text, nullable=False))
    original_content: str = Field(..., sa_column=Column(Text, nullable=False))
    source_links: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    status: DocumentStatusEnum = Field(default=DocumentStatusEnum.pending, nullable=False, index=True)
    submitter_email: Optional[str] = Field(default=None)
    trained: bool = Field(default=False, nullable=False)
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))


class TrainingData(SQLModel, table=True):
    """One version of a question/answer pair; only the latest version is current"""
    __tablename__ = "training_data"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    training_document_id: UUID = Field(..., foreign_key="training_documents.id", index=True, nullable=False)
    question: str = Field(..., sa_column=Column(Text, nullable=False))
    answer: str = Field(..., sa_column=Column(Text, nullable=False))
    version: int = Field(default=1, nullable=False, description="Monotonically increasing per Q&A lineage")
    is_current: bool = Field(default=True, nullable=False)
    parent_id: Optional[UUID] = Field(default=None, foreign_key="training_data.id", description="Previous version")
    change_reason: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
