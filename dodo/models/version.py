"""DocumentVersion model: an immutable snapshot taken before an overwrite."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Index, Text
from sqlmodel import Column, Field, SQLModel

from dodo.models.base import Author, new_uuid, utcnow


class DocumentVersion(SQLModel, table=True):
    __tablename__ = "document_versions"
    __table_args__ = (
        Index("ix_document_versions_document_timestamp", "document_id", "timestamp"),
    )

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    # Weak back-reference; versions outlive their document
    document_id: uuid.UUID = Field(nullable=False, index=True)

    content: str = Field(default="", sa_column=Column(Text, nullable=False, server_default=""))
    timestamp: datetime = Field(default_factory=utcnow, sa_type=DateTime, nullable=False, index=True)
    author: Author = Field(default=Author.HUMAN, nullable=False)
    message: str | None = Field(default=None, max_length=1000)

    # Insertion order, assigned by the store; breaks timestamp ties
    seq: int = Field(default=0, nullable=False)


# ── Pydantic schemas ─────────────────────────────────────────

class DocumentVersionRead(SQLModel):
    id: uuid.UUID
    document_id: uuid.UUID
    content: str
    timestamp: datetime
    author: Author
    message: str | None = None
