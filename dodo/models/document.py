"""Document model: a persisted, user/AI-editable unit of content."""

import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime, Text
from sqlmodel import Column, Field, SQLModel

from dodo.models.base import Author, new_uuid, utcnow


class Document(SQLModel, table=True):
    __tablename__ = "documents"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    # Logical location, e.g. "01-business-modules/user-system.md"
    path: str = Field(max_length=1024, nullable=False, index=True)

    title: str = Field(default="", max_length=500)
    content: str = Field(default="", sa_column=Column(Text, nullable=False, server_default=""))
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    # AI-originated draft awaiting human consensus
    is_ai_proposal: bool = Field(default=False)
    consensus_version: str | None = Field(default=None, sa_column=Column(Text, nullable=True))

    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime, nullable=False)
    last_modified: datetime = Field(default_factory=utcnow, sa_type=DateTime, nullable=False, index=True)
    modified_by: Author = Field(default=Author.HUMAN, nullable=False)


# ── Pydantic schemas ─────────────────────────────────────────

class DocumentCreate(SQLModel):
    path: str = Field(min_length=1, max_length=1024)
    title: str = Field(default="", max_length=500)
    content: str = ""
    is_ai_proposal: bool = False


class DocumentUpdate(SQLModel):
    title: str | None = Field(default=None, max_length=500)
    content: str | None = None
    tags: list[str] | None = None
    modified_by: Author = Author.HUMAN


class ConsensusUpdate(SQLModel):
    content: str | None = None


class DocumentRead(SQLModel):
    id: uuid.UUID
    path: str
    title: str
    content: str
    tags: list[str]
    is_ai_proposal: bool
    consensus_version: str | None = None
    created_at: datetime
    last_modified: datetime
    modified_by: Author
