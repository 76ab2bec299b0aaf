"""AISuggestion model: a proposed content change awaiting disposition."""

import uuid
from datetime import datetime
from enum import StrEnum

from sqlalchemy import DateTime, Text
from sqlmodel import Column, Field, SQLModel

from dodo.models.base import new_uuid, utcnow


class SuggestionStatus(StrEnum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    MODIFIED = "modified"


class AISuggestion(SQLModel, table=True):
    __tablename__ = "ai_suggestions"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    document_id: uuid.UUID = Field(nullable=False, index=True)

    suggested_content: str = Field(sa_column=Column(Text, nullable=False))
    suggestion_time: datetime = Field(default_factory=utcnow, sa_type=DateTime, nullable=False, index=True)
    # Free-form label, e.g. "claude-3.5-sonnet"
    ai_model: str = Field(default="", max_length=200)

    status: SuggestionStatus = Field(default=SuggestionStatus.PENDING)
    final_content: str | None = Field(default=None, sa_column=Column(Text, nullable=True))


# ── Pydantic schemas ─────────────────────────────────────────

class SuggestionCreate(SQLModel):
    suggested_content: str
    ai_model: str = Field(default="", max_length=200)


class SuggestionStatusUpdate(SQLModel):
    status: SuggestionStatus
    final_content: str | None = None


class SuggestionRead(SQLModel):
    id: uuid.UUID
    document_id: uuid.UUID
    suggested_content: str
    suggestion_time: datetime
    ai_model: str
    status: SuggestionStatus
    final_content: str | None = None
