"""Suggestion store: AI-proposed edits and their review status."""

from __future__ import annotations

import logging
import uuid

from sqlmodel import select

from dodo.core.database import Database
from dodo.core.errors import NotFound, ValidationError
from dodo.models.suggestion import AISuggestion, SuggestionStatus

logger = logging.getLogger(__name__)


class SuggestionStore:
    def __init__(self, db: Database) -> None:
        self._db = db

    async def create(
        self,
        document_id: uuid.UUID,
        suggested_content: str,
        ai_model: str,
    ) -> AISuggestion:
        suggestion = AISuggestion(
            document_id=document_id,
            suggested_content=suggested_content,
            ai_model=ai_model,
            status=SuggestionStatus.PENDING,
        )
        async with self._db.session() as session:
            session.add(suggestion)
            await session.commit()
            await session.refresh(suggestion)
        return suggestion

    async def update_status(
        self,
        suggestion_id: uuid.UUID,
        status: SuggestionStatus | str,
        final_content: str | None = None,
    ) -> AISuggestion:
        """Move a suggestion to ``status``; any transition is allowed.

        ``final_content`` is recorded when given and left untouched otherwise.
        """
        try:
            new_status = SuggestionStatus(status)
        except ValueError as exc:
            raise ValidationError(f"Unknown suggestion status: {status!r}") from exc

        async with self._db.session() as session:
            suggestion = await session.get(AISuggestion, suggestion_id)
            if suggestion is None:
                raise NotFound(f"Suggestion not found: {suggestion_id}")

            previous = suggestion.status
            suggestion.status = new_status
            if final_content is not None:
                suggestion.final_content = final_content
            session.add(suggestion)
            await session.commit()
            await session.refresh(suggestion)

        logger.info("Suggestion %s: %s -> %s", suggestion_id, previous, new_status)
        return suggestion

    async def get(self, suggestion_id: uuid.UUID) -> AISuggestion | None:
        async with self._db.session() as session:
            return await session.get(AISuggestion, suggestion_id)

    async def list_by_document(self, document_id: uuid.UUID) -> list[AISuggestion]:
        stmt = (
            select(AISuggestion)
            .where(AISuggestion.document_id == document_id)
            .order_by(AISuggestion.suggestion_time.asc())  # type: ignore[union-attr]
        )
        async with self._db.session() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())
