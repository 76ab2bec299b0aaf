"""Suggestion status transitions."""

import uuid

from fastapi import APIRouter

from dodo.api.deps import Suggestions
from dodo.models.suggestion import SuggestionRead, SuggestionStatusUpdate

router = APIRouter(prefix="/suggestions", tags=["suggestions"])


@router.patch("/{suggestion_id}", response_model=SuggestionRead)
async def update_suggestion_status(
    suggestion_id: uuid.UUID,
    body: SuggestionStatusUpdate,
    suggestions: Suggestions,
) -> SuggestionRead:
    suggestion = await suggestions.update_status(suggestion_id, body.status, body.final_content)
    return SuggestionRead.model_validate(suggestion, from_attributes=True)
