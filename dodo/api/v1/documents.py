"""Document CRUD, search, version history and per-document suggestions."""

import uuid

from fastapi import APIRouter, Query, status

from dodo.api.deps import Documents, Suggestions, Versions
from dodo.core.errors import NotFound
from dodo.models.document import (
    ConsensusUpdate,
    Document,
    DocumentCreate,
    DocumentRead,
    DocumentUpdate,
)
from dodo.models.suggestion import AISuggestion, SuggestionCreate, SuggestionRead
from dodo.models.version import DocumentVersion, DocumentVersionRead

router = APIRouter(prefix="/documents", tags=["documents"])


def _to_read(doc: Document) -> DocumentRead:
    return DocumentRead.model_validate(doc, from_attributes=True)


def _version_to_read(version: DocumentVersion) -> DocumentVersionRead:
    return DocumentVersionRead.model_validate(version, from_attributes=True)


def _suggestion_to_read(suggestion: AISuggestion) -> SuggestionRead:
    return SuggestionRead.model_validate(suggestion, from_attributes=True)


@router.post("", response_model=DocumentRead, status_code=status.HTTP_201_CREATED)
async def create_document(body: DocumentCreate, documents: Documents) -> DocumentRead:
    doc = await documents.create(
        body.path,
        body.title,
        body.content,
        is_ai_proposal=body.is_ai_proposal,
    )
    return _to_read(doc)


@router.get("", response_model=list[DocumentRead])
async def list_documents(documents: Documents, q: str | None = None) -> list[DocumentRead]:
    """All documents, or those matching ``q`` in title, content or tags."""
    docs = await documents.search(q) if q is not None else await documents.list()
    return [_to_read(d) for d in docs]


@router.get("/by-path", response_model=DocumentRead)
async def get_document_by_path(documents: Documents, path: str) -> DocumentRead:
    doc = await documents.get_by_path(path)
    if doc is None:
        raise NotFound(f"No document at {path}")
    return _to_read(doc)


@router.get("/{document_id}", response_model=DocumentRead)
async def get_document(document_id: uuid.UUID, documents: Documents) -> DocumentRead:
    return _to_read(await _get_or_404(document_id, documents))


@router.patch("/{document_id}", response_model=DocumentRead)
async def update_document(
    document_id: uuid.UUID,
    body: DocumentUpdate,
    documents: Documents,
) -> DocumentRead:
    doc = await documents.update(
        document_id,
        title=body.title,
        content=body.content,
        tags=body.tags,
        modified_by=body.modified_by,
    )
    return _to_read(doc)


@router.put("/{document_id}/consensus", response_model=DocumentRead)
async def set_consensus(
    document_id: uuid.UUID,
    body: ConsensusUpdate,
    documents: Documents,
) -> DocumentRead:
    return _to_read(await documents.set_consensus(document_id, body.content))


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(document_id: uuid.UUID, documents: Documents) -> None:
    await documents.delete(document_id)


# ── Versions ──────────────────────────────────────────────────


@router.get("/{document_id}/versions", response_model=list[DocumentVersionRead])
async def list_versions(
    document_id: uuid.UUID,
    versions: Versions,
    limit: int | None = Query(default=None, ge=0, le=500),
) -> list[DocumentVersionRead]:
    return [_version_to_read(v) for v in await versions.list_by_document(document_id, limit)]


# ── Suggestions ───────────────────────────────────────────────


@router.post(
    "/{document_id}/suggestions",
    response_model=SuggestionRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_suggestion(
    document_id: uuid.UUID,
    body: SuggestionCreate,
    documents: Documents,
    suggestions: Suggestions,
) -> SuggestionRead:
    await _get_or_404(document_id, documents)
    suggestion = await suggestions.create(document_id, body.suggested_content, body.ai_model)
    return _suggestion_to_read(suggestion)


@router.get("/{document_id}/suggestions", response_model=list[SuggestionRead])
async def list_suggestions(
    document_id: uuid.UUID,
    suggestions: Suggestions,
) -> list[SuggestionRead]:
    return [_suggestion_to_read(s) for s in await suggestions.list_by_document(document_id)]


# ── Internal helper ───────────────────────────────────────────

async def _get_or_404(document_id: uuid.UUID, documents) -> Document:
    doc = await documents.get(document_id)
    if doc is None:
        raise NotFound(f"Document not found: {document_id}")
    return doc
