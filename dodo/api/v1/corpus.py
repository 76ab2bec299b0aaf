"""Corpus tree, path resolution and file creation."""

from fastapi import APIRouter, status

from dodo.api.deps import CorpusDep, Files
from dodo.models.corpus import (
    CorpusDocumentCreate,
    DirectoryCreate,
    DirectoryInfo,
    FileNode,
    NameAvailability,
    NameKind,
    ResolveRequest,
)
from dodo.models.document import DocumentRead

router = APIRouter(prefix="/corpus", tags=["corpus"])


@router.get("/tree", response_model=list[FileNode])
async def get_tree(corpus: CorpusDep) -> list[FileNode]:
    return await corpus.tree()


@router.post("/refresh", response_model=list[FileNode])
async def refresh_tree(corpus: CorpusDep) -> list[FileNode]:
    return await corpus.refresh()


@router.post("/resolve", response_model=DocumentRead)
async def resolve_path(body: ResolveRequest, corpus: CorpusDep) -> DocumentRead:
    """Open a corpus file: returns its document, adopting it on first use."""
    doc = await corpus.resolve(body.path)
    return DocumentRead.model_validate(doc, from_attributes=True)


@router.get("/directories", response_model=list[DirectoryInfo])
async def list_directories(corpus: CorpusDep) -> list[DirectoryInfo]:
    return await corpus.list_directories()


@router.get("/availability", response_model=NameAvailability)
async def check_name(
    corpus: CorpusDep,
    name: str,
    kind: NameKind = NameKind.DOCUMENT,
    directory: str | None = None,
) -> NameAvailability:
    available = await corpus.is_name_available(name, kind, directory)
    return NameAvailability(name=name, available=available)


@router.post("/directories", response_model=DirectoryInfo, status_code=status.HTTP_201_CREATED)
async def create_directory(body: DirectoryCreate, files: Files) -> DirectoryInfo:
    return await files.create_directory(body.name)


@router.post("/documents", response_model=DocumentRead, status_code=status.HTTP_201_CREATED)
async def create_corpus_document(body: CorpusDocumentCreate, files: Files) -> DocumentRead:
    doc = await files.create_document(body.directory, body.name)
    return DocumentRead.model_validate(doc, from_attributes=True)
