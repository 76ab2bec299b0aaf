"""Import all models so SQLModel.metadata picks them up."""

from dodo.models.base import Author
from dodo.models.corpus import (
    CorpusDocumentCreate,
    DirectoryCreate,
    DirectoryInfo,
    FileNode,
    NameAvailability,
    NameKind,
    NodeType,
    ResolveRequest,
)
from dodo.models.document import (
    ConsensusUpdate,
    Document,
    DocumentCreate,
    DocumentRead,
    DocumentUpdate,
)
from dodo.models.suggestion import (
    AISuggestion,
    SuggestionCreate,
    SuggestionRead,
    SuggestionStatus,
    SuggestionStatusUpdate,
)
from dodo.models.version import DocumentVersion, DocumentVersionRead

__all__ = [
    "AISuggestion",
    "Author",
    "ConsensusUpdate",
    "CorpusDocumentCreate",
    "DirectoryCreate",
    "DirectoryInfo",
    "Document",
    "DocumentCreate",
    "DocumentRead",
    "DocumentUpdate",
    "DocumentVersion",
    "DocumentVersionRead",
    "FileNode",
    "NameAvailability",
    "NameKind",
    "NodeType",
    "ResolveRequest",
    "SuggestionCreate",
    "SuggestionRead",
    "SuggestionStatus",
    "SuggestionStatusUpdate",
]
