"""FastAPI dependencies resolving the stores opened at startup."""

from typing import Annotated

from fastapi import Depends, Request

from dodo.services.container import Services
from dodo.services.corpus import Corpus
from dodo.services.documents import DocumentStore
from dodo.services.filesystem import FileCreationService
from dodo.services.suggestions import SuggestionStore
from dodo.services.versions import VersionStore


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_documents(services: Annotated[Services, Depends(get_services)]) -> DocumentStore:
    return services.documents


def get_versions(services: Annotated[Services, Depends(get_services)]) -> VersionStore:
    return services.versions


def get_suggestions(services: Annotated[Services, Depends(get_services)]) -> SuggestionStore:
    return services.suggestions


def get_corpus(services: Annotated[Services, Depends(get_services)]) -> Corpus:
    return services.corpus


def get_files(services: Annotated[Services, Depends(get_services)]) -> FileCreationService:
    return services.files


# Typed shorthand for use in route signatures
Documents = Annotated[DocumentStore, Depends(get_documents)]
Versions = Annotated[VersionStore, Depends(get_versions)]
Suggestions = Annotated[SuggestionStore, Depends(get_suggestions)]
CorpusDep = Annotated[Corpus, Depends(get_corpus)]
Files = Annotated[FileCreationService, Depends(get_files)]
