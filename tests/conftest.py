"""Shared test fixtures: fresh in-memory store per test + test client."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from dodo.core.database import Database
from dodo.main import app
from dodo.services.container import Services
from dodo.services.corpus import Corpus, StaticCorpusLoader
from dodo.services.documents import DocumentStore
from dodo.services.filesystem import FileCreationService, UnavailableFileSystem
from dodo.services.suggestions import SuggestionStore
from dodo.services.versions import VersionStore

CORPUS_FILES = {
    "01-business-modules/user-system.md": "# User system\n\nLogin and signup. #auth #users",
    "01-business-modules/billing.md": "# Billing\n\nInvoices. #payments",
    "02-tech-design/api/overview.md": "# API overview\n\nREST endpoints. #api",
    "README.md": "# Project docs\n\nStart here.",
}


@pytest.fixture
async def db() -> AsyncGenerator[Database, None]:
    async with Database("sqlite+aiosqlite://") as database:
        yield database


@pytest.fixture
def versions(db) -> VersionStore:
    return VersionStore(db)


@pytest.fixture
def documents(db, versions) -> DocumentStore:
    return DocumentStore(db, versions)


@pytest.fixture
def suggestions(db) -> SuggestionStore:
    return SuggestionStore(db)


@pytest.fixture
def loader() -> StaticCorpusLoader:
    return StaticCorpusLoader(dict(CORPUS_FILES))


@pytest.fixture
def corpus(loader, documents) -> Corpus:
    return Corpus(loader, documents)


@pytest.fixture
def services(db, documents, versions, suggestions, corpus) -> Services:
    return Services(
        db=db,
        documents=documents,
        versions=versions,
        suggestions=suggestions,
        corpus=corpus,
        files=FileCreationService(UnavailableFileSystem(), corpus, documents),
    )


@pytest.fixture
async def client(services) -> AsyncGenerator[AsyncClient, None]:
    """HTTPX async test client bound to the per-test services."""
    app.state.services = services

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    del app.state.services
