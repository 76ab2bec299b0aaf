"""Wires the stores around one explicitly opened database."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from dodo.core.config import Settings
from dodo.core.database import Database
from dodo.services.corpus import Corpus, CorpusLoader, FilesystemCorpusLoader
from dodo.services.documents import DocumentStore
from dodo.services.filesystem import (
    FileCreationService,
    FileSystemGateway,
    LocalFileSystem,
    UnavailableFileSystem,
)
from dodo.services.suggestions import SuggestionStore
from dodo.services.versions import VersionStore

logger = logging.getLogger(__name__)


@dataclass
class Services:
    db: Database
    documents: DocumentStore
    versions: VersionStore
    suggestions: SuggestionStore
    corpus: Corpus
    files: FileCreationService

    @classmethod
    async def open(
        cls,
        settings: Settings,
        *,
        loader: CorpusLoader | None = None,
        filesystem: FileSystemGateway | None = None,
    ) -> Services:
        db = Database(settings.database_url)
        await db.open()

        versions = VersionStore(db, default_limit=settings.version_history_limit)
        documents = DocumentStore(
            db,
            versions,
            reject_duplicate_paths=settings.reject_duplicate_paths,
        )
        if loader is None:
            loader = FilesystemCorpusLoader(settings.corpus_root, settings.corpus_pattern)
        if filesystem is None:
            filesystem = (
                LocalFileSystem(settings.corpus_root)
                if settings.corpus_writable
                else UnavailableFileSystem()
            )
        corpus = Corpus(loader, documents)

        logger.info("Document store opened at %s", settings.database_url)
        return cls(
            db=db,
            documents=documents,
            versions=versions,
            suggestions=SuggestionStore(db),
            corpus=corpus,
            files=FileCreationService(filesystem, corpus, documents),
        )

    async def close(self) -> None:
        await self.db.close()
