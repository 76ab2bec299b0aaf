"""Document store: CRUD, search and snapshot-before-overwrite updates.

Every mutation runs in its own transaction. ``update`` stages the snapshot of
the pre-update record before touching the document, and both are committed
together, so new content never exists without its predecessor on record.
"""

from __future__ import annotations

import logging
import uuid

from sqlmodel import select

from dodo.core.database import Database
from dodo.core.errors import NotFound, PathConflict, ValidationError
from dodo.models.base import Author, next_timestamp, utcnow
from dodo.models.document import Document
from dodo.services.tags import extract_tags, merge_tags
from dodo.services.tree import normalize_path
from dodo.services.versions import VersionStore, snapshot_of

logger = logging.getLogger(__name__)

WELCOME_PATH = "welcome"
WELCOME_TITLE = "Welcome to Dodo"
WELCOME_CONTENT = """# Welcome to Dodo

A document-first workspace where people and AI agree on a design before code is written.

## Getting started

1. **Write**: create a document from the sidebar
2. **Suggest**: ask for an AI suggestion on the open document
3. **Review**: accept, reject or rework the suggestion

Tag documents inline, e.g. #getting_started.
"""


class DocumentStore:
    def __init__(
        self,
        db: Database,
        versions: VersionStore,
        *,
        reject_duplicate_paths: bool = False,
    ) -> None:
        self._db = db
        self._versions = versions
        self.reject_duplicate_paths = reject_duplicate_paths

    # ── Write operations ──────────────────────────────────────

    async def create(
        self,
        path: str,
        title: str,
        content: str,
        *,
        is_ai_proposal: bool = False,
        modified_by: Author = Author.HUMAN,
    ) -> Document:
        """Persist a new document with tags derived from ``content``."""
        path = normalize_path(path)
        if not path:
            raise ValidationError("Document path must not be empty")
        if self.reject_duplicate_paths and await self.get_by_path(path) is not None:
            raise PathConflict(f"A document already exists at {path!r}")

        now = utcnow()
        doc = Document(
            path=path,
            title=title,
            content=content,
            tags=extract_tags(content),
            is_ai_proposal=is_ai_proposal,
            created_at=now,
            last_modified=now,
            modified_by=modified_by,
        )
        async with self._db.session() as session:
            session.add(doc)
            await session.commit()
            await session.refresh(doc)
        logger.info("Created document %s at %s", doc.id, path)
        return doc

    async def update(
        self,
        doc_id: uuid.UUID,
        *,
        title: str | None = None,
        content: str | None = None,
        tags: list[str] | None = None,
        modified_by: Author = Author.HUMAN,
    ) -> Document:
        """Apply a partial update, snapshotting the old content if it changes."""
        async with self._db.session() as session:
            doc = await session.get(Document, doc_id)
            if doc is None:
                raise NotFound(f"Document not found: {doc_id}")

            if content is not None and content != doc.content:
                await self._versions.stage(session, snapshot_of(doc))

            if title is not None:
                doc.title = title
            if content is not None:
                doc.content = content
            new_tags = merge_tags(tags, content)
            if new_tags is not None:
                doc.tags = new_tags
            doc.modified_by = modified_by
            doc.last_modified = next_timestamp(doc.last_modified)

            session.add(doc)
            await session.commit()
            await session.refresh(doc)
        return doc

    async def set_consensus(self, doc_id: uuid.UUID, content: str | None) -> Document:
        """Record (or clear) the content both sides agreed on."""
        async with self._db.session() as session:
            doc = await session.get(Document, doc_id)
            if doc is None:
                raise NotFound(f"Document not found: {doc_id}")
            doc.consensus_version = content
            if content is not None:
                # An agreed version settles the proposal
                doc.is_ai_proposal = False
            doc.last_modified = next_timestamp(doc.last_modified)
            session.add(doc)
            await session.commit()
            await session.refresh(doc)
        return doc

    async def delete(self, doc_id: uuid.UUID) -> None:
        """Delete a document; unknown ids are ignored. Versions and suggestions stay."""
        async with self._db.session() as session:
            doc = await session.get(Document, doc_id)
            if doc is None:
                return
            await session.delete(doc)
            await session.commit()
        logger.info("Deleted document %s", doc_id)

    async def seed_welcome(self) -> Document | None:
        """Create the welcome document when the store is empty."""
        if await self.list():
            return None
        return await self.create(WELCOME_PATH, WELCOME_TITLE, WELCOME_CONTENT)

    # ── Read operations ───────────────────────────────────────

    async def get(self, doc_id: uuid.UUID) -> Document | None:
        async with self._db.session() as session:
            return await session.get(Document, doc_id)

    async def get_by_path(self, path: str) -> Document | None:
        """First document at ``path``; the earliest created wins on duplicates."""
        stmt = (
            select(Document)
            .where(Document.path == normalize_path(path))
            .order_by(Document.created_at.asc(), Document.id.asc())  # type: ignore[union-attr]
            .limit(1)
        )
        async with self._db.session() as session:
            result = await session.execute(stmt)
            return result.scalars().first()

    async def list(self) -> list[Document]:
        async with self._db.session() as session:
            result = await session.execute(select(Document))
            return list(result.scalars().all())

    async def search(self, query: str) -> list[Document]:
        """Case-insensitive substring match on title, content or any tag."""
        docs = await self.list()
        if not query.strip():
            return docs

        needle = query.lower()
        return [
            doc
            for doc in docs
            if needle in doc.title.lower()
            or needle in doc.content.lower()
            or any(needle in tag.lower() for tag in doc.tags)
        ]
