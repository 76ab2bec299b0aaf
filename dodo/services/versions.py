"""Version history store: append-only snapshots keyed by document id."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from dodo.core.database import Database
from dodo.core.errors import ValidationError
from dodo.models.document import Document
from dodo.models.version import DocumentVersion

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10


class VersionStore:
    def __init__(self, db: Database, default_limit: int = DEFAULT_LIMIT) -> None:
        self._db = db
        self.default_limit = default_limit

    async def append(self, version: DocumentVersion) -> DocumentVersion:
        """Insert a new immutable version record."""
        async with self._db.session() as session:
            await self.stage(session, version)
            await session.commit()
            await session.refresh(version)
        return version

    async def stage(self, session: AsyncSession, version: DocumentVersion) -> DocumentVersion:
        """Add ``version`` to an open transaction and flush it.

        Used by the document store so the snapshot commits together with the
        overwrite it protects.
        """
        result = await session.execute(select(func.max(DocumentVersion.seq)))
        version.seq = (result.scalar_one_or_none() or 0) + 1
        session.add(version)
        await session.flush()
        logger.debug("Staged version %s of document %s (seq %d)", version.id, version.document_id, version.seq)
        return version

    async def list_by_document(
        self,
        document_id: uuid.UUID,
        limit: int | None = None,
    ) -> list[DocumentVersion]:
        """Newest-first versions of one document, at most ``limit`` of them."""
        if limit is None:
            limit = self.default_limit
        if limit < 0:
            raise ValidationError(f"limit must be non-negative, got {limit}")
        if limit == 0:
            return []

        stmt = (
            select(DocumentVersion)
            .where(DocumentVersion.document_id == document_id)
            .order_by(
                DocumentVersion.timestamp.desc(),  # type: ignore[union-attr]
                DocumentVersion.seq.desc(),  # type: ignore[union-attr]
            )
            .limit(limit)
        )
        async with self._db.session() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())


def snapshot_of(document: Document, message: str | None = None) -> DocumentVersion:
    """Version record capturing ``document`` as it is right now."""
    return DocumentVersion(
        document_id=document.id,
        content=document.content,
        timestamp=document.last_modified,
        author=document.modified_by,
        message=message,
    )
