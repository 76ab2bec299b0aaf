"""Directory and document creation on the real filesystem.

The core validates names and keeps its own bookkeeping (store + corpus tree);
the OS-level work belongs to a ``FileSystemGateway``. Gateway failures are
surfaced unchanged so callers can tell "unsupported" (offer a manual
fallback) from "refused".
"""

from __future__ import annotations

import asyncio
import logging
import re
from pathlib import Path
from typing import Protocol

from dodo.core.errors import AlreadyExists, InvalidName, NotSupported, PermissionDenied
from dodo.models.base import utcnow
from dodo.models.corpus import DirectoryInfo
from dodo.models.document import Document
from dodo.services.corpus import Corpus
from dodo.services.documents import DocumentStore

logger = logging.getLogger(__name__)

# Letters (any script), digits, underscore and hyphen
NAME_PATTERN = re.compile(r"^[\w-]+$")
DOCUMENT_SUFFIX = ".md"


class FileSystemGateway(Protocol):
    async def create_directory(self, path: str) -> None: ...

    async def create_file(self, path: str, content: str) -> None: ...


class UnavailableFileSystem:
    """Gateway used when the corpus is read-only."""

    async def create_directory(self, path: str) -> None:
        raise NotSupported("Creating directories is not supported here")

    async def create_file(self, path: str, content: str) -> None:
        raise NotSupported("Creating files is not supported here")


class LocalFileSystem:
    """Writes directly beneath the corpus root."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    async def create_directory(self, path: str) -> None:
        await asyncio.to_thread(self._mkdir, self.root / path)

    async def create_file(self, path: str, content: str) -> None:
        await asyncio.to_thread(self._write_new, self.root / path, content)

    @staticmethod
    def _mkdir(target: Path) -> None:
        try:
            target.mkdir(parents=True, exist_ok=False)
        except FileExistsError as exc:
            raise AlreadyExists(f"{target.name} already exists") from exc
        except PermissionError as exc:
            raise PermissionDenied(f"Not allowed to create {target}") from exc

    @staticmethod
    def _write_new(target: Path, content: str) -> None:
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open("x", encoding="utf-8") as fh:
                fh.write(content)
        except FileExistsError as exc:
            raise AlreadyExists(f"{target.name} already exists") from exc
        except PermissionError as exc:
            raise PermissionDenied(f"Not allowed to create {target}") from exc


def validate_name(name: str) -> str:
    stripped = name.strip()
    if not stripped:
        raise InvalidName("Name must not be empty")
    if not NAME_PATTERN.match(stripped):
        raise InvalidName(f"Invalid name {name!r}: use letters, digits, '_' or '-'")
    return stripped


def render_template(title: str) -> str:
    """Starter content for a freshly created document."""
    created = utcnow().strftime("%Y-%m-%d %H:%M UTC")
    return (
        f"# {title}\n\n"
        "Start writing here...\n\n"
        "## Overview\n\n"
        "## Details\n\n"
        "## Summary\n\n"
        "---\n\n"
        f"*Created: {created}*\n"
    )


class FileCreationService:
    def __init__(self, gateway: FileSystemGateway, corpus: Corpus, documents: DocumentStore) -> None:
        self._gateway = gateway
        self._corpus = corpus
        self._documents = documents

    async def create_directory(self, name: str) -> DirectoryInfo:
        dirname = validate_name(name)
        await self._call(self._gateway.create_directory(dirname), dirname)
        self._corpus.add_directory(dirname)
        logger.info("Created directory %s", dirname)
        return DirectoryInfo(name=dirname, path=dirname, file_count=0)

    async def create_document(self, directory: str, name: str) -> Document:
        """Create ``<directory>/<name>.md`` on disk and adopt it into the store."""
        segments = [validate_name(s) for s in directory.split("/") if s.strip()]
        filename = name.strip()
        base = filename.removesuffix(DOCUMENT_SUFFIX)
        validate_name(base)
        filename = f"{base}{DOCUMENT_SUFFIX}"
        path = "/".join([*segments, filename])

        if await self._documents.get_by_path(path) is not None:
            raise AlreadyExists(f"A document already exists at {path}")

        content = render_template(base)
        await self._call(self._gateway.create_file(path, content), path)
        return await self._corpus.adopt_created(path, content)

    @staticmethod
    async def _call(operation, target: str) -> None:
        try:
            await operation
        except (NotSupported, PermissionDenied) as exc:
            logger.warning("Filesystem refused %s: %s", target, exc.message)
            raise
