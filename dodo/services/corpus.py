"""Read-only corpus overlay and its reconciliation with the document store.

The corpus is the set of markdown files discovered at startup. Opening one
adopts it into the store the first time; afterwards the stored document is
the single source of truth and the file on disk is never read again for it.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Protocol

from dodo.core.errors import NotFound, ValidationError
from dodo.models.corpus import DirectoryInfo, FileNode, NameKind, NodeType
from dodo.models.document import Document
from dodo.services.documents import DocumentStore
from dodo.services.tree import build_tree, count_files, display_name, normalize_path

logger = logging.getLogger(__name__)


class CorpusLoader(Protocol):
    async def discover(self) -> list[str]:
        """Corpus-relative paths of every known file (no contents)."""
        ...

    async def load(self, path: str) -> str:
        """Text content of one file; raises NotFound if it is gone."""
        ...


class FilesystemCorpusLoader:
    """Discovers files under ``root`` matching ``pattern``."""

    def __init__(self, root: Path | str, pattern: str = "**/*.md") -> None:
        self.root = Path(root)
        self.pattern = pattern

    async def discover(self) -> list[str]:
        return await asyncio.to_thread(self._scan)

    def _scan(self) -> list[str]:
        if not self.root.is_dir():
            logger.warning("Corpus root %s does not exist", self.root)
            return []
        return sorted(
            p.relative_to(self.root).as_posix()
            for p in self.root.glob(self.pattern)
            if p.is_file()
        )

    async def load(self, path: str) -> str:
        target = self._locate(path)
        try:
            return await asyncio.to_thread(target.read_text, encoding="utf-8")
        except (FileNotFoundError, IsADirectoryError) as exc:
            raise NotFound(f"Corpus file not found: {path}") from exc

    def _locate(self, path: str) -> Path:
        rel = normalize_path(path)
        if not rel or ".." in rel.split("/"):
            raise ValidationError(f"Invalid corpus path: {path!r}")
        return self.root / rel


class StaticCorpusLoader:
    """In-memory corpus, e.g. files bundled with the application."""

    def __init__(self, files: dict[str, str]) -> None:
        self.files = {normalize_path(path): content for path, content in files.items()}

    async def discover(self) -> list[str]:
        return sorted(self.files)

    async def load(self, path: str) -> str:
        try:
            return self.files[normalize_path(path)]
        except KeyError:
            raise NotFound(f"Corpus file not found: {path}") from None


class Corpus:
    """Tree view of the corpus plus path resolution into the document store."""

    def __init__(self, loader: CorpusLoader, documents: DocumentStore) -> None:
        self._loader = loader
        self._documents = documents
        self._paths: list[str] = []
        self._added_files: set[str] = set()
        self._directories: set[str] = set()
        self._tree: list[FileNode] | None = None
        self._inflight: dict[str, asyncio.Future[Document]] = {}

    # ── Tree ──────────────────────────────────────────────────

    async def tree(self) -> list[FileNode]:
        """The tree built for this session; discovered on first use."""
        if self._tree is None:
            return await self.refresh()
        return self._tree

    async def refresh(self) -> list[FileNode]:
        """Re-run discovery and rebuild the tree."""
        self._paths = await self._loader.discover()
        self._rebuild()
        logger.info("Corpus tree built from %d files", len(self._paths))
        return self._tree or []

    def add_directory(self, path: str) -> None:
        """Show a directory created this session, even while it is empty."""
        self._directories.add(normalize_path(path))
        if self._tree is not None:
            self._rebuild()

    def add_file(self, path: str) -> None:
        self._added_files.add(normalize_path(path))
        if self._tree is not None:
            self._rebuild()

    def _rebuild(self) -> None:
        self._tree = build_tree([*self._paths, *self._added_files], self._directories)

    async def list_directories(self) -> list[DirectoryInfo]:
        """Top-level directories with the number of files beneath each."""
        return [
            DirectoryInfo(name=node.name, path=node.path, file_count=count_files(node))
            for node in await self.tree()
            if node.type == NodeType.DIR
        ]

    async def is_name_available(
        self,
        name: str,
        kind: NameKind,
        directory: str | None = None,
    ) -> bool:
        nodes = await self.tree()
        if kind == NameKind.DIRECTORY:
            return not any(n.type == NodeType.DIR and n.name == name for n in nodes)

        siblings = _find_children(nodes, normalize_path(directory or ""))
        if siblings is None:
            return True
        wanted = display_name(name if name.endswith(".md") else f"{name}.md")
        return not any(n.type == NodeType.FILE and n.name == wanted for n in siblings)

    # ── Resolution ────────────────────────────────────────────

    async def resolve(self, path: str) -> Document:
        """Map a corpus path to its one canonical document, adopting it if needed.

        Concurrent calls for the same path share one in-flight resolution.
        """
        return await self._join(path)

    async def adopt_created(self, path: str, content: str) -> Document:
        """Show a file written this session and adopt it with known ``content``.

        Shares the in-flight entry with ``resolve`` for the same path.
        """
        self.add_file(path)
        return await self._join(path, content)

    async def _join(self, path: str, content: str | None = None) -> Document:
        key = normalize_path(path)
        if not key:
            raise ValidationError("Corpus path must not be empty")

        pending = self._inflight.get(key)
        if pending is None:
            pending = asyncio.ensure_future(self._adopt(key, content))
            self._inflight[key] = pending
            pending.add_done_callback(lambda _f, k=key: self._inflight.pop(k, None))
        return await asyncio.shield(pending)

    async def _adopt(self, path: str, content: str | None = None) -> Document:
        existing = await self._documents.get_by_path(path)
        if existing is not None:
            return existing

        if content is None:
            content = await self._loader.load(path)
        doc = await self._documents.create(path, display_name(path), content)
        logger.info("Adopted corpus file %s as document %s", path, doc.id)
        return doc


def _find_children(nodes: list[FileNode], directory: str) -> list[FileNode] | None:
    """Children of the directory at ``directory`` (top level for ``""``)."""
    if not directory:
        return nodes
    for node in nodes:
        if node.type != NodeType.DIR:
            continue
        if node.path == directory:
            return node.children or []
        if directory.startswith(f"{node.path}/"):
            return _find_children(node.children or [], directory)
    return None
