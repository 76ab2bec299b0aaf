"""Corpus tree values: derived from discovered paths, never persisted."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class NodeType(StrEnum):
    FILE = "file"
    DIR = "dir"


class NameKind(StrEnum):
    DIRECTORY = "directory"
    DOCUMENT = "document"


class FileNode(BaseModel):
    name: str
    path: str
    type: NodeType
    children: list[FileNode] | None = None


class DirectoryInfo(BaseModel):
    name: str
    path: str
    file_count: int


# ── Request / response schemas ───────────────────────────────

class ResolveRequest(BaseModel):
    path: str


class DirectoryCreate(BaseModel):
    name: str


class CorpusDocumentCreate(BaseModel):
    directory: str = ""
    name: str


class NameAvailability(BaseModel):
    name: str
    available: bool
