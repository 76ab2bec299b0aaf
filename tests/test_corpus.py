"""Corpus tree and path resolution tests."""

import asyncio

import pytest

from dodo.core.errors import NotFound, ValidationError
from dodo.models.corpus import NameKind, NodeType
from dodo.services.corpus import Corpus, FilesystemCorpusLoader, StaticCorpusLoader


@pytest.mark.asyncio
async def test_tree_is_built_from_discovered_paths(corpus):
    tree = await corpus.tree()

    assert [(n.name, n.type) for n in tree] == [
        ("01-business-modules", NodeType.DIR),
        ("02-tech-design", NodeType.DIR),
        ("README", NodeType.FILE),
    ]
    assert [c.name for c in tree[0].children] == ["billing", "user-system"]
    assert tree[1].children[0].path == "02-tech-design/api"


@pytest.mark.asyncio
async def test_tree_is_cached_until_refresh(corpus, loader):
    first = await corpus.tree()
    loader.files["new.md"] = "# New"

    assert await corpus.tree() == first
    refreshed = await corpus.refresh()
    assert "new.md" in [n.path for n in refreshed]


@pytest.mark.asyncio
async def test_resolve_adopts_on_first_open(corpus, documents):
    path = "01-business-modules/user-system.md"

    doc = await corpus.resolve(path)

    assert doc.path == path
    assert doc.title == "user-system"
    assert doc.content == "# User system\n\nLogin and signup. #auth #users"
    assert doc.tags == ["auth", "users"]
    assert len(await documents.list()) == 1


@pytest.mark.asyncio
async def test_resolve_keeps_edits_after_adoption(corpus, documents):
    path = "README.md"
    doc = await corpus.resolve(path)
    await documents.update(doc.id, content="edited locally")

    again = await corpus.resolve(path)

    assert again.id == doc.id
    assert again.content == "edited locally"


@pytest.mark.asyncio
async def test_resolve_normalizes_path(corpus):
    a = await corpus.resolve("/README.md")
    b = await corpus.resolve("./README.md")
    assert a.id == b.id
    assert a.path == "README.md"


@pytest.mark.asyncio
async def test_resolve_finds_document_stored_with_leading_slash(corpus, documents):
    created = await documents.create("/README.md", "Readme", "mine")

    doc = await corpus.resolve("README.md")

    assert doc.id == created.id
    assert doc.content == "mine"
    assert len(await documents.list()) == 1


@pytest.mark.asyncio
async def test_concurrent_resolution_creates_one_document(corpus, documents, monkeypatch):
    calls = []
    original_create = documents.create

    async def counting_create(*args, **kwargs):
        calls.append(args)
        return await original_create(*args, **kwargs)

    monkeypatch.setattr(documents, "create", counting_create)

    path = "02-tech-design/api/overview.md"
    results = await asyncio.gather(*(corpus.resolve(path) for _ in range(10)))

    assert len({d.id for d in results}) == 1
    assert len(calls) == 1
    assert len(await documents.list()) == 1


@pytest.mark.asyncio
async def test_resolve_unknown_path(corpus, documents):
    with pytest.raises(NotFound):
        await corpus.resolve("missing.md")
    assert await documents.list() == []

    with pytest.raises(ValidationError):
        await corpus.resolve("/")


@pytest.mark.asyncio
async def test_failed_resolution_can_be_retried(documents):
    loader = StaticCorpusLoader({})
    corpus = Corpus(loader, documents)

    with pytest.raises(NotFound):
        await corpus.resolve("late.md")

    loader.files["late.md"] = "arrived"
    doc = await corpus.resolve("late.md")
    assert doc.content == "arrived"


@pytest.mark.asyncio
async def test_list_directories_counts_files(corpus):
    dirs = await corpus.list_directories()

    assert [(d.name, d.file_count) for d in dirs] == [
        ("01-business-modules", 2),
        ("02-tech-design", 1),
    ]


@pytest.mark.asyncio
async def test_name_availability(corpus):
    assert await corpus.is_name_available("01-business-modules", NameKind.DIRECTORY) is False
    assert await corpus.is_name_available("03-ops", NameKind.DIRECTORY) is True

    assert await corpus.is_name_available("billing", NameKind.DOCUMENT, "01-business-modules") is False
    assert await corpus.is_name_available("billing.md", NameKind.DOCUMENT, "01-business-modules") is False
    assert await corpus.is_name_available("invoices", NameKind.DOCUMENT, "01-business-modules") is True
    assert await corpus.is_name_available("overview", NameKind.DOCUMENT, "02-tech-design/api") is False
    assert await corpus.is_name_available("README", NameKind.DOCUMENT) is False
    assert await corpus.is_name_available("anything", NameKind.DOCUMENT, "no-such-dir") is True


@pytest.mark.asyncio
async def test_added_directory_appears_empty(corpus):
    await corpus.tree()
    corpus.add_directory("drafts")

    tree = await corpus.tree()
    drafts = [n for n in tree if n.name == "drafts"]
    assert drafts and drafts[0].children == []


# ── Filesystem loader ─────────────────────────────────────────


@pytest.mark.asyncio
async def test_filesystem_loader_discovers_and_loads(tmp_path):
    (tmp_path / "guide").mkdir()
    (tmp_path / "guide" / "intro.md").write_text("# Intro", encoding="utf-8")
    (tmp_path / "top.md").write_text("top", encoding="utf-8")
    (tmp_path / "image.png").write_bytes(b"\x89PNG")

    loader = FilesystemCorpusLoader(tmp_path)

    assert await loader.discover() == ["guide/intro.md", "top.md"]
    assert await loader.load("guide/intro.md") == "# Intro"
    assert await loader.load("/top.md") == "top"

    with pytest.raises(NotFound):
        await loader.load("guide/missing.md")
    with pytest.raises(NotFound):
        await loader.load("guide")
    with pytest.raises(ValidationError):
        await loader.load("../outside.md")


@pytest.mark.asyncio
async def test_filesystem_loader_missing_root(tmp_path):
    loader = FilesystemCorpusLoader(tmp_path / "nope")
    assert await loader.discover() == []
