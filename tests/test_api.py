"""HTTP surface tests for documents, suggestions and the corpus."""

import uuid

import pytest
from httpx import AsyncClient


async def _create(client: AsyncClient, path: str = "notes.md", title: str = "Notes", content: str = "hello #intro") -> dict:
    resp = await client.post("/v1/documents", json={"path": path, "title": title, "content": content})
    assert resp.status_code == 201
    return resp.json()


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_document_crud_flow(client: AsyncClient):
    doc = await _create(client)
    assert doc["tags"] == ["intro"]
    assert doc["modified_by"] == "human"

    resp = await client.get(f"/v1/documents/{doc['id']}")
    assert resp.status_code == 200
    assert resp.json()["title"] == "Notes"

    resp = await client.patch(f"/v1/documents/{doc['id']}", json={"content": "rewritten #v2"})
    assert resp.status_code == 200
    assert resp.json()["content"] == "rewritten #v2"
    assert resp.json()["tags"] == ["v2"]

    resp = await client.get(f"/v1/documents/{doc['id']}/versions")
    assert resp.status_code == 200
    versions = resp.json()
    assert [v["content"] for v in versions] == ["hello #intro"]

    resp = await client.delete(f"/v1/documents/{doc['id']}")
    assert resp.status_code == 204
    resp = await client.delete(f"/v1/documents/{doc['id']}")
    assert resp.status_code == 204

    resp = await client.get(f"/v1/documents/{doc['id']}")
    assert resp.status_code == 404
    assert resp.json()["code"] == "not_found"


@pytest.mark.asyncio
async def test_update_unknown_document_is_404(client: AsyncClient):
    resp = await client.patch(f"/v1/documents/{uuid.uuid4()}", json={"title": "x"})
    assert resp.status_code == 404
    assert resp.json()["code"] == "not_found"


@pytest.mark.asyncio
async def test_search_and_lookup_by_path(client: AsyncClient):
    await _create(client, path="rn.md", title="Release Notes", content="cut 1")
    await _create(client, path="road.md", title="Roadmap", content="later")

    resp = await client.get("/v1/documents", params={"q": "RELEASE"})
    assert [d["title"] for d in resp.json()] == ["Release Notes"]

    resp = await client.get("/v1/documents")
    assert len(resp.json()) == 2

    resp = await client.get("/v1/documents/by-path", params={"path": "road.md"})
    assert resp.status_code == 200
    assert resp.json()["title"] == "Roadmap"

    resp = await client.get("/v1/documents/by-path", params={"path": "nope.md"})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_version_limit_validation(client: AsyncClient):
    doc = await _create(client)
    resp = await client.get(f"/v1/documents/{doc['id']}/versions", params={"limit": -1})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_consensus(client: AsyncClient):
    doc = await _create(client)
    resp = await client.put(f"/v1/documents/{doc['id']}/consensus", json={"content": "agreed"})
    assert resp.status_code == 200
    assert resp.json()["consensus_version"] == "agreed"


@pytest.mark.asyncio
async def test_suggestion_flow(client: AsyncClient):
    doc = await _create(client)

    resp = await client.post(f"/v1/documents/{doc['id']}/suggestions", json={
        "suggested_content": "hello world",
        "ai_model": "claude-3.5-sonnet",
    })
    assert resp.status_code == 201
    suggestion = resp.json()
    assert suggestion["status"] == "pending"

    resp = await client.patch(f"/v1/suggestions/{suggestion['id']}", json={
        "status": "modified",
        "final_content": "hello, world",
    })
    assert resp.status_code == 200
    assert resp.json()["status"] == "modified"

    resp = await client.get(f"/v1/documents/{doc['id']}/suggestions")
    listed = resp.json()
    assert len(listed) == 1
    assert listed[0]["final_content"] == "hello, world"
    assert listed[0]["suggested_content"] == "hello world"


@pytest.mark.asyncio
async def test_suggestion_errors(client: AsyncClient):
    resp = await client.post(f"/v1/documents/{uuid.uuid4()}/suggestions", json={
        "suggested_content": "x",
        "ai_model": "m",
    })
    assert resp.status_code == 404

    resp = await client.patch(f"/v1/suggestions/{uuid.uuid4()}", json={"status": "accepted"})
    assert resp.status_code == 404

    doc = await _create(client)
    resp = await client.post(f"/v1/documents/{doc['id']}/suggestions", json={
        "suggested_content": "x",
        "ai_model": "m",
    })
    resp = await client.patch(f"/v1/suggestions/{resp.json()['id']}", json={"status": "approved"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_corpus_tree_and_resolve(client: AsyncClient):
    resp = await client.get("/v1/corpus/tree")
    assert resp.status_code == 200
    tree = resp.json()
    assert [n["type"] for n in tree] == ["dir", "dir", "file"]
    assert tree[2]["children"] is None

    resp = await client.post("/v1/corpus/resolve", json={"path": "README.md"})
    assert resp.status_code == 200
    first = resp.json()
    assert first["title"] == "README"

    resp = await client.post("/v1/corpus/resolve", json={"path": "README.md"})
    assert resp.json()["id"] == first["id"]

    resp = await client.post("/v1/corpus/resolve", json={"path": "missing.md"})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_corpus_directories_and_availability(client: AsyncClient):
    resp = await client.get("/v1/corpus/directories")
    assert [d["file_count"] for d in resp.json()] == [2, 1]

    resp = await client.get("/v1/corpus/availability", params={
        "name": "billing",
        "kind": "document",
        "directory": "01-business-modules",
    })
    assert resp.json() == {"name": "billing", "available": False}


@pytest.mark.asyncio
async def test_file_creation_not_supported(client: AsyncClient):
    resp = await client.post("/v1/corpus/directories", json={"name": "drafts"})
    assert resp.status_code == 501
    assert resp.json()["code"] == "not_supported"

    resp = await client.post("/v1/corpus/documents", json={"directory": "drafts", "name": "bad name"})
    assert resp.status_code == 422
    assert resp.json()["code"] == "invalid_name"
