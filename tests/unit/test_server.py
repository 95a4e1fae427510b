"""Tests for the HTTP endpoints and the MCP JSON-RPC transport."""

import httpx
import pytest
import tiktoken
from fastapi.testclient import TestClient

from ember_mcp.config import settings
from ember_mcp.engine.core import tokens
from ember_mcp.engine.handlers import HandlerContext
from ember_mcp.server import PROTOCOL_VERSION, SERVER_NAME, app
from ember_mcp.services.corpus import StaticCorpus
from ember_mcp.services.documentation import DocumentationService
from ember_mcp.services.embeddings import DisabledEmbeddings
from ember_mcp.services.npm import NpmService
from ember_mcp.services.releases import ReleaseService
from tests.conftest import SAMPLE_CORPUS, FailingSource


def _offline_client(status: int = 404) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(status, json={}))
    )


def _raise_os_error(name):
    raise OSError(f"cannot fetch {name}")


def _context(source=None) -> HandlerContext:
    docs = DocumentationService(
        source or StaticCorpus(SAMPLE_CORPUS),
        embeddings=DisabledEmbeddings(),
        releases=ReleaseService(client=_offline_client(503)),
    )
    return HandlerContext(docs=docs, npm=NpmService(client=_offline_client(404)))


@pytest.fixture
def make_client(monkeypatch):
    monkeypatch.setattr(settings, "preload_docs", False)
    clients = []

    def factory(context: HandlerContext | None = None) -> TestClient:
        app.state.context = context or _context()
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.__exit__(None, None, None)
    app.state.context = None


@pytest.fixture
def client(make_client):
    return make_client()


def _rpc(client: TestClient, method: str, params: dict | None = None, id: int = 1):
    body = {"jsonrpc": "2.0", "id": id, "method": method}
    if params is not None:
        body["params"] = params
    return client.post("/mcp", json=body)


def _call(client: TestClient, name: str, arguments: dict):
    return _rpc(client, "tools/call", {"name": name, "arguments": arguments}).json()


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root(self, client):
        assert client.get("/").json()["mcp"] == "/mcp"

    def test_not_ready_before_load(self, client):
        response = client.get("/ready")

        assert response.status_code == 503
        assert response.json()["checks"]["documentation"] is False

    def test_ready_after_first_docs_call(self, client):
        _call(client, "search_ember_docs", {"query": "routing"})

        response = client.get("/ready")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ready"
        assert body["checks"] == {"documentation": True, "embeddings": True}
        assert body["stats"]["sections"] == 3
        assert body["stats"]["api_entries"] == 3


class TestProtocol:
    def test_initialize(self, client):
        result = _rpc(client, "initialize", {}).json()["result"]

        assert result["protocolVersion"] == PROTOCOL_VERSION
        assert result["serverInfo"]["name"] == SERVER_NAME
        assert "tools" in result["capabilities"]

    def test_tools_list(self, client):
        tools = _rpc(client, "tools/list").json()["result"]["tools"]

        names = {tool["name"] for tool in tools}
        assert len(tools) == 7
        assert "search_ember_docs" in names
        assert "detect_package_manager" in names
        assert all("inputSchema" in tool for tool in tools)

    def test_ping(self, client):
        assert _rpc(client, "ping").json()["result"] == {}

    def test_unknown_method(self, client):
        error = _rpc(client, "resources/list").json()["error"]
        assert error["code"] == -32601

    def test_notification_returns_202(self, client):
        notification = {"jsonrpc": "2.0", "method": "notifications/initialized"}
        response = client.post("/mcp", json=notification)

        assert response.status_code == 202
        assert response.content == b""

    def test_parse_error(self, client):
        response = client.post(
            "/mcp", content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == -32700

    def test_invalid_request(self, client):
        response = client.post("/mcp", json={"jsonrpc": "1.0", "id": 3, "method": "ping"})

        assert response.json()["error"]["code"] == -32600
        assert response.json()["id"] == 3

    def test_batch(self, client):
        response = client.post(
            "/mcp",
            json=[
                {"jsonrpc": "2.0", "id": 1, "method": "ping"},
                {"jsonrpc": "2.0", "method": "notifications/initialized"},
                {"jsonrpc": "2.0", "id": 2, "method": "tools/list"},
            ],
        )

        assert response.status_code == 200
        assert [r["id"] for r in response.json()] == [1, 2]

    def test_empty_batch(self, client):
        response = client.post("/mcp", json=[])

        assert response.status_code == 400
        assert response.json()["error"]["code"] == -32600

    def test_notification_only_batch(self, client):
        response = client.post("/mcp", json=[{"jsonrpc": "2.0", "method": "ping"}])
        assert response.status_code == 202


class TestToolCalls:
    def test_search(self, client):
        result = _call(client, "search_ember_docs", {"query": "proxy deprecation"})["result"]

        text = result["content"][0]["text"]
        assert "isError" not in result
        assert text.startswith('# Search Results for "proxy deprecation"')
        assert "Proxy deprecation" in text

    def test_search_without_results(self, client):
        result = _call(client, "search_ember_docs", {"query": "kubernetes"})["result"]

        assert result["content"][0]["text"].startswith('No results found for "kubernetes"')
        assert "isError" not in result

    def test_invalid_arguments(self, client):
        response = _call(client, "search_ember_docs", {"query": "x", "limit": 500})

        assert response["error"]["code"] == -32602
        assert "limit" in response["error"]["message"]

    def test_missing_required_argument(self, client):
        response = _call(client, "get_api_reference", {})
        assert response["error"]["code"] == -32602

    def test_unknown_tool(self, client):
        response = _call(client, "rm_rf", {})

        assert response["error"]["code"] == -32602
        assert "Unknown tool" in response["error"]["message"]

    def test_api_reference(self, client):
        result = _call(client, "get_api_reference", {"name": "Component", "type": "class"})

        text = result["result"]["content"][0]["text"]
        assert text.startswith("# Ember.Component")
        assert "didInsertElement" in text

    def test_api_reference_not_found(self, client):
        result = _call(client, "get_api_reference", {"name": "Kubernetes"})["result"]
        assert "No API documentation found" in result["content"][0]["text"]

    def test_best_practices(self, client):
        result = _call(client, "get_best_practices", {"topic": "component testing"})["result"]
        assert "Component testing best practices" in result["content"][0]["text"]

    def test_version_info_falls_back_when_github_unavailable(self, client):
        result = _call(client, "get_ember_version_info", {"version": "6.1.0"})["result"]

        text = result["content"][0]["text"]
        assert text.startswith("# Ember.js 6.1.0")
        assert "Unable to fetch release information" in text

    def test_npm_package_not_found_is_error_result(self, client):
        result = _call(client, "get_npm_package_info", {"packageName": "nope"})["result"]

        assert result["isError"] is True
        assert "not found on npm registry" in result["content"][0]["text"]

    def test_compare_versions_error_result(self, client):
        result = _call(
            client, "compare_npm_versions", {"packageName": "nope", "currentVersion": "1.0.0"}
        )["result"]

        assert result["isError"] is True
        assert result["content"][0]["text"].startswith("Error comparing versions")

    def test_detect_package_manager(self, client, tmp_path):
        (tmp_path / "pnpm-lock.yaml").write_text("")

        result = _call(client, "detect_package_manager", {"workspacePath": str(tmp_path)})

        assert result["result"]["content"][0]["text"].startswith("# Package Manager: pnpm")

    def test_tools_answer_without_token_encoder(self, client, tmp_path, monkeypatch):
        monkeypatch.setattr(tokens, "_encoding", None)
        monkeypatch.setattr(tokens, "_encoding_failed", False)
        monkeypatch.setattr(tiktoken, "get_encoding", _raise_os_error)
        (tmp_path / "yarn.lock").write_text("")

        result = _call(client, "detect_package_manager", {"workspacePath": str(tmp_path)})

        assert "isError" not in result["result"]
        assert result["result"]["content"][0]["text"].startswith("# Package Manager: yarn")

    def test_package_tools_do_not_load_docs(self, make_client, tmp_path):
        source = FailingSource()
        client = make_client(_context(source))

        _call(client, "detect_package_manager", {"workspacePath": str(tmp_path)})

        assert source.calls == 0

    def test_failed_corpus_load_is_error_result(self, make_client):
        client = make_client(_context(FailingSource()))

        result = _call(client, "search_ember_docs", {"query": "routing"})["result"]

        assert result["isError"] is True
        assert "Failed to fetch documentation" in result["content"][0]["text"]
