"""Tests for the corpus sources."""

import httpx
import pytest

from ember_mcp.errors import CorpusLoadError
from ember_mcp.services.corpus import CorpusSource, StaticCorpus

URL = "https://docs.test/llms-full.txt"


def _source(handler) -> CorpusSource:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return CorpusSource(url=URL, client=client)


@pytest.mark.asyncio
async def test_fetch_returns_text():
    source = _source(lambda request: httpx.Response(200, text="# api-docs\n"))
    assert await source.fetch() == "# api-docs\n"


@pytest.mark.asyncio
async def test_non_success_status_raises():
    source = _source(lambda request: httpx.Response(500))

    with pytest.raises(CorpusLoadError, match="HTTP 500"):
        await source.fetch()


@pytest.mark.asyncio
async def test_transport_error_raises():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(CorpusLoadError, match="Failed to fetch documentation"):
        await _source(handler).fetch()


@pytest.mark.asyncio
async def test_timeout_raises():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(CorpusLoadError, match="Timed out"):
        await _source(handler).fetch()


@pytest.mark.asyncio
async def test_static_corpus():
    assert await StaticCorpus("text").fetch() == "text"
