import asyncio
import os
import signal

import pytest
from mcp.server.fastmcp.exceptions import ToolError

import main
import server
from config import Settings
from deep_search.errors import SearchError
from deep_search.service import DeepSearchService
from deep_search.storage.models import SeedResult

SEEDS = [SeedResult("https://a.example.com/intro", "A"), SeedResult("https://b.example.com/intro", "B")]


def _text(result):
    # newer mcp releases return (content, structured_content)
    content = result[0] if isinstance(result, tuple) else result
    return content[0].text


class ClosingService:
    def __init__(self):
        self.closed = False

    async def close(self):
        self.closed = True


class BlockingServer:
    """Stands in for FastMCP: serves until cancelled."""

    def __init__(self):
        self.started = asyncio.Event()

    async def run_stdio_async(self):
        self.started.set()
        await asyncio.sleep(3600)


@pytest.fixture
def stdio_fakes(monkeypatch):
    service, stdio = ClosingService(), {}

    def fake_create_server(svc):
        stdio["server"] = BlockingServer()
        return stdio["server"]

    monkeypatch.setattr(server.DeepSearchService, "from_settings", classmethod(lambda cls, settings: service))
    monkeypatch.setattr(server, "create_server", fake_create_server)
    return service, stdio


def test_tool_is_registered_under_its_name(fakes):
    mcp = server.create_server(DeepSearchService(fakes.SearchClient(SEEDS), fakes.Fetcher()))
    tools = asyncio.run(mcp.list_tools())
    assert [tool.name for tool in tools] == ["deep-search"]
    assert tools[0].inputSchema["required"] == ["query"]


def test_tool_returns_report_text(fakes):
    mcp = server.create_server(DeepSearchService(fakes.SearchClient(SEEDS), fakes.Fetcher()))
    result = asyncio.run(mcp.call_tool("deep-search", {"query": "intro guides", "results": 2}))
    assert _text(result).startswith('# Deep Search Results for "intro guides"\nFound 2 pages with depth 1')


def test_non_numeric_arguments_fall_back_to_defaults(fakes):
    search = fakes.SearchClient(SEEDS)
    mcp = server.create_server(DeepSearchService(search, fakes.Fetcher()))
    result = asyncio.run(mcp.call_tool("deep-search", {"query": "intro", "results": "lots", "depth": "deep"}))
    assert search.calls == [("intro", 3)]
    assert "with depth 1" in _text(result)


def test_numeric_strings_are_accepted(fakes):
    search = fakes.SearchClient(SEEDS)
    mcp = server.create_server(DeepSearchService(search, fakes.Fetcher()))
    asyncio.run(mcp.call_tool("deep-search", {"query": "intro", "results": "2"}))
    assert search.calls == [("intro", 2)]


def test_error_result_is_raised_as_tool_error(fakes):
    search = fakes.SearchClient(error=SearchError("Brave Search API error: 429 rate limit exceeded", status=429))
    mcp = server.create_server(DeepSearchService(search, fakes.Fetcher()))
    with pytest.raises(ToolError, match="rate limit exceeded"):
        asyncio.run(mcp.call_tool("deep-search", {"query": "intro"}))


def test_cancelled_server_closes_service(stdio_fakes):
    service, stdio = stdio_fakes

    async def scenario():
        task = asyncio.ensure_future(server.serve_stdio(Settings(brave_api_key="key")))
        while "server" not in stdio:
            await asyncio.sleep(0)
        await stdio["server"].started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(scenario())
    assert service.closed


def test_sigterm_stops_server_and_closes_service(stdio_fakes):
    service, stdio = stdio_fakes

    async def scenario():
        task = asyncio.ensure_future(server.serve_stdio(Settings(brave_api_key="key")))
        while "server" not in stdio:
            await asyncio.sleep(0)
        await stdio["server"].started.wait()
        os.kill(os.getpid(), signal.SIGTERM)
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(scenario())
    assert service.closed


def test_serve_command_exits_cleanly_on_interrupt(monkeypatch):
    calls = []

    async def interrupted(settings):
        calls.append(settings)
        raise KeyboardInterrupt

    previous = signal.getsignal(signal.SIGTERM)
    monkeypatch.setattr(main, "load_settings", lambda: Settings(brave_api_key="key"))
    monkeypatch.setattr(server, "serve_stdio", interrupted)
    try:
        assert main.main(["serve"]) == 0
        assert signal.getsignal(signal.SIGTERM) is signal.default_int_handler
    finally:
        signal.signal(signal.SIGTERM, previous)
    assert len(calls) == 1
