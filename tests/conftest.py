"""Shared fakes: a link graph fetcher, a Playwright stand-in and a Brave HTTP session."""

import asyncio

import pytest

from deep_search.storage.models import ExtractedPage, PageLink


class FakeFetcher:
    """Serves pages from an in-memory link graph and records fetch order."""

    def __init__(self, graph=None, failing=()):
        self.graph = graph or {}
        self.failing = set(failing)
        self.fetched = []

    async def fetch(self, url):
        self.fetched.append(url)
        await asyncio.sleep(0)
        if url in self.failing:
            return ExtractedPage.failed(url, "Timeout 30000ms exceeded")
        links = tuple(PageLink(url=target, text=f"link to {target}") for target in self.graph.get(url, ()))
        return ExtractedPage(url=url, title=f"Title of {url}", content=f"Body of {url}", links=links)


class FakeRoute:
    def __init__(self, resource_type):
        self.request = type("Request", (), {"resource_type": resource_type})()
        self.outcome = None

    async def abort(self):
        self.outcome = "aborted"

    async def continue_(self):
        self.outcome = "continued"


class FakePage:
    def __init__(self, html="", url=None, goto_error=None, close_error=None):
        self.html = html
        self.url = url
        self.goto_error = goto_error
        self.close_error = close_error
        self.closed = False
        self.goto_calls = []
        self.default_timeout = None
        self.default_navigation_timeout = None
        self.routes = []

    async def goto(self, url, timeout=None, wait_until=None):
        self.goto_calls.append((url, timeout, wait_until))
        if self.goto_error is not None:
            raise self.goto_error
        if self.url is None:
            self.url = url

    async def content(self):
        return self.html

    def set_default_timeout(self, timeout):
        self.default_timeout = timeout

    def set_default_navigation_timeout(self, timeout):
        self.default_navigation_timeout = timeout

    async def route(self, pattern, handler):
        self.routes.append((pattern, handler))

    async def close(self):
        self.closed = True
        if self.close_error is not None:
            raise self.close_error


class FakeBrowser:
    def __init__(self, pages=None):
        self.pages = list(pages or [])
        self.handlers = {}
        self.closed = False
        self.new_page_kwargs = []

    def on(self, event, handler):
        self.handlers[event] = handler

    def emit(self, event):
        self.handlers[event](self)

    async def new_page(self, **kwargs):
        self.new_page_kwargs.append(kwargs)
        return self.pages.pop(0) if self.pages else FakePage()

    async def close(self):
        self.closed = True
        if "disconnected" in self.handlers:
            self.handlers["disconnected"](self)


class FakeChromium:
    def __init__(self, browsers=None, failures=0):
        self.browsers = list(browsers or [])
        self.failures = failures
        self.launches = []

    async def launch(self, headless=True, args=None):
        self.launches.append({"headless": headless, "args": args})
        # let concurrent callers pile up while the launch is "in flight"
        await asyncio.sleep(0.01)
        if self.failures:
            self.failures -= 1
            raise RuntimeError("Executable doesn't exist")
        return self.browsers.pop(0) if self.browsers else FakeBrowser()


class FakePlaywright:
    def __init__(self, chromium):
        self.chromium = chromium
        self.stopped = False

    async def stop(self):
        self.stopped = True


class FakePlaywrightFactory:
    """Mimics async_playwright(): calling it returns an object with async start()."""

    def __init__(self, chromium):
        self.chromium = chromium
        self.instances = []

    def __call__(self):
        return self

    async def start(self):
        playwright = FakePlaywright(self.chromium)
        self.instances.append(playwright)
        return playwright


class FakeResponse:
    def __init__(self, status=200, payload=None, reason="OK", json_error=None):
        self.status = status
        self.reason = reason
        self.payload = payload
        self.json_error = json_error

    async def json(self, content_type=None):
        if self.json_error is not None:
            raise self.json_error
        return self.payload

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []
        self.closed = False

    def get(self, url, params=None, headers=None):
        self.calls.append({"url": url, "params": params, "headers": headers})
        if self.error is not None:
            raise self.error
        return self.response


class FakeSearchClient:
    def __init__(self, seeds=(), error=None):
        self.seeds = list(seeds)
        self.error = error
        self.calls = []
        self.closed = False

    async def web_search(self, query, count=3, offset=0):
        self.calls.append((query, count))
        if self.error is not None:
            raise self.error
        return self.seeds[:count]

    async def close(self):
        self.closed = True


@pytest.fixture
def fakes():
    """Namespace of fake classes for tests that build their own scenarios."""
    return type("Fakes", (), {
        "Fetcher": FakeFetcher,
        "Page": FakePage,
        "Route": FakeRoute,
        "Browser": FakeBrowser,
        "Chromium": FakeChromium,
        "PlaywrightFactory": FakePlaywrightFactory,
        "Response": FakeResponse,
        "Session": FakeSession,
        "SearchClient": FakeSearchClient,
    })
