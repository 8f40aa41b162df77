# service.py

"""
The deep-search tool: search, crawl the hits, report.

DeepSearchService wires the Brave client, the shared browser and the crawler
together. run_tool() is what every surface (MCP, HTTP, CLI) calls: it
clamps the loosely typed arguments and turns request-level failures into an
error-flagged ToolResult.
"""

from typing import Optional

from config import DEFAULT_DEPTH, DEFAULT_RESULTS, MAX_DEPTH, MAX_RESULTS, Settings
from deep_search.crawler.crawler import Crawler
from deep_search.errors import DeepSearchError
from deep_search.report import format_report, summarize
from deep_search.scraper.browser_manager import BrowserManager
from deep_search.scraper.page_fetcher import PageFetcher
from deep_search.search.brave_client import BraveSearchClient
from deep_search.storage.models import DeepSearchResponse, ToolResult
from utils.helpers import clamp_int
from utils.logger import setup_logger

logger = setup_logger(__name__)

TOOL_NAME = "deep-search"
TOOL_DESCRIPTION = "Perform a deep web search that visits pages to extract full content"


def clamp_results(value) -> int:
    return clamp_int(value, DEFAULT_RESULTS, 1, MAX_RESULTS)


def clamp_depth(value) -> int:
    return clamp_int(value, DEFAULT_DEPTH, 1, MAX_DEPTH)


class DeepSearchService:
    def __init__(self, search_client, fetcher, browser_manager: Optional[BrowserManager] = None):
        self.search_client = search_client
        self.fetcher = fetcher
        self.browser_manager = browser_manager

    @classmethod
    def from_settings(cls, settings: Settings) -> "DeepSearchService":
        browser_manager = BrowserManager(
            headless=settings.headless,
            page_timeout_ms=settings.page_timeout_ms,
            block_assets=settings.block_assets,
        )
        return cls(
            search_client=BraveSearchClient(settings.brave_api_key),
            fetcher=PageFetcher(browser_manager, timeout_ms=settings.page_timeout_ms),
            browser_manager=browser_manager,
        )

    async def deep_search(self, query: str, results: int = DEFAULT_RESULTS, depth: int = DEFAULT_DEPTH) -> DeepSearchResponse:
        """
        Search for query, then crawl the hits breadth-first.
        The page budget is results * depth. SearchError and
        BrowserLaunchError propagate; per-page failures stay in the pages.
        """
        results = clamp_results(results)
        depth = clamp_depth(depth)
        logger.info(f'Starting deep search for "{query}" (results: {results}, depth: {depth})')

        seeds = await self.search_client.web_search(query, count=results)
        if not seeds:
            return DeepSearchResponse(query=query, seeds=(), pages=(), depth=depth, report="")

        crawler = Crawler(self.fetcher, max_depth=depth, max_pages=results * depth)
        pages = await crawler.crawl(seed.url for seed in seeds)
        logger.info(summarize(query, pages))

        return DeepSearchResponse(
            query=query,
            seeds=tuple(seeds),
            pages=tuple(pages),
            depth=depth,
            report=format_report(query, pages, depth),
        )

    async def run_tool(self, arguments: dict) -> ToolResult:
        """Execute the deep-search tool with raw arguments from a host."""
        arguments = arguments or {}
        query = arguments.get("query")
        if not isinstance(query, str) or not query.strip():
            return ToolResult("Error performing deep search: query must be a non-empty string", is_error=True)
        query = query.strip()

        try:
            response = await self.deep_search(query, arguments.get("results"), arguments.get("depth"))
        except DeepSearchError as e:
            logger.error(f'Deep search error for "{query}": {e}')
            return ToolResult(f"Error performing deep search: {e}", is_error=True)
        except Exception as e:
            logger.exception(f'Unexpected deep search failure for "{query}"')
            return ToolResult(f"Error performing deep search: {str(e) or e.__class__.__name__}", is_error=True)

        if not response.seeds:
            return ToolResult(f'No search results found for query: "{query}"')
        return ToolResult(response.report)

    async def close(self):
        """Release the search session and shut the shared browser down."""
        close_search = getattr(self.search_client, "close", None)
        if close_search is not None:
            await close_search()
        if self.browser_manager is not None:
            await self.browser_manager.shutdown()
