# crawler/crawler.py

# Start from the seed URLs
# Visit each page, one at a time, in breadth-first order
# Queue the links of successfully fetched pages until the depth limit
# Stop once the page budget is spent or nothing is left to visit

from typing import Iterable, List

from deep_search.crawler.frontier import Frontier
from deep_search.storage.models import ExtractedPage
from utils.logger import setup_logger

logger = setup_logger(__name__)


class Crawler:
    """
    Bounded link traversal over a page fetcher.

    `fetcher` is anything with an ``async fetch(url) -> ExtractedPage`` that
    records per-page failures on the returned page instead of raising.
    """

    def __init__(self, fetcher, max_depth: int = 1, max_pages: int = 5):
        if max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {max_depth}")
        if max_pages < 1:
            raise ValueError(f"max_pages must be >= 1, got {max_pages}")
        self.fetcher = fetcher
        self.max_depth = max_depth
        self.max_pages = max_pages

    async def crawl(self, seed_urls: Iterable[str]) -> List[ExtractedPage]:
        """Fetch pages sequentially and return them in the order they were dequeued."""
        frontier = Frontier(seed_urls)
        results: List[ExtractedPage] = []
        logger.debug(
            f"Starting traversal of {len(frontier)} seeds "
            f"(max depth {self.max_depth}, max pages {self.max_pages})"
        )

        while frontier.has_pending() and len(results) < self.max_pages:
            url, depth = frontier.get_url()
            if frontier.has_visited(url) or len(results) >= self.max_pages:
                continue
            frontier.mark_visited(url)

            logger.info(f"Crawling (depth {depth}): {url}")
            page = await self.fetcher.fetch(url)
            results.append(page)

            if not page.ok:
                logger.warning(f"Not following links from {url}: {page.error}")
                continue

            if depth < self.max_depth:
                for link in page.links:
                    if not frontier.has_visited(link.url):
                        frontier.add_url(link.url, depth + 1)

        logger.info(f"Crawler finished: {len(results)} pages, {len(frontier)} left in frontier")
        return results


async def traverse(fetcher, seed_urls: Iterable[str], max_depth: int, max_pages: int) -> List[ExtractedPage]:
    return await Crawler(fetcher, max_depth=max_depth, max_pages=max_pages).crawl(seed_urls)
