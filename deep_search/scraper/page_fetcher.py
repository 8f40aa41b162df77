# scraper/page_fetcher.py

# Open one tab from the shared browser
# Navigate and wait for the network to go quiet
# Extract title, description, main text and links (via content_extractor)
# Close the tab, whatever happened

from config import PAGE_TIMEOUT_MS, WAIT_UNTIL
from deep_search.errors import BrowserLaunchError
from deep_search.scraper.browser_manager import BrowserManager
from deep_search.scraper.content_extractor import MAX_LINKS_PER_PAGE, extract_content
from deep_search.storage.models import ExtractedPage
from utils.logger import setup_logger

logger = setup_logger(__name__)


class PageFetcher:
    def __init__(
        self,
        browser_manager: BrowserManager,
        timeout_ms: int = PAGE_TIMEOUT_MS,
        wait_until: str = WAIT_UNTIL,
        max_links: int = MAX_LINKS_PER_PAGE,
    ):
        self.browser_manager = browser_manager
        self.timeout_ms = timeout_ms
        self.wait_until = wait_until
        self.max_links = max_links

    async def fetch(self, url: str) -> ExtractedPage:
        """
        Visit url and return its extracted content.

        Navigation timeouts, network errors and extraction errors are returned
        as an error-bearing ExtractedPage. Only a browser that cannot be
        launched at all raises (BrowserLaunchError).
        """
        page = None
        try:
            page = await self.browser_manager.new_page()
            logger.debug(f"Navigating to: {url}")
            await page.goto(url, timeout=self.timeout_ms, wait_until=self.wait_until)

            html = await page.content()
            data = extract_content(html, page.url or url, max_links=self.max_links)

            return ExtractedPage(
                url=url,
                title=data["title"],
                description=data["description"],
                content=data["content"],
                links=tuple(data["links"]),
            )
        except BrowserLaunchError:
            raise
        except Exception as e:
            logger.error(f"Error extracting content from {url}: {e}")
            return ExtractedPage.failed(url, str(e) or e.__class__.__name__)
        finally:
            if page is not None:
                try:
                    await page.close()
                except Exception as e:
                    logger.error(f"Error closing page for {url}: {e}")
