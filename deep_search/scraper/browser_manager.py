# scraper/browser_manager.py

"""
The purpose of this module is:
Create and manage a single browser instance
Reuse it across every fetch and every concurrent request
Provide helper methods for page creation
Tear it down on shutdown, or forget it when it disconnects
"""

import asyncio
import enum

from playwright.async_api import async_playwright

from config import BROWSER_ARGS, PAGE_TIMEOUT_MS, USER_AGENT
from deep_search.errors import BrowserLaunchError
from utils.logger import setup_logger

logger = setup_logger(__name__)

BLOCKED_RESOURCE_TYPES = {"image", "media", "font", "stylesheet"}


class BrowserState(enum.Enum):
    ABSENT = "absent"
    INITIALIZING = "initializing"
    READY = "ready"
    DISCONNECTED = "disconnected"


async def _block_assets(route):
    if route.request.resource_type in BLOCKED_RESOURCE_TYPES:
        await route.abort()
    else:
        await route.continue_()


class BrowserManager:
    """
    Owner of the shared headless browser.

    The browser is launched lazily by the first caller. Callers arriving while
    a launch is in progress wait for that same launch instead of starting
    their own, and see its failure too if it fails. A disconnected browser is
    dropped so that the next caller launches a fresh one.
    """

    def __init__(
        self,
        headless: bool = True,
        page_timeout_ms: int = PAGE_TIMEOUT_MS,
        block_assets: bool = False,
        user_agent: str = USER_AGENT,
        playwright_factory=async_playwright,
    ):
        self.headless = headless
        self.page_timeout_ms = page_timeout_ms
        self.block_assets = block_assets
        self.user_agent = user_agent
        self._playwright_factory = playwright_factory
        self._playwright = None
        self._browser = None
        self._launch_task = None
        self.state = BrowserState.ABSENT

    async def get_browser(self):
        """Return the shared browser, launching it if needed."""
        if self._browser is not None:
            return self._browser

        if self._launch_task is None:
            self.state = BrowserState.INITIALIZING
            self._launch_task = asyncio.ensure_future(self._launch())
            self._launch_task.add_done_callback(self._on_launch_done)

        # cancelling one waiter leaves the launch running for the others
        return await asyncio.shield(self._launch_task)

    async def _launch(self):
        logger.debug(f"Launching Chromium (headless: {self.headless})")
        try:
            if self._playwright is None:
                self._playwright = await self._playwright_factory().start()
            browser = await self._playwright.chromium.launch(
                headless=self.headless,
                args=BROWSER_ARGS,
            )
        except Exception as e:
            logger.error(f"Failed to launch browser: {e}")
            await self._stop_playwright()
            raise BrowserLaunchError(f"Failed to launch browser: {e}") from e

        browser.on("disconnected", self._on_disconnected)
        return browser

    def _on_launch_done(self, task):
        self._launch_task = None
        if task.cancelled() or task.exception() is not None:
            self.state = BrowserState.ABSENT
            return
        self._browser = task.result()
        self.state = BrowserState.READY
        logger.info("Browser ready")

    def _on_disconnected(self, browser=None):
        if browser is not None and browser is not self._browser:
            return
        logger.warning("Browser disconnected")
        self.state = BrowserState.DISCONNECTED
        self._browser = None
        self.state = BrowserState.ABSENT

    async def new_page(self):
        """
        Create a new page (tab) from the shared browser with the configured
        timeouts and user agent applied.
        """
        browser = await self.get_browser()
        page = await browser.new_page(user_agent=self.user_agent)
        page.set_default_timeout(self.page_timeout_ms)
        page.set_default_navigation_timeout(self.page_timeout_ms)
        if self.block_assets:
            await page.route("**/*", _block_assets)
        return page

    async def shutdown(self):
        """
        Close the shared browser and stop the Playwright driver.
        Safe to call more than once.
        """
        if self._launch_task is not None:
            try:
                await self._launch_task
            except BrowserLaunchError as e:
                logger.debug(f"Pending launch failed during shutdown: {e}")

        browser, self._browser = self._browser, None
        if browser is not None:
            try:
                await browser.close()
                logger.debug("Browser closed successfully")
            except Exception as e:
                logger.error(f"Error closing browser: {e}")

        await self._stop_playwright()
        self.state = BrowserState.ABSENT

    async def _stop_playwright(self):
        playwright, self._playwright = self._playwright, None
        if playwright is not None:
            try:
                await playwright.stop()
            except Exception as e:
                logger.error(f"Error stopping Playwright: {e}")
