"""
Browser Session - Owns one Playwright browser/context and hands out pages
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from playwright.async_api import Page, async_playwright

from ..config import BROWSER_KINDS, ScraperConfig
from ..errors import EngineLaunchError

logger = logging.getLogger(__name__)


class BrowserSession:
    """Playwright session shared by every request of a scraper or batch run"""

    def __init__(self, browser: str = 'chromium', headless: bool = True,
                 user_agent: str = None):
        self.browser_kind = browser
        self.headless = headless
        self.user_agent = user_agent
        self.playwright = None
        self.browser = None
        self.context = None

    @classmethod
    def from_config(cls, config: ScraperConfig) -> 'BrowserSession':
        return cls(browser=config.browser, headless=config.headless, user_agent=config.user_agent)

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    @property
    def started(self) -> bool:
        return self.context is not None

    async def start(self):
        """Launch the browser and open a context"""
        if self.started:
            return
        if self.browser_kind not in BROWSER_KINDS:
            raise EngineLaunchError(f"Unknown browser: {self.browser_kind}")

        try:
            self.playwright = await async_playwright().start()
            launcher = getattr(self.playwright, self.browser_kind)
            self.browser = await launcher.launch(headless=self.headless)

            context_options = {}
            if self.user_agent:
                context_options['user_agent'] = self.user_agent
            self.context = await self.browser.new_context(**context_options)
            logger.info(f"Started {self.browser_kind} (headless={self.headless})")

        except Exception as e:
            logger.error(f"Failed to start browser: {e}")
            await self.close()
            raise EngineLaunchError(f"Failed to launch {self.browser_kind}: {e}") from e

    async def close(self):
        """Clean up browser resources"""
        try:
            if self.context:
                await self.context.close()
            if self.browser:
                await self.browser.close()
            if self.playwright:
                await self.playwright.stop()
        except Exception as e:
            logger.error(f"Error closing browser: {e}")
        finally:
            self.context = None
            self.browser = None
            self.playwright = None

    @asynccontextmanager
    async def page(self) -> AsyncIterator[Page]:
        """Open a page that is closed on every exit path"""
        if not self.started:
            raise RuntimeError("Browser not initialized. Use 'async with' or call start() first")

        page = await self.context.new_page()
        try:
            yield page
        finally:
            try:
                await page.close()
            except Exception as e:
                logger.warning(f"Error closing page: {e}")
