"""
Web Scraper - Drives one request end-to-end: navigate, honour the redirect
policy, wait for readiness, extract, and always release the page
"""

import asyncio
import logging
import time
from typing import Optional, Union

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from ..browser import BrowserSession
from ..config import ScrapeRequest, ScraperConfig, validate_url
from ..errors import SectionsNotFoundSignal
from ..extraction import StructuredExtractor, extract_plain_text, load_document
from .redirect import RedirectDetector, RedirectInfo
from .result import Failure, Outcome, RedirectDetected, SectionsNotFound, SelectorTimeout, Success

logger = logging.getLogger(__name__)


def _discard_result(task: asyncio.Future) -> None:
    if not task.cancelled():
        task.exception()


class WebScraper:
    """
    Scrapes single URLs into Outcomes

    One BrowserSession is reused for every call; pages are opened and
    closed per request. Pass `session` to share an already managed session.
    """

    def __init__(self, config: Optional[ScraperConfig] = None,
                 session: Optional[BrowserSession] = None,
                 log_manager=None):
        self.config = (config or ScraperConfig()).validate()
        self.session = session
        self._owns_session = session is None
        self.log_manager = log_manager
        self.extractor = StructuredExtractor()

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def start(self) -> None:
        """Launch the rendering engine; raises EngineLaunchError on failure"""
        if self.session is None:
            self.session = BrowserSession.from_config(self.config)
        await self.session.start()

    async def close(self) -> None:
        if self.session is not None and self._owns_session:
            await self.session.close()
            self.session = None

    async def scrape_text(self, url: str) -> Outcome:
        """Scrape url as plain text regardless of the configured mode"""
        return await self.scrape(url, self.config.with_options(structured=False, section_selectors=()))

    async def scrape_structured(self, url: str) -> Outcome:
        """Scrape url as structured content regardless of the configured mode"""
        return await self.scrape(url, self.config.with_options(structured=True))

    async def scrape(self, target: Union[str, ScrapeRequest],
                     config: Optional[ScraperConfig] = None) -> Outcome:
        """
        Scrape one URL and return exactly one Outcome

        Args:
            target: URL or ScrapeRequest; a request's config wins over `config`
            config: Per-call configuration, defaults to the scraper's own

        Raises:
            ValidationError: for a malformed URL or configuration
            EngineLaunchError: if the browser cannot be started
        """
        if isinstance(target, ScrapeRequest):
            url, config = target.url, target.config
        else:
            url = target
        config = (config or self.config).validate()
        url = validate_url(url)

        await self.start()

        start_time = time.time()
        try:
            async with self.session.page() as page:
                outcome = await self._scrape_page(page, url, config)
        except Exception as e:
            logger.warning(f"Scrape failed for {url}: {e}")
            outcome = Failure(url, error=str(e))

        duration = time.time() - start_time
        if outcome.ok:
            logger.info(f"Scraped {url} in {duration:.2f}s")
        else:
            logger.warning(f"{outcome.kind.value} for {url}: {outcome.message}")
        if self.log_manager:
            self.log_manager.log_outcome_event(outcome, duration)

        return outcome

    async def _scrape_page(self, page, url: str, config: ScraperConfig) -> Outcome:
        page.set_default_timeout(config.timeout)

        detector = None
        if not config.follow_redirects:
            detector = RedirectDetector(url).attach(page)

        try:
            redirect = await self._navigate(page, url, detector)
        finally:
            if detector:
                detector.detach()

        if redirect is not None:
            return RedirectDetected(url, status=redirect.status, location=redirect.location,
                                    original_url=url)

        if config.wait_for_selector:
            try:
                await page.wait_for_selector(config.wait_for_selector, timeout=config.timeout)
            except PlaywrightTimeoutError:
                return SelectorTimeout(url, selectors=[config.wait_for_selector])

        html = await page.content()
        document = load_document(html, page.url or url)

        if not config.structured:
            return Success(url, result=extract_plain_text(document, config.exclude_selectors))

        try:
            result = self.extractor.extract(document, config.exclude_selectors, config.section_selectors)
        except SectionsNotFoundSignal as e:
            return SectionsNotFound(url, selectors=e.selectors)
        return Success(url, result=result)

    async def _navigate(self, page, url: str,
                        detector: Optional[RedirectDetector]) -> Optional[RedirectInfo]:
        """Navigate and wait for network idle, stopping early on a disallowed redirect"""
        navigation = asyncio.ensure_future(page.goto(url, wait_until='networkidle'))
        if detector is None:
            await navigation
            return None

        redirect_seen = asyncio.ensure_future(detector.wait())
        try:
            await asyncio.wait({navigation, redirect_seen}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            navigation.cancel()
            raise
        finally:
            redirect_seen.cancel()

        if detector.redirect is not None:
            if not navigation.done():
                navigation.cancel()
            navigation.add_done_callback(_discard_result)
            return detector.redirect

        await navigation
        return None
