"""
Scraper Builder - Fluent API for building configured scrapers
"""

from typing import Optional

from ..config import ScraperConfig
from .base import WebScraper


class ScraperBuilder:
    """Builder for creating scrapers with various options"""

    def __init__(self, config: Optional[ScraperConfig] = None):
        self._options = (config or ScraperConfig()).to_dict()
        self._session = None
        self._log_manager = None

    def browser(self, kind: str):
        """Set the rendering engine: chromium, firefox or webkit"""
        self._options['browser'] = kind
        return self

    def headless(self, enable: bool = True):
        self._options['headless'] = enable
        return self

    def timeout(self, milliseconds: int):
        self._options['timeout'] = milliseconds
        return self

    def exclude(self, *selectors: str):
        """Replace the exclusion list"""
        self._options['exclude_selectors'] = list(selectors)
        return self

    def group_by(self, *selectors: str):
        """Extract per section; implies structured output"""
        self._options['section_selectors'] = list(self._options['section_selectors']) + list(selectors)
        if selectors:
            self._options['structured'] = True
        return self

    def wait_for(self, selector: Optional[str]):
        self._options['wait_for_selector'] = selector
        return self

    def follow_redirects(self, enable: bool = True):
        self._options['follow_redirects'] = enable
        return self

    def structured(self, enable: bool = True):
        self._options['structured'] = enable
        return self

    def user_agent(self, user_agent: str):
        self._options['user_agent'] = user_agent
        return self

    def with_session(self, session):
        """Reuse an externally managed BrowserSession"""
        self._session = session
        return self

    def with_log_manager(self, log_manager):
        self._log_manager = log_manager
        return self

    def build_config(self) -> ScraperConfig:
        return ScraperConfig(**self._options).validate()

    def build(self) -> WebScraper:
        """Build the configured scraper"""
        return WebScraper(self.build_config(), session=self._session, log_manager=self._log_manager)
