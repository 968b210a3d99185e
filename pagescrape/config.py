"""
Scraper configuration - one explicit, typed value per scrape
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urlparse

from .errors import ValidationError

BROWSER_KINDS = ('chromium', 'firefox', 'webkit')

DEFAULT_EXCLUDE_SELECTORS = (
    'script', 'style', 'nav', 'footer', 'aside', '.ads', '.advertisement'
)

DEFAULT_USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36'
)

ALLOWED_SCHEMES = ('http', 'https', 'file')


def _as_tuple(selectors) -> Tuple[str, ...]:
    if not selectors:
        return ()
    if isinstance(selectors, str):
        return (selectors,)
    return tuple(selectors)


@dataclass(frozen=True)
class ScraperConfig:
    """Configuration for scraping a single URL

    timeout is in milliseconds, matching the rendering engine.
    Setting section_selectors always turns on structured extraction.
    """
    browser: str = 'chromium'
    headless: bool = True
    timeout: int = 30000
    exclude_selectors: Tuple[str, ...] = DEFAULT_EXCLUDE_SELECTORS
    section_selectors: Tuple[str, ...] = ()
    wait_for_selector: Optional[str] = None
    user_agent: str = DEFAULT_USER_AGENT
    follow_redirects: bool = True
    structured: bool = False

    def __post_init__(self):
        # Lists handed in from JSON presets or the CLI are frozen into tuples
        object.__setattr__(self, 'exclude_selectors', _as_tuple(self.exclude_selectors))
        object.__setattr__(self, 'section_selectors', _as_tuple(self.section_selectors))
        if self.section_selectors and not self.structured:
            object.__setattr__(self, 'structured', True)

    def validate(self) -> 'ScraperConfig':
        """Raise ValidationError if any option is out of range"""
        if self.browser not in BROWSER_KINDS:
            raise ValidationError(
                f"Unsupported browser '{self.browser}' (expected one of: {', '.join(BROWSER_KINDS)})"
            )
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, int) or self.timeout <= 0:
            raise ValidationError(f"Timeout must be a positive number of milliseconds, got {self.timeout!r}")
        for selector in self.exclude_selectors + self.section_selectors:
            if not isinstance(selector, str) or not selector.strip():
                raise ValidationError(f"Invalid selector: {selector!r}")
        if self.wait_for_selector is not None and not str(self.wait_for_selector).strip():
            raise ValidationError("wait_for_selector must not be empty")
        return self

    def with_options(self, **changes) -> 'ScraperConfig':
        """Return a copy with the given fields replaced"""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            data[f.name] = list(value) if isinstance(value, tuple) else value
        return data


@dataclass(frozen=True)
class ScrapeRequest:
    """One URL together with the configuration used to scrape it"""
    url: str
    config: ScraperConfig = field(default_factory=ScraperConfig)


def validate_url(url: str) -> str:
    """Check that url is an absolute http(s) or file URL

    Returns:
        The URL with surrounding whitespace removed

    Raises:
        ValidationError: if the URL is empty, relative or uses another scheme
    """
    if not isinstance(url, str) or not url.strip():
        raise ValidationError("URL is required")

    url = url.strip()
    parsed = urlparse(url)
    if parsed.scheme not in ALLOWED_SCHEMES:
        raise ValidationError(f"URL must start with http://, https://, or file://: {url}")
    if parsed.scheme in ('http', 'https') and not parsed.netloc:
        raise ValidationError(f"URL has no host: {url}")
    if parsed.scheme == 'file' and not parsed.path:
        raise ValidationError(f"file:// URL has no path: {url}")
    return url
