"""
pagescrape - Rendered web page scraping into structured or plain-text records
"""

from .batch import BatchCoordinator, BatchJob, BatchReport
from .browser import BrowserSession
from .config import ScrapeRequest, ScraperConfig
from .errors import (
    EngineLaunchError,
    OutcomeError,
    OutcomeKind,
    ScraperError,
    ValidationError,
)
from .presets import load_presets, resolve_config
from .scraper import (
    Failure,
    Outcome,
    RedirectDetected,
    ScraperBuilder,
    SectionsNotFound,
    SelectorTimeout,
    Success,
    WebScraper,
)

__version__ = '1.0.0'

__all__ = [
    'BatchCoordinator',
    'BatchJob',
    'BatchReport',
    'BrowserSession',
    'ScrapeRequest',
    'ScraperConfig',
    'EngineLaunchError',
    'OutcomeError',
    'OutcomeKind',
    'ScraperError',
    'ValidationError',
    'load_presets',
    'resolve_config',
    'Failure',
    'Outcome',
    'RedirectDetected',
    'ScraperBuilder',
    'SectionsNotFound',
    'SelectorTimeout',
    'Success',
    'WebScraper'
]
