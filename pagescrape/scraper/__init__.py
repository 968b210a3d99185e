"""
Single-request scraping: orchestration, redirect policy and Outcomes
"""

from .base import WebScraper
from .builder import ScraperBuilder
from .redirect import REDIRECT_STATUSES, RedirectDetector, RedirectInfo
from .result import Failure, Outcome, RedirectDetected, SectionsNotFound, SelectorTimeout, Success

__all__ = [
    'WebScraper',
    'ScraperBuilder',
    'REDIRECT_STATUSES',
    'RedirectDetector',
    'RedirectInfo',
    'Outcome',
    'Success',
    'RedirectDetected',
    'SectionsNotFound',
    'SelectorTimeout',
    'Failure'
]
