"""
Error taxonomy - Outcome kinds and the exceptions raised around them
"""

from enum import Enum
from typing import List


class OutcomeKind(Enum):
    """Classification of the result of scraping one URL"""
    SUCCESS = "success"
    REDIRECT_DETECTED = "redirect_detected"
    SECTIONS_NOT_FOUND = "sections_not_found"
    SELECTOR_TIMEOUT = "selector_timeout"
    FAILURE = "failure"


class ScraperError(Exception):
    """Base class for all scraper errors"""


class ValidationError(ScraperError):
    """Malformed URL, option or argument, rejected before any navigation"""


class EngineLaunchError(ScraperError):
    """The rendering engine could not be started - fatal for a whole run"""


class SectionsNotFoundSignal(ScraperError):
    """Raised by the extractor when no configured section selector matched"""

    def __init__(self, selectors: List[str]):
        self.selectors = list(selectors)
        super().__init__(f"No sections found with selectors: {', '.join(self.selectors)}")


class OutcomeError(ScraperError):
    """Wraps a non-success Outcome for callers that prefer exceptions"""

    def __init__(self, outcome):
        self.outcome = outcome
        self.kind = outcome.kind
        super().__init__(outcome.message)
