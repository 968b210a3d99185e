"""
Redirect Detection - Watches navigation responses when redirects are disallowed
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

REDIRECT_STATUSES = frozenset({301, 302, 303, 307, 308})


@dataclass
class RedirectInfo:
    status: int
    location: str


class RedirectDetector:
    """Records the first redirect response in the chain started by a navigation

    Attach before calling page.goto(); `detected` is set the moment a
    redirect response arrives so navigation can be abandoned early.
    """

    def __init__(self, url: str):
        self.url = url
        self.redirect: Optional[RedirectInfo] = None
        self.detected = asyncio.Event()
        self._page = None

    def attach(self, page) -> 'RedirectDetector':
        self._page = page
        page.on('response', self.on_response)
        return self

    def detach(self) -> None:
        if self._page is not None:
            try:
                self._page.remove_listener('response', self.on_response)
            except Exception as e:
                logger.debug(f"Could not remove response listener: {e}")
            self._page = None

    def on_response(self, response) -> None:
        if self.redirect is not None:
            return
        # Only hops of the top-level navigation count
        if not response.request.is_navigation_request():
            return
        if self._page is not None and response.frame != self._page.main_frame:
            return

        status = response.status
        if status not in REDIRECT_STATUSES:
            return

        location = response.headers.get('location') or response.url
        self.redirect = RedirectInfo(status=status, location=location)
        logger.info(f"Redirect detected for {self.url}: {status} -> {location}")
        self.detected.set()

    async def wait(self) -> RedirectInfo:
        await self.detected.wait()
        return self.redirect
