"""Shared fixtures: browser-free stand-ins for Playwright sessions and pages.

``FakeSession`` hands out ``FakePage`` objects that serve HTML from a dict of
``Site`` entries keyed by URL, emit ``response`` events the way Playwright does
for redirect chains, and record whether every page was closed.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from urllib.parse import urljoin, urlsplit, urlunsplit

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError


@dataclass
class Site:
    html: str = "<html><body></body></html>"
    status: int = 200
    redirect_to: Optional[str] = None
    error: Optional[Exception] = None
    ready: bool = True
    delay: float = 0.0
    hang: bool = False
    headers: Dict[str, str] = field(default_factory=dict)


def canonical(url: str) -> str:
    """Serialise a URL the way the browser reports it (empty path becomes '/')"""
    parts = urlsplit(url)
    if parts.scheme in ("http", "https") and not parts.path:
        parts = parts._replace(path="/")
    return urlunsplit(parts)


class FakeFrame:
    pass


class FakeRequest:
    def __init__(self, redirected_from=None, navigation=True):
        self.redirected_from = redirected_from
        self.navigation = navigation

    def is_navigation_request(self):
        return self.navigation


class FakeResponse:
    def __init__(self, url: str, status: int, headers=None, redirected_from=None,
                 navigation=True, frame=None):
        self.url = url
        self.status = status
        self.headers = headers or {}
        self.request = FakeRequest(redirected_from, navigation)
        self.frame = frame


class FakePage:
    def __init__(self, sites: Dict[str, Site]):
        self.sites = sites
        self.url = "about:blank"
        self.html = ""
        self.site = None
        self.main_frame = FakeFrame()
        self.closed = False
        self.default_timeout = None
        self.listeners: Dict[str, List] = {}
        self.waited_for: List[str] = []

    def on(self, event, handler):
        self.listeners.setdefault(event, []).append(handler)

    def remove_listener(self, event, handler):
        self.listeners.get(event, []).remove(handler)

    def set_default_timeout(self, timeout):
        self.default_timeout = timeout

    def _emit(self, url, status, headers=None, redirected_from=None, navigation=True, frame=None):
        response = FakeResponse(canonical(url), status, headers, redirected_from,
                                navigation=navigation, frame=frame or self.main_frame)
        for handler in list(self.listeners.get("response", [])):
            handler(response)
        return response

    async def goto(self, url, wait_until=None):
        site = self.sites.get(url)
        if site is None:
            raise Exception(f"net::ERR_NAME_NOT_RESOLVED at {url}")

        if site.redirect_to:
            first = self._emit(url, site.status, {"location": site.redirect_to, **site.headers})
            if site.hang:
                await asyncio.sleep(3600)
            target = self.sites[site.redirect_to]
            self._emit(site.redirect_to, target.status, redirected_from=first.request)
            url, site = site.redirect_to, target
        else:
            self._emit(url, site.status, site.headers)

        # subresource and child-frame redirects never count as the page's own
        self._emit(urljoin(url, "/favicon.ico"), 302, {"location": "/static/favicon.ico"},
                   navigation=False)
        self._emit(urljoin(url, "/embed"), 301, {"location": "https://ads.example/"},
                   frame=FakeFrame())

        if site.delay:
            await asyncio.sleep(site.delay)
        if site.error:
            raise site.error

        self.url = canonical(url)
        self.html = site.html
        self.site = site
        return FakeResponse(self.url, site.status)

    async def wait_for_selector(self, selector, timeout=None):
        self.waited_for.append(selector)
        if self.site is not None and not self.site.ready:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {selector}")

    async def content(self):
        return self.html

    async def close(self):
        self.closed = True


class FakeSession:
    def __init__(self, sites: Dict[str, Site], launch_error: Exception = None):
        self.sites = sites
        self.launch_error = launch_error
        self.pages: List[FakePage] = []
        self.started = False
        self.closed = False

    async def start(self):
        if self.launch_error:
            raise self.launch_error
        self.started = True

    async def close(self):
        self.closed = True

    @asynccontextmanager
    async def page(self):
        page = FakePage(self.sites)
        self.pages.append(page)
        try:
            yield page
        finally:
            await page.close()


@pytest.fixture
def make_session():
    def _make(sites, **kwargs):
        return FakeSession(sites, **kwargs)
    return _make


@pytest.fixture(autouse=True)
def restore_logging():
    """LogManager reconfigures the root logger; put it back after each test."""
    root = logging.getLogger()
    level = root.level
    yield
    # pytest's capture handlers are subclasses and manage themselves
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
