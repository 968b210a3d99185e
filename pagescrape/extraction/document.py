"""
Document helpers - parse a page snapshot and walk its text the way the DOM does
"""

import logging
from typing import Iterable, Iterator, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import Comment, Declaration, Doctype, ProcessingInstruction

logger = logging.getLogger(__name__)

# Strings bs4 keeps in the tree that are not DOM text nodes
_NON_TEXT_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)


class Document:
    """A parsed page plus the URL its relative links resolve against"""

    def __init__(self, soup: BeautifulSoup, url: str = ''):
        self.soup = soup
        self.url = url
        self.base_url = self._resolve_base_url()

    def _resolve_base_url(self) -> str:
        base = self.soup.find('base', href=True)
        if base and base['href'].strip():
            return urljoin(self.url, base['href'].strip())
        return self.url

    @property
    def body(self) -> Tag:
        return self.soup.body or self.soup

    @property
    def title(self) -> str:
        """Document title with whitespace collapsed, like document.title"""
        title_tag = self.soup.find('title')
        if not title_tag:
            return ''
        return ' '.join(element_text(title_tag).split())


def load_document(html: str, url: str = '') -> Document:
    """Parse serialized HTML into a Document"""
    return Document(BeautifulSoup(html, 'html.parser'), url)


def is_text_node(node) -> bool:
    return isinstance(node, NavigableString) and not isinstance(node, _NON_TEXT_STRINGS)


def text_nodes(element: Tag) -> Iterator[NavigableString]:
    """Yield every text node below element in document order"""
    for node in element.descendants:
        if is_text_node(node):
            yield node


def element_text(element: Tag) -> str:
    """Concatenated text of all descendant text nodes (DOM textContent)"""
    return ''.join(str(node) for node in text_nodes(element))


def parent_tag_name(node: NavigableString) -> Optional[str]:
    parent = node.parent
    return parent.name.lower() if isinstance(parent, Tag) and parent.name else None


def remove_excluded(document: Document, selectors: Iterable[str]) -> int:
    """Detach every element matching each selector, in order

    Each selector is evaluated against the tree left by the previous one.

    Returns:
        Number of elements removed
    """
    removed = 0
    for selector in selectors:
        matches = document.soup.select(selector)
        for element in matches:
            element.extract()
        removed += len(matches)
        if matches:
            logger.debug(f"Excluded {len(matches)} element(s) matching '{selector}'")
    return removed
