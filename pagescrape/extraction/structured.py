"""
Structured Extraction - Decomposes a page into headings, paragraphs, links,
lists, images and residual text, optionally grouped into sections
"""

import logging
from typing import List, Sequence
from urllib.parse import urljoin

from bs4 import Tag

from ..errors import SectionsNotFoundSignal
from .document import Document, element_text, parent_tag_name, remove_excluded, text_nodes
from .models import HEADING_TAGS, ExtractionResult, Image, Link, ListBlock, Section, StructuredContent

logger = logging.getLogger(__name__)

# Text directly inside these tags is already captured by a structural field
OTHER_TEXT_EXCLUDED_PARENTS = {'p', 'a', 'li', *HEADING_TAGS}


class StructuredExtractor:
    """Extracts structured content from a loaded Document"""

    def extract(self, document: Document,
                exclude_selectors: Sequence[str] = (),
                section_selectors: Sequence[str] = ()) -> ExtractionResult:
        """
        Extract structured content, mutating the document's tree

        Args:
            document: Parsed page snapshot
            exclude_selectors: CSS selectors whose matches are removed first
            section_selectors: CSS selectors that switch on section mode

        Raises:
            SectionsNotFoundSignal: if section selectors are given and none match
        """
        remove_excluded(document, exclude_selectors)

        result = ExtractionResult(title=document.title)

        if not section_selectors:
            self._fill(result, document.body, document.base_url)
            return result

        targets = self._find_sections(document, section_selectors)
        if not targets:
            raise SectionsNotFoundSignal(list(section_selectors))

        logger.debug(f"Found {len(targets)} section(s) for {document.url}")
        result.sections = [
            self._build_section(element, index, document.base_url)
            for index, element in enumerate(targets)
        ]
        return result

    def _find_sections(self, document: Document, selectors: Sequence[str]) -> List[Tag]:
        """Union of all selector matches, first match wins, deduplicated by identity"""
        seen = set()
        sections = []
        for selector in selectors:
            for element in document.soup.select(selector):
                if id(element) in seen:
                    continue
                seen.add(id(element))
                sections.append(element)
        return sections

    def _build_section(self, element: Tag, index: int, base_url: str) -> Section:
        section = Section(id=self._section_id(element, index), title=self._section_title(element))
        self._fill(section, element, base_url)
        return section

    @staticmethod
    def _section_id(element: Tag, index: int) -> str:
        element_id = element.get('id')
        if element_id:
            return element_id
        class_names = element.get('class')
        if class_names:
            return ' '.join(class_names) if isinstance(class_names, list) else class_names
        return f"section-{index}"

    @staticmethod
    def _section_title(element: Tag):
        first_heading = element.find(HEADING_TAGS)
        if first_heading is None:
            return None
        return element_text(first_heading).strip()

    def _fill(self, content: StructuredContent, element: Tag, base_url: str) -> None:
        content.headings = self._extract_headings(element)
        content.paragraphs = self._texts(element.find_all('p'))
        content.links = self._extract_links(element, base_url)
        content.lists = self._extract_lists(element)
        content.images = self._extract_images(element, base_url)
        content.other_text = self._extract_other_text(element)

    @staticmethod
    def _texts(elements) -> List[str]:
        texts = []
        for el in elements:
            text = element_text(el).strip()
            if text:
                texts.append(text)
        return texts

    def _extract_headings(self, element: Tag):
        headings = {}
        for tag in HEADING_TAGS:
            texts = self._texts(element.find_all(tag))
            if texts:
                headings[tag] = texts
        return headings

    @staticmethod
    def _extract_links(element: Tag, base_url: str) -> List[Link]:
        links = []
        for anchor in element.find_all('a', href=True):
            text = element_text(anchor).strip()
            if not text:
                continue
            links.append(Link(text=text, href=urljoin(base_url, anchor['href'].strip())))
        return links

    def _extract_lists(self, element: Tag) -> List[ListBlock]:
        lists = []
        for list_element in element.find_all(['ul', 'ol']):
            items = self._texts(list_element.find_all('li'))
            if items:
                lists.append(ListBlock(type=list_element.name.lower(), items=items))
        return lists

    @staticmethod
    def _extract_images(element: Tag, base_url: str) -> List[Image]:
        images = []
        for img in element.find_all('img', src=True):
            src = img['src'].strip()
            if not src:
                continue
            images.append(Image(
                src=urljoin(base_url, src),
                alt=img.get('alt') or '',
                title=img.get('title') or ''
            ))
        return images

    @staticmethod
    def _extract_other_text(element: Tag) -> List[str]:
        other_text = []
        for node in text_nodes(element):
            if parent_tag_name(node) in OTHER_TEXT_EXCLUDED_PARENTS:
                continue
            text = str(node).strip()
            if text:
                other_text.append(text)
        return other_text
