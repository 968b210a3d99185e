from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

HEADING_TAGS = ['h1', 'h2', 'h3', 'h4', 'h5', 'h6']


@dataclass
class Link:
    text: str
    href: str


@dataclass
class ListBlock:
    """A <ul> or <ol> with its non-empty item texts"""
    type: str
    items: List[str] = field(default_factory=list)


@dataclass
class Image:
    src: str
    alt: str = ''
    title: str = ''


@dataclass
class StructuredContent:
    """Structural fields shared by a whole document and a single section"""
    headings: Dict[str, List[str]] = field(default_factory=dict)
    paragraphs: List[str] = field(default_factory=list)
    other_text: List[str] = field(default_factory=list)
    links: List[Link] = field(default_factory=list)
    lists: List[ListBlock] = field(default_factory=list)
    images: List[Image] = field(default_factory=list)

    def heading_texts(self) -> List[str]:
        """All heading texts, h1 first through h6"""
        return [text for tag in HEADING_TAGS for text in self.headings.get(tag, [])]

    def content_dict(self) -> Dict[str, Any]:
        return {
            'headings': {tag: list(texts) for tag, texts in self.headings.items()},
            'paragraphs': list(self.paragraphs),
            'other_text': list(self.other_text),
            'links': [asdict(link) for link in self.links],
            'lists': [asdict(block) for block in self.lists],
            'images': [asdict(image) for image in self.images],
        }


@dataclass
class Section(StructuredContent):
    """A sub-tree matched by a section selector"""
    id: str = ''
    title: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'title': self.title, **self.content_dict()}


@dataclass
class ExtractionResult(StructuredContent):
    """Structured content of a page

    When sections is set the page was extracted in section mode and the
    top-level structural fields stay empty.
    """
    title: str = ''
    sections: Optional[List[Section]] = None

    @property
    def is_sectioned(self) -> bool:
        return self.sections is not None

    def all_paragraphs(self) -> List[str]:
        if self.sections is None:
            return list(self.paragraphs)
        return [p for section in self.sections for p in section.paragraphs]

    def to_dict(self) -> Dict[str, Any]:
        if self.sections is not None:
            return {'title': self.title, 'sections': [s.to_dict() for s in self.sections]}
        return {'title': self.title, **self.content_dict()}


@dataclass
class PlainTextResult:
    """Whitespace-normalised text of a page"""
    text: str
    length: int = 0

    def __post_init__(self):
        self.length = len(self.text)

    def to_dict(self) -> Dict[str, Any]:
        return {'text': self.text, 'length': self.length}
