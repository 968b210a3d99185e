"""
Content extraction from parsed page snapshots
"""

from .document import Document, load_document
from .models import ExtractionResult, Image, Link, ListBlock, PlainTextResult, Section
from .structured import StructuredExtractor
from .text import extract_plain_text

__all__ = [
    'Document',
    'load_document',
    'ExtractionResult',
    'Image',
    'Link',
    'ListBlock',
    'PlainTextResult',
    'Section',
    'StructuredExtractor',
    'extract_plain_text'
]
