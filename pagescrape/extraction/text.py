import re
from typing import Sequence

from .document import Document, remove_excluded, text_nodes
from .models import PlainTextResult

_WHITESPACE = re.compile(r'\s+')


def extract_plain_text(document: Document, exclude_selectors: Sequence[str] = ()) -> PlainTextResult:
    """Join every non-empty text node under body into one normalised string"""
    remove_excluded(document, exclude_selectors)

    pieces = []
    for node in text_nodes(document.body):
        text = str(node).strip()
        if text:
            pieces.append(text)

    text = _WHITESPACE.sub(' ', ' '.join(pieces)).strip()
    return PlainTextResult(text=text)
