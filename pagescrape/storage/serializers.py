"""
Result Serializers - Render Outcome lists as JSON, TXT or CSV
"""

import csv
import io
import json
from typing import Sequence

from ..extraction.models import ExtractionResult
from ..scraper.result import Outcome, Success

CSV_COLUMNS = ['url', 'success', 'content_length', 'title', 'error', 'timestamp']


def to_json(outcomes: Sequence[Outcome]) -> str:
    return json.dumps([outcome.to_dict() for outcome in outcomes], indent=2, ensure_ascii=False)


def flatten_text(outcome: Success) -> str:
    """Best-effort plain text of a successful outcome

    Structured results give title, then headings (h1 to h6), then paragraphs,
    separated by blank lines.
    """
    result = outcome.result
    if not isinstance(result, ExtractionResult):
        return result.text

    parts = [result.title] if result.title else []
    blocks = result.sections if result.is_sectioned else [result]

    headings = [text for block in blocks for text in block.heading_texts()]
    if headings:
        parts.append('\n'.join(headings))

    paragraphs = [p for block in blocks for p in block.paragraphs]
    if paragraphs:
        parts.append('\n\n'.join(paragraphs))

    return '\n\n'.join(parts)


def to_txt(outcomes: Sequence[Outcome]) -> str:
    """One `=== url ===` block per successful outcome; failures are skipped"""
    return ''.join(
        f"=== {outcome.url} ===\n{flatten_text(outcome)}\n\n"
        for outcome in outcomes
        if outcome.ok
    )


def to_csv(outcomes: Sequence[Outcome]) -> str:
    """One row per outcome with every string field quoted"""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator='\n')
    writer.writerow(CSV_COLUMNS)

    for outcome in outcomes:
        if outcome.ok:
            content_length, title, error = outcome.content_length, outcome.title, ''
        else:
            content_length, title, error = 0, '', outcome.message
        writer.writerow([
            outcome.url,
            'true' if outcome.ok else 'false',
            content_length,
            title,
            error,
            outcome.timestamp
        ])

    return buffer.getvalue()
