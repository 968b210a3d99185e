"""
Scrape Outcome - Tagged result of processing a single URL
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, ClassVar, Dict, List, Optional, Union

from ..errors import OutcomeError, OutcomeKind
from ..extraction.models import ExtractionResult, PlainTextResult


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Outcome:
    """Base of the Outcome union; dispatch on `kind`"""
    kind: ClassVar[OutcomeKind]

    url: str
    timestamp: str = field(default_factory=_now, kw_only=True)

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @property
    def message(self) -> str:
        return ''

    def raise_for_outcome(self) -> 'Outcome':
        """Raise OutcomeError unless this is a Success"""
        if not self.ok:
            raise OutcomeError(self)
        return self

    def _payload(self) -> Dict[str, Any]:
        return {}

    def to_dict(self) -> Dict[str, Any]:
        data = {'url': self.url, 'kind': self.kind.value, 'success': self.ok}
        data.update(self._payload())
        if not self.ok:
            data['message'] = self.message
        data['timestamp'] = self.timestamp
        return data


@dataclass
class Success(Outcome):
    kind: ClassVar[OutcomeKind] = OutcomeKind.SUCCESS

    result: Union[ExtractionResult, PlainTextResult] = None

    @property
    def structured(self) -> bool:
        return isinstance(self.result, ExtractionResult)

    @property
    def title(self) -> str:
        return self.result.title if self.structured else ''

    @property
    def content_length(self) -> int:
        """Text length for plain results, joined paragraph length for structured ones"""
        if self.structured:
            return len(' '.join(self.result.all_paragraphs()))
        return self.result.length

    def _payload(self) -> Dict[str, Any]:
        return self.result.to_dict() if self.result is not None else {}


@dataclass
class RedirectDetected(Outcome):
    kind: ClassVar[OutcomeKind] = OutcomeKind.REDIRECT_DETECTED

    status: int = 0
    location: str = ''
    original_url: Optional[str] = None

    def __post_init__(self):
        if self.original_url is None:
            self.original_url = self.url

    @property
    def message(self) -> str:
        return f"Redirection is disallowed. Redirect detected ({self.status}) to: {self.location}"

    def _payload(self) -> Dict[str, Any]:
        return {'status': self.status, 'location': self.location, 'original_url': self.original_url}


@dataclass
class SectionsNotFound(Outcome):
    kind: ClassVar[OutcomeKind] = OutcomeKind.SECTIONS_NOT_FOUND

    selectors: List[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        return f"No sections found with selectors: {', '.join(self.selectors)}"

    def _payload(self) -> Dict[str, Any]:
        return {'selectors': list(self.selectors)}


@dataclass
class SelectorTimeout(Outcome):
    kind: ClassVar[OutcomeKind] = OutcomeKind.SELECTOR_TIMEOUT

    selectors: List[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        return f"Timeout waiting for selector(s): {', '.join(self.selectors)}"

    def _payload(self) -> Dict[str, Any]:
        return {'selectors': list(self.selectors)}


@dataclass
class Failure(Outcome):
    kind: ClassVar[OutcomeKind] = OutcomeKind.FAILURE

    error: str = ''

    @property
    def message(self) -> str:
        return self.error

    def _payload(self) -> Dict[str, Any]:
        return {'error': self.error}
