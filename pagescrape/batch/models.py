from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

from ..config import ScrapeRequest, ScraperConfig
from ..errors import OutcomeKind, ValidationError
from ..scraper.result import Outcome


@dataclass(frozen=True)
class BatchJob:
    """An ordered list of requests plus pacing settings

    inter_chunk_delay is in milliseconds.
    """
    requests: Tuple[ScrapeRequest, ...]
    batch_size: int = 5
    inter_chunk_delay: float = 1000
    concurrent: bool = False

    def __post_init__(self):
        object.__setattr__(self, 'requests', tuple(self.requests))
        if isinstance(self.batch_size, bool) or not isinstance(self.batch_size, int) or self.batch_size < 1:
            raise ValidationError(f"batch_size must be an integer >= 1, got {self.batch_size!r}")
        delay = self.inter_chunk_delay
        if isinstance(delay, bool) or not isinstance(delay, (int, float)) or delay < 0:
            raise ValidationError(f"inter_chunk_delay must be a number of milliseconds >= 0, got {self.inter_chunk_delay!r}")

    @classmethod
    def from_urls(cls, urls: Sequence[str], config: ScraperConfig = None, **kwargs) -> 'BatchJob':
        config = config or ScraperConfig()
        return cls(requests=tuple(ScrapeRequest(url, config) for url in urls), **kwargs)

    def chunks(self) -> List[Tuple[ScrapeRequest, ...]]:
        """Consecutive groups of batch_size requests; the last may be shorter"""
        return [
            self.requests[i:i + self.batch_size]
            for i in range(0, len(self.requests), self.batch_size)
        ]


@dataclass
class BatchReport:
    """Outcomes in request order plus derived statistics"""
    outcomes: List[Outcome] = field(default_factory=list)
    duration: float = 0.0

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def counts(self) -> Dict[OutcomeKind, int]:
        counts = {kind: 0 for kind in OutcomeKind}
        for outcome in self.outcomes:
            counts[outcome.kind] += 1
        return counts

    @property
    def success_count(self) -> int:
        return self.counts[OutcomeKind.SUCCESS]

    @property
    def failure_count(self) -> int:
        return self.total - self.success_count

    @property
    def success_rate(self) -> float:
        if self.total == 0:
            return 0.0
        return self.success_count / self.total

    def summary(self) -> Dict[str, Any]:
        return {
            'total': self.total,
            'successful': self.success_count,
            'failed': self.failure_count,
            'success_rate': self.success_rate,
            'counts': {kind.value: count for kind, count in self.counts.items()},
            'duration_seconds': round(self.duration, 3)
        }

    def to_dict(self) -> Dict[str, Any]:
        return {**self.summary(), 'outcomes': [outcome.to_dict() for outcome in self.outcomes]}
