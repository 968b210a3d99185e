"""
Batch processing of many URLs
"""

from .coordinator import BatchCoordinator
from .models import BatchJob, BatchReport

__all__ = [
    'BatchCoordinator',
    'BatchJob',
    'BatchReport'
]
