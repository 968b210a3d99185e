"""
Result serialization and persistence
"""

from .output_format import OutputFormat
from .result_writer import ResultWriter
from .serializers import to_csv, to_json, to_txt

__all__ = [
    'OutputFormat',
    'ResultWriter',
    'to_csv',
    'to_json',
    'to_txt'
]
