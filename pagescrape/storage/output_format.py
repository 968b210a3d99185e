from enum import Enum
from pathlib import Path
from typing import Optional, Union

from ..errors import ValidationError


class OutputFormat(Enum):
    """Supported result file formats"""
    JSON = 'json'
    TXT = 'txt'
    CSV = 'csv'

    @classmethod
    def parse(cls, value: Union[str, 'OutputFormat', None], filename: Optional[str] = None) -> 'OutputFormat':
        """Resolve a format name, falling back to the filename extension, then JSON"""
        if isinstance(value, OutputFormat):
            return value
        if value is None and filename:
            suffix = Path(filename).suffix.lstrip('.').lower()
            value = suffix if suffix in {f.value for f in cls} else None
        if value is None:
            return cls.JSON
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValidationError(f"Unsupported format: {value}") from None
