import logging
from pathlib import Path
from typing import Sequence, Union

import aiofiles

from ..scraper.result import Outcome
from .output_format import OutputFormat
from .serializers import to_csv, to_json, to_txt

logger = logging.getLogger(__name__)

_SERIALIZERS = {
    OutputFormat.JSON: to_json,
    OutputFormat.TXT: to_txt,
    OutputFormat.CSV: to_csv,
}


class ResultWriter:
    """Writes Outcome lists to files below an output directory"""

    def __init__(self, output_dir: Union[str, Path] = '.'):
        self.output_dir = Path(output_dir)

    def get_file_path(self, filename: Union[str, Path]) -> Path:
        """Resolve filename against the output directory and create its parent

        Absolute filenames are used as given.
        """
        file_path = self.output_dir / filename
        file_path.parent.mkdir(parents=True, exist_ok=True)
        return file_path

    async def save(self, outcomes: Sequence[Outcome], filename: Union[str, Path],
                   fmt: Union[str, OutputFormat, None] = None) -> Path:
        """
        Serialize outcomes and write them to filename

        Args:
            outcomes: Outcomes in the order they should appear
            filename: Target file, relative to the output directory
            fmt: json, txt or csv; inferred from the extension when omitted

        Returns:
            Path of the written file

        Raises:
            ValidationError: for an unsupported format
        """
        output_format = OutputFormat.parse(fmt, str(filename))
        content = _SERIALIZERS[output_format](outcomes)

        file_path = self.get_file_path(filename)
        async with aiofiles.open(file_path, 'w', encoding='utf-8', newline='') as f:
            await f.write(content)

        logger.info(f"Results saved to: {file_path}")
        return file_path
