import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional


class LogManager:
    """Logging setup with optional file output and a JSON-lines outcome log"""

    def __init__(self, log_dir: Optional[str] = None, log_level: str = "INFO"):
        self.log_dir = Path(log_dir) if log_dir else None
        if self.log_dir:
            self.log_dir.mkdir(parents=True, exist_ok=True)

        self.perf_logger = logging.getLogger('performance')
        self.setup_logging(log_level)

    def setup_logging(self, log_level: str):
        """Set up console logging, plus daily files when a log_dir is configured"""
        level = getattr(logging, log_level.upper(), None)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {log_level}")

        detailed_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
        )
        simple_formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s'
        )

        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(simple_formatter)
        root_logger.addHandler(console_handler)

        self.perf_logger.handlers.clear()
        self.perf_logger.setLevel(logging.INFO)
        self.perf_logger.propagate = False

        if not self.log_dir:
            self.perf_logger.addHandler(logging.NullHandler())
            return

        today = datetime.now().strftime('%Y%m%d')

        file_handler = logging.FileHandler(self.log_dir / f"scraper_{today}.log")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(file_handler)

        error_handler = logging.FileHandler(self.log_dir / f"errors_{today}.log")
        error_handler.setLevel(logging.WARNING)
        error_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(error_handler)

        self.perf_logger.addHandler(logging.FileHandler(self.log_dir / f"outcomes_{today}.log"))

    def log_outcome_event(self, outcome, duration: float):
        """Record one scrape outcome as a JSON line"""
        event_data = {
            'timestamp': datetime.now().isoformat(),
            'url': outcome.url,
            'kind': outcome.kind.value,
            'duration': round(duration, 3),
        }
        if not outcome.ok:
            event_data['message'] = outcome.message
        self.perf_logger.info(json.dumps(event_data))

    def export_report_json(self, report, filename: str = None) -> Optional[Path]:
        """Export a batch report summary to the log directory"""
        if not self.log_dir:
            return None
        if filename is None:
            filename = f"batch_report_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"

        export_path = self.log_dir / filename
        with open(export_path, 'w') as f:
            json.dump(report.summary(), f, indent=2, default=str)

        logging.info(f"Batch report exported to {export_path}")
        return export_path
