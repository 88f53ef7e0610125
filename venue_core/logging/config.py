# =============================================================================
# venue_core/logging/config.py
# Logging setup for the site data layer
# =============================================================================

import logging
import sys
import time
from datetime import date
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

DEFAULT_LOG_DIR = Path("logs")

# Client libraries that log every HTTP request at INFO
QUIET_LOGGERS = ("urllib3", "httpx", "httpcore", "hpack", "supabase", "postgrest")


def site_log_path(log_dir: Union[str, Path] = DEFAULT_LOG_DIR, day: Optional[date] = None) -> Path:
    """One log file per day: logs/site_YYYY-MM-DD.log"""
    day = day or date.today()
    return Path(log_dir) / f"site_{day.isoformat()}.log"


def setup_logging(
    level: int = logging.INFO,
    log_to_file: bool = False,
    log_dir: Union[str, Path] = DEFAULT_LOG_DIR,
) -> Optional[Path]:
    """
    Send venue_core logs to stdout, and to the day's log file when asked.

    Returns the log file path, or None when logging to stdout only.
    """
    handlers = [logging.StreamHandler(sys.stdout)]
    log_path = None
    if log_to_file:
        log_path = site_log_path(log_dir)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    # Streamlit reruns the script; replace handlers rather than stacking them
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT, handlers=handlers, force=True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logging.getLogger("venue_core").info(
        f"Logging at {logging.getLevelName(level)}" + (f" to {log_path}" if log_path else "")
    )
    return log_path


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class LogContext:
    """Times a data-layer operation and logs its outcome."""

    def __init__(self, logger: logging.Logger, operation: str):
        self.logger = logger
        self.operation = operation
        self.elapsed: Optional[float] = None
        self._started: Optional[float] = None

    def __enter__(self):
        self._started = time.perf_counter()
        self.logger.info(f"{self.operation}... started")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed = time.perf_counter() - self._started
        if exc_type is None:
            self.logger.info(f"{self.operation}... completed ({self.elapsed:.2f}s)")
        else:
            self.logger.error(f"{self.operation}... failed ({self.elapsed:.2f}s): {exc_val}", exc_info=True)
        return False
