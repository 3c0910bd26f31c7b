"""Logging setup for the API process.

Two log files are written next to the console output:
- info.log: everything at INFO and above
- error.log: ERROR and above (failed uploads, unhandled exceptions)
"""

import logging
import sys
from pathlib import Path

from famdocs.core.config import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Libraries that log every request or every parsed object at INFO/DEBUG.
NOISY_LOGGERS = ("httpx", "httpcore", "pypdf", "PIL")


def setup_logging(log_dir: Path | None = None) -> logging.Logger:
    """Install file and console handlers on the root logger.

    Args:
        log_dir: Directory of the log files. Defaults to logs/ in the
            project root.

    Returns:
        The configured root logger.
    """
    settings = get_settings()
    level = getattr(logging, settings.log_level, logging.INFO)

    log_dir = log_dir or Path(__file__).resolve().parents[2] / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    file_formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    for filename, file_level in (("info.log", logging.INFO), ("error.log", logging.ERROR)):
        handler = logging.FileHandler(log_dir / filename, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(file_formatter)
        root_logger.addHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(console_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    root_logger.info(f"Logging to {log_dir} at level {logging.getLevelName(level)}")
    return root_logger
