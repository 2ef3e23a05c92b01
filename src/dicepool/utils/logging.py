"""
Logging setup for the dice pool engine.
Every module logs through logging.getLogger(__name__); this configures the
package root logger once for the CLI or an embedding application.
"""

import logging
import sys
from pathlib import Path

ROOT_LOGGER = "src.dicepool"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%H:%M:%S"

# ANSI colors per level
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;31m",
}
RESET = "\033[0m"


class ColorFormatter(logging.Formatter):
    """Formatter that wraps the level name in its ANSI color."""

    def format(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelno)
        if not color:
            return super().format(record)
        original = record.levelname
        record.levelname = f"{color}{original}{RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def setup_logging(
    level: str | int = "WARNING",
    log_file: Path | str | None = None,
    enable_color: bool = True,
) -> logging.Logger:
    """
    Configure the package logger and return it.

    Calling again replaces the handlers installed by the previous call, so
    repeated setup never duplicates output.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    for handler in list(logger.handlers):
        if getattr(handler, "_dicepool_handler", False):
            logger.removeHandler(handler)
            handler.close()

    stream = logging.StreamHandler(sys.stderr)
    use_color = enable_color and sys.stderr.isatty()
    formatter_cls = ColorFormatter if use_color else logging.Formatter
    stream.setFormatter(formatter_cls(LOG_FORMAT, DATE_FORMAT))
    stream._dicepool_handler = True
    logger.addHandler(stream)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        file_handler._dicepool_handler = True
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
