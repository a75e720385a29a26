"""Logging configuration for the tagging pipeline."""

from __future__ import annotations

import logging
import sys

from lending_tags.utils.config import LOG_FILE, LOGS_DIR

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _attach_handlers(logger: logging.Logger) -> None:
    """Attach the stderr and file handlers once per named logger."""
    if logger.handlers:
        return

    # stdout is reserved for script output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(console_handler)

    LOGS_DIR.mkdir(exist_ok=True)
    file_handler = logging.FileHandler(LOG_FILE, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(file_handler)


class PipelineLogger:
    """
    Named logger that collects run counters for the fetch pipeline.

    Handlers are attached on the first emitted record, so importing a module
    that holds a PipelineLogger touches neither stderr nor the log directory.
    """

    def __init__(self, name: str) -> None:
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG)
        self.metrics: dict[str, float] = {}

    def _emit(self, level: int, message: str, *args: object, **kwargs: object) -> None:
        _attach_handlers(self.logger)
        # Report the caller's frame, not this wrapper's
        kwargs.setdefault("stacklevel", 3)
        self.logger.log(level, message, *args, **kwargs)

    def debug(self, message: str, *args: object, **kwargs: object) -> None:
        self._emit(logging.DEBUG, message, *args, **kwargs)

    def info(self, message: str, *args: object, **kwargs: object) -> None:
        self._emit(logging.INFO, message, *args, **kwargs)

    def warning(self, message: str, *args: object, **kwargs: object) -> None:
        self._emit(logging.WARNING, message, *args, **kwargs)

    def error(self, message: str, *args: object, **kwargs: object) -> None:
        self._emit(logging.ERROR, message, *args, **kwargs)

    def record_metric(self, name: str, value: float) -> None:
        """Store a run counter (pages, markets, tags, rejections) for the summary."""
        self.metrics[name] = value
        self.debug(f"Metric {name}: {value}")

    def log_summary(self) -> None:
        """Write every recorded counter at INFO level."""
        if not self.metrics:
            return

        lines = [f"{name}: {value}" for name, value in self.metrics.items()]
        self.info("Run summary - " + ", ".join(lines))


def get_logger(name: str) -> PipelineLogger:
    """Return a PipelineLogger for a module (usually __name__)."""
    return PipelineLogger(name)
