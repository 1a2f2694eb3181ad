"""
Logging for gortail.

stderr is also the diagnostic channel carrying separator/frame records, so
log records go to whatever ``sys.stderr`` is at emit time, the same stream
the records are written to. A record is always emitted between two complete
diagnostic records, never inside one, because each record is written and
flushed in a single call.
"""

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class DiagnosticStreamHandler(logging.StreamHandler):
    """StreamHandler that follows sys.stderr when it is replaced."""

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    def emit(self, record: logging.LogRecord) -> None:
        self.stream = sys.stderr
        super().emit(record)


def _level_from_env(default_level: int) -> int:
    level_name = os.getenv('GORTAIL_LOG_LEVEL', logging.getLevelName(default_level))
    level = logging.getLevelName(level_name.upper())
    return level if isinstance(level, int) else default_level


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = DiagnosticStreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    # Frames are the payload of stderr; library modules only speak up for problems.
    # The CLI reports its run summary at INFO. GORTAIL_LOG_LEVEL overrides both.
    default_level = logging.INFO if name.endswith('.cli') else logging.WARNING
    logger.setLevel(_level_from_env(default_level))
    return logger
