"""Logging configuration for the application.

Production runs emit key="value" lines that log collectors can parse;
development runs use a plain human readable format.
"""

import logging
import sys
from typing import Any, Dict, Optional

from thesis_registry.config import get_settings


class StructuredFormatter(logging.Formatter):
    """Formatter producing key="value" pairs.

    Any attribute passed through ``extra=`` is appended after the standard
    timestamp/level/logger/message fields.
    """

    # Standard LogRecord attributes that should not be included as extra fields
    _STANDARD_ATTRS = frozenset(
        {
            "name",
            "msg",
            "args",
            "created",
            "filename",
            "funcName",
            "levelname",
            "levelno",
            "lineno",
            "module",
            "msecs",
            "message",
            "pathname",
            "process",
            "processName",
            "relativeCreated",
            "thread",
            "threadName",
            "taskName",
            "exc_info",
            "exc_text",
            "stack_info",
            "asctime",
        }
    )

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with structured information.

        Args:
            record: Log record to format

        Returns:
            Formatted log string
        """
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in self._STANDARD_ATTRS and not key.startswith("_"):
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return " ".join(f'{key}="{value}"' for key, value in log_data.items())


def setup_logging(level: Optional[str] = None) -> None:
    """Configure the root logger from application settings.

    Args:
        level: Overrides LOG_LEVEL from settings when given.
    """
    settings = get_settings()
    level = (level or settings.LOG_LEVEL).upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    if settings.is_production:
        formatter: logging.Formatter = StructuredFormatter(
            datefmt="%Y-%m-%d %H:%M:%S"
        )
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Third-party loggers are noisy at INFO
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("alembic").setLevel(logging.INFO)

    root_logger.info(
        "Logging configured",
        extra={"log_level": level, "environment": settings.ENVIRONMENT},
    )
