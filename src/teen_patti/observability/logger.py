"""Structured logging configuration for Teen Patti Table."""

import logging
import sys
from datetime import datetime, timezone
from typing import Any

ROOT_LOGGER_NAME = "teen_patti"


class StructuredFormatter(logging.Formatter):
    """Render records as `key=value | key=value` lines."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Context fields from ContextLogger (hand number, seat, ...)
        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        parts = [f"{k}={v}" for k, v in log_data.items() if v is not None]
        return " | ".join(parts)


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that merges bound context into every record."""

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        extra = kwargs.get("extra", {})
        extra["extra_fields"] = {**self.extra, **extra.get("extra_fields", {})}
        kwargs["extra"] = extra
        return msg, kwargs

    def bind(self, **context: Any) -> "ContextLogger":
        """Return a new adapter with additional context fields."""
        return ContextLogger(self.logger, {**self.extra, **context})


def setup_logging(
    level: int = logging.INFO,
    format_style: str = "structured",
    stream: Any = None,
) -> None:
    """
    Set up logging for the `teen_patti` logger tree.

    Args:
        level: Logging level (default: INFO)
        format_style: "structured" for key=value, "simple" for standard format
        stream: Output stream (default: stderr, so the terminal table on stdout stays clean)
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)

    if format_style == "structured":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    root_logger.addHandler(handler)

    # Suppress noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("LiteLLM").setLevel(logging.WARNING)
    logging.getLogger("litellm").setLevel(logging.WARNING)


def get_logger(name: str, **context: Any) -> ContextLogger:
    """
    Get a logger under the `teen_patti` tree with optional context fields.

    Example:
        logger = get_logger(__name__, hand=3)
        logger.info("Hand started")  # Includes hand=3
    """
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return ContextLogger(logging.getLogger(name), context)


# Initialize logging on import
setup_logging(level=logging.WARNING)
