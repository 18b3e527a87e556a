"""Observability module for logging."""

from teen_patti.observability.logger import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
