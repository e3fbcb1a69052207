"""Logging configuration module for secrets-guardian."""

from secrets_guardian.logging.setup import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
