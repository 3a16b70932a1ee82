"""Logging infrastructure for tablespec.

This module provides structured logging with JSON output, context tracking,
and OpenTelemetry trace correlation.
"""

from tablespec.logging.filters import ContextFilter
from tablespec.logging.logger import CustomJsonFormatter, get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "CustomJsonFormatter",
    "ContextFilter",
]
