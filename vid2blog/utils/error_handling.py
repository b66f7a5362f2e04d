"""
Centralized error types and diagnostics for the application.
"""

import json
from typing import Dict, Any

from vid2blog.config import config
from vid2blog.utils.logger import logging


class Vid2BlogError(Exception):
    """Base class for errors raised by the conversion pipeline."""


class TimestampParseError(Vid2BlogError, ValueError):
    """Raised when a timestamp string matches none of the accepted shapes."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid timestamp format: {value!r}")


class ArticleGenerationError(Vid2BlogError):
    """Raised when the language model path cannot produce a usable article."""


def log_diagnostic_info(context: Dict[str, Any]):
    """
    Log diagnostic information for debugging.

    Args:
        context: Dictionary of diagnostic information
    """
    if not config.DEBUG:
        return

    try:
        logging.debug(f"Diagnostic info: {json.dumps(context, default=str)}")
    except (TypeError, ValueError) as e:
        logging.error(f"Error logging diagnostic info: {str(e)}")
