"""
Page Viewer Error Handler Module

This module provides a centralized error handling system that:
1. Logs errors to stdout/stderr for visibility
2. Provides a consistent error reporting pattern throughout the engine
"""

import traceback
import logging

logger = logging.getLogger("pageview.error_handler")


class LayoutInvariantError(RuntimeError):
    """A page expected in the current layout is missing from it."""


class ErrorHandler:
    """Centralized error handling for the page viewer engine."""

    @staticmethod
    def log_exception(e: Exception, context: str = "") -> str:
        """Log an exception with stack trace to stdout."""
        error_type = type(e).__name__
        error_msg = str(e)

        if context:
            logger.error(f"{context}: {error_type}: {error_msg}")
        else:
            logger.error(f"{error_type}: {error_msg}")

        # Log the full stack trace
        traceback.print_exc()

        return f"{error_type}: {error_msg}"

    @staticmethod
    def show_warning(message: str, title: str = "Warning") -> None:
        """Log a warning message."""
        logger.warning(f"[{title}] {message}")
