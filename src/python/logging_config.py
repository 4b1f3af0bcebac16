"""
Logging configuration for the page viewer engine.

This module provides centralized logging configuration with support for:
- Console output (development)
- Rotating file logs (production)
- Configurable log levels
- Structured log format
"""

import logging
import logging.handlers
from pathlib import Path
from config_manager import config


class ErrorRaisingHandler(logging.Handler):
    """Handler that raises an exception on ERROR or CRITICAL logs."""

    def emit(self, record):
        if record.levelno >= logging.ERROR:
            raise RuntimeError(f"Logger error: {record.getMessage()}")


def setup_logging(raise_on_error: bool = None):
    """
    Initialize logging configuration for the engine.

    Reads configuration from config.json and sets up:
    - Root logger with configured level
    - Console handler for development output
    - Rotating file handler for persistent logs
    - Consistent formatting across all handlers

    Configuration is read from the 'logging' section of config.json:
    - level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - file: Path to log file
    - maxBytes: Maximum log file size before rotation
    - backupCount: Number of backup files to keep
    - console: Whether to enable console output
    - consoleLevel: Level for the console handler
    - raiseOnError: Turn logger.error calls into exceptions
    """
    log_level_str = config.get_logging_setting("level", "INFO")
    log_file = config.get_logging_setting("file", "logs/pageview.log")
    max_bytes = config.get_logging_setting("maxBytes", 10485760)  # 10MB default
    backup_count = config.get_logging_setting("backupCount", 3)
    console_enabled = config.get_logging_setting("console", True)
    console_level_str = config.get_logging_setting("consoleLevel", "WARNING")

    # Debug builds fail loudly on logged errors unless configured otherwise
    if raise_on_error is None:
        raise_on_error = config.get_logging_setting("raiseOnError", config.is_debug())

    # Convert log level string to logging constant
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)
    console_level = getattr(logging, console_level_str.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear any existing handlers
    root_logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if console_enabled:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(console_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    # Create log directory if it doesn't exist
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

        root_logger.info("Logging initialized - Level: %s, File: %s", log_level_str, log_file)

    except OSError as e:
        # If file handler fails, continue without file logging
        print(f"Warning: Could not initialize file logging: {e}")

    if raise_on_error:
        root_logger.addHandler(ErrorRaisingHandler())

