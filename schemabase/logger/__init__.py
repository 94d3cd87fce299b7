"""Centralized logging configuration for the schemabase compiler.

This module provides a configured logger instance that can be imported and used
throughout the application. `setup_logger()` configures it from
logging_config.json: records are queued and written to stderr so that SQL or
IR printed on stdout stays clean.

Usage:
    from schemabase.logger import logger

    logger.info("This is an info message")
    logger.debug("This is a debug message")
"""

from .logger import logger, setup_logger

__all__ = ["logger", "setup_logger"]
