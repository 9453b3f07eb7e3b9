"""
Client logging module.

This module handles logging for the phone FTP client. Console output that
is part of a command's result (listing rows, progress lines, help) is
printed directly; diagnostics go through this logger.
"""

import logging
import sys
from typing import Union


class ClientLogger:
    """Client logging class."""

    def __init__(self, log_level: int = logging.INFO, stream=None):
        self.logger = logging.getLogger('phoneftp')
        self.logger.setLevel(log_level)
        self.logger.propagate = False

        # Remove existing handlers
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)

        # Create console handler
        console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        console_handler.setLevel(log_level)

        # Create formatter
        formatter = logging.Formatter(
            '%(asctime)s [%(levelname)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_handler.setFormatter(formatter)

        # Add handler to logger
        self.logger.addHandler(console_handler)

    def set_level(self, level: Union[int, str]):
        """Change the level of the logger and its handlers."""
        if isinstance(level, str):
            level = logging.getLevelName(level.upper())
            if not isinstance(level, int):
                level = logging.INFO
        self.logger.setLevel(level)
        for handler in self.logger.handlers:
            handler.setLevel(level)

    def error(self, message: str):
        """Log error message."""
        self.logger.error(message)

    def warning(self, message: str):
        """Log warning message."""
        self.logger.warning(message)

    def debug(self, message: str):
        """Log debug message."""
        self.logger.debug(message)

    def log_connection(self, host: str, port: int, success: bool):
        """Log connection attempt."""
        status = "Connected" if success else "Failed to connect"
        self.debug(f"{status} to {host}:{port}")

    def log_transfer(self, action: str, source: str, destination: str):
        """Log the start of a transfer."""
        self.debug(f"{action}: {source} -> {destination}")

    def log_error(self, operation: str, error: BaseException):
        """Log error with operation context."""
        self.error(f"Error in {operation}: {error}")


# Global logger instance
logger = ClientLogger()
