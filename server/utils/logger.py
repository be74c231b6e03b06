"""
Server logging module.

This module handles server-side logging functionality.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable

from common.constants import LOG_DIR, CHAT_LOG_FILE


class ServerLogger:
    """Server logging class."""

    def __init__(self, logs_dir: str = LOG_DIR, log_level: int = logging.INFO):
        self.logs_dir = Path(logs_dir)

        # Set up main logger
        self.logger = logging.getLogger('chat_server')
        self.logger.setLevel(log_level)

        # Remove existing handlers
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)

        # Create console handler
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG)

        # Create formatter
        formatter = logging.Formatter(
            '%(asctime)s [%(levelname)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_handler.setFormatter(formatter)

        # Add handler to logger
        self.logger.addHandler(console_handler)

        self.chat_log_path = self.logs_dir / CHAT_LOG_FILE

    def configure(self, logs_dir: str = None, log_level: int = None):
        """Change the log directory and/or level after startup."""
        if logs_dir is not None:
            self.logs_dir = Path(logs_dir)
            self.chat_log_path = self.logs_dir / CHAT_LOG_FILE
        if log_level is not None:
            self.logger.setLevel(log_level)

    def info(self, message: str):
        """Log info message."""
        self.logger.info(message)

    def error(self, message: str):
        """Log error message."""
        self.logger.error(message)

    def warning(self, message: str):
        """Log warning message."""
        self.logger.warning(message)

    def debug(self, message: str):
        """Log debug message."""
        self.logger.debug(message)

    def log_connection(self, addr: tuple):
        """Log client connection."""
        self.info(f"New connection from {addr}")

    def log_login(self, name: str, addr: tuple):
        """Log a completed handshake."""
        self.info(f"User '{name}' joined from {addr}")

    def log_disconnect(self, name: str):
        """Log user disconnect."""
        self.info(f"User '{name}' left the chat")

    def log_chat(self, name: str, message: str, recipients: int):
        """Log a plain broadcast."""
        self.info(f"Chat from {name} to {recipients} client(s): {message}")
        self._write_to_file(f"{datetime.now().isoformat()} | {name} | {message}")

    def log_private(self, name: str, recipients: Iterable[str], message: str):
        """Log a private message."""
        to = ', '.join(recipients)
        self.info(f"PRIVATE from {name} to [{to}]: {message}")
        self._write_to_file(f"{datetime.now().isoformat()} | [PRIVATE {name}->{to}] {name} | {message}")

    def log_except(self, name: str, excluded: Iterable[str], message: str):
        """Log an exclusion broadcast."""
        skipped = ', '.join(excluded)
        self.info(f"EXCEPT from {name} (skipping [{skipped}]): {message}")
        self._write_to_file(f"{datetime.now().isoformat()} | [EXCEPT {skipped}] {name} | {message}")

    def log_banned(self, name: str, message: str):
        """Log a suppressed message."""
        self.warning(f"Banned phrase from {name}, message dropped: {message}")

    def log_error(self, operation: str, error: Exception):
        """Log error with operation context."""
        self.error(f"Error in {operation}: {error}")

    def _write_to_file(self, content: str):
        """Append content to the chat log file."""
        try:
            self.logs_dir.mkdir(parents=True, exist_ok=True)
            with open(self.chat_log_path, 'a', encoding='utf-8') as f:
                f.write(content + '\n')
        except OSError as e:
            self.error(f"Failed to write to log file {self.chat_log_path}: {e}")


# Global logger instance
logger = ServerLogger()
