"""
Logging Module - Progress-Aware Logging System

Keeps console logging from tearing through the Rich progress display
while every message still reaches the log file.

Usage:
    from airtable_backup.logging import LoggingManager

    manager = LoggingManager.get_instance()
    manager.setup(log_file, console_level)

    with manager.progress_mode():
        # Console INFO suppressed, errors shown as panels
        pass
"""

from airtable_backup.logging.manager import LoggingManager, setup_logging
from airtable_backup.logging.handlers import ProgressAwareConsoleHandler

__all__ = [
    'LoggingManager',
    'ProgressAwareConsoleHandler',
    'setup_logging',
]
