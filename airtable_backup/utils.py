"""
Common Utilities

Basic helpers used across the application.
This module is intentionally kept minimal to avoid circular imports.
"""

import logging

logger = logging.getLogger(__name__)


def log_section_header(title: str, width: int = 70) -> None:
    """
    Log a section header with visual separator.

    Example:
        >>> log_section_header("BACKUP SUMMARY")
        # Logs:
        # ======================================================================
        # BACKUP SUMMARY
        # ======================================================================
    """
    separator = "=" * width
    logger.info(separator)
    logger.info(title)
    logger.info(separator)


def format_bytes(size: float) -> str:
    """Human-readable byte count (e.g., 1.5 MB)."""
    for unit in ('B', 'KB', 'MB', 'GB'):
        if size < 1024 or unit == 'GB':
            return f"{size:.0f} {unit}" if unit == 'B' else f"{size:.1f} {unit}"
        size /= 1024
