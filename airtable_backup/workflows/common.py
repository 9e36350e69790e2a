"""
Common Workflow Utilities

Shared helpers for workflow modules.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def ensure_directories(*dirs: Path) -> None:
    """
    Create multiple directories if they don't exist.

    Creates directories with parent directories as needed, similar to
    'mkdir -p'. Silently succeeds if directories already exist.

    Raises:
        OSError: If directory creation fails due to permissions or other I/O errors
    """
    for directory in dirs:
        directory.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Directory ensured: {directory}")
