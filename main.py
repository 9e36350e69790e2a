#!/usr/bin/env python3
"""
Airtable Base Backup - Main Entry Point

Runs the backup workflow:
1. List the tables of the base
2. Export each table to <backup dir>/<table>.csv
3. Download attachments to <backup dir>/<table>.<field>/<record>/
"""

import sys
import logging
from typing import List, Optional

from airtable_backup.api.client import AirtableClient
from airtable_backup.cli.config import load_config
from airtable_backup.exceptions import ConfigError
from airtable_backup.logging import LoggingManager
from airtable_backup.progress import ProgressTracker, ProgressMode
from airtable_backup.workflows.backup import backup_base
from airtable_backup.workflows.common import ensure_directories

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point - load config and back up the base.

    Returns:
        Exit code: 0 when the run completed (errors inside the run are
        logged, not signalled), 2 for startup errors
    """
    try:
        config = load_config(argv)
    except ConfigError as e:
        logging.basicConfig(level=logging.ERROR, format='%(message)s')
        logger.error(f"Configuration error: {e}")
        return 2

    logging_manager = LoggingManager.get_instance()

    try:
        logging_manager.setup(config.log_file, console_level=config.console_log_level)
        ensure_directories(config.backup_dir)
    except OSError as e:
        logging.basicConfig(level=logging.ERROR, format='%(message)s')
        logger.error(f"Cannot prepare output directories: {e}")
        return 2

    progress_tracker = ProgressTracker(
        mode=ProgressMode(config.progress),
        logging_manager=logging_manager
    )

    try:
        with AirtableClient(config.api_key, config.base_id, api_url=config.api_url) as client:
            with progress_tracker:
                stats = backup_base(client, config, progress_tracker=progress_tracker)
        progress_tracker.display_completion_summary(stats.to_dict())
    except KeyboardInterrupt:
        logger.warning("\nBackup interrupted by user (Ctrl+C)")
        return 130  # Standard exit code for SIGINT
    finally:
        logging_manager.cleanup()

    return 0


if __name__ == '__main__':
    sys.exit(main())
