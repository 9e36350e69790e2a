"""
Backup Workflow Module

High-level workflow that backs up a whole base: list the tables, then
export each one in turn.
"""

import logging
from typing import Optional

from airtable_backup.api.client import AirtableClient
from airtable_backup.cli.config import BackupConfig, ErrorPolicy
from airtable_backup.download.stats import BackupStats
from airtable_backup.exceptions import AirtableError
from airtable_backup.export.exporter import export_table
from airtable_backup.progress import ProgressTracker
from airtable_backup.utils import log_section_header

logger = logging.getLogger(__name__)


def backup_base(
    client: AirtableClient,
    config: BackupConfig,
    progress_tracker: Optional[ProgressTracker] = None
) -> BackupStats:
    """
    Back up every table of the configured base.

    Tables are processed strictly in the order the metadata endpoint lists
    them. With ErrorPolicy.FAIL_FAST the first failing table ends the run;
    with ErrorPolicy.CONTINUE it is recorded and the next table is tried.
    Run-level errors are logged and never re-raised.

    Args:
        client: Airtable client for the base
        config: Backup configuration
        progress_tracker: Optional progress display

    Returns:
        BackupStats for the run
    """
    stats = BackupStats()

    log_section_header(f"BACKING UP BASE {config.base_id}")
    logger.info(f"Backup directory: {config.backup_dir.absolute()}")
    logger.info(f"Error policy: {config.error_policy.value}")

    try:
        table_names = client.list_tables()
        stats.tables_total = len(table_names)
        logger.info(f"Found {len(table_names)} table(s)")

        if progress_tracker:
            progress_tracker.start_tables(len(table_names))

        for table_name in table_names:
            if progress_tracker:
                progress_tracker.table_started(table_name)

            try:
                export_table(
                    client,
                    table_name,
                    config,
                    stats=stats,
                    progress=progress_tracker
                )
            except (AirtableError, OSError) as e:
                stats.record_error(table_name, e)
                if config.error_policy is ErrorPolicy.FAIL_FAST:
                    raise
                logger.error(f"Error backing up table {table_name}: {e}")
                logger.debug("Full error details:", exc_info=True)
            else:
                stats.tables_succeeded += 1

            if progress_tracker:
                progress_tracker.table_finished(table_name)

        if stats.tables_failed:
            logger.warning(
                f"Backup finished with {stats.tables_failed} failed table(s): "
                f"{', '.join(error['table'] for error in stats.errors)}"
            )
        else:
            logger.info("Backup completed successfully!")

    except Exception as e:
        logger.error(f"Error during backup: {e}")
        stats.record_run_error(e)
        logger.debug("Full error details:", exc_info=True)

    return stats
