"""
Table Exporter

Writes one CSV per table and then downloads every attachment the
table's records reference.
"""

import csv
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from airtable_backup.api.client import AirtableClient
from airtable_backup.api.pagination import fetch_all_records
from airtable_backup.cli.config import BackupConfig
from airtable_backup.download.downloader import download_field_attachments
from airtable_backup.download.filename import sanitize_filename
from airtable_backup.download.stats import BackupStats
from airtable_backup.export.rows import build_export_row, collect_fieldnames, format_cell
from airtable_backup.models import Record

logger = logging.getLogger(__name__)


def table_csv_path(backup_dir: Path, table_name: str) -> Path:
    """Path of a table's export file."""
    return backup_dir / sanitize_filename(f"{table_name}.csv")


def write_table_csv(rows: List[Dict[str, Any]], output_path: Path) -> int:
    """
    Write export rows to a CSV file, overwriting it.

    The header is the union of the rows' keys in first-seen order; a row
    lacking a column gets an empty cell.

    Args:
        rows: Export rows
        output_path: Target CSV path

    Returns:
        Number of data rows written (excluding header)
    """
    fieldnames = collect_fieldnames(rows)

    with output_path.open('w', encoding='utf-8', newline='') as f:
        if fieldnames:
            writer = csv.DictWriter(f, fieldnames=fieldnames, restval='')
            writer.writeheader()
            for row in rows:
                writer.writerow({key: format_cell(value) for key, value in row.items()})
        else:
            logger.warning(f"No records to export - writing empty CSV: {output_path.name}")

    logger.debug(f"Wrote {len(rows)} row(s) with columns: {fieldnames}")
    return len(rows)


def download_table_attachments(
    client: AirtableClient,
    records: List[Record],
    table_name: str,
    config: BackupConfig,
    stats: Optional[BackupStats] = None,
    progress: Optional[Any] = None
) -> int:
    """Download attachments for every attachment field of every record."""
    total = 0
    for record in records:
        for field_name in record.attachment_fields():
            total += download_field_attachments(
                client,
                record,
                table_name,
                field_name,
                config,
                stats=stats,
                progress=progress
            )
    return total


def export_table(
    client: AirtableClient,
    table_name: str,
    config: BackupConfig,
    stats: Optional[BackupStats] = None,
    progress: Optional[Any] = None
) -> int:
    """
    Back up one table: CSV export first, then attachments.

    Args:
        client: Airtable client
        table_name: Table to export
        config: Backup configuration
        stats: Optional run statistics to update
        progress: Optional ProgressTracker

    Returns:
        Number of records exported

    Raises:
        RemoteQueryError: If the records cannot be listed
        AttachmentDownloadError: If an attachment cannot be fetched
        OSError: If an output file cannot be written
    """
    logger.info(f"Backing up table: {table_name}")

    records = fetch_all_records(client, table_name, config.page_size)

    rows = [build_export_row(record) for record in records]
    csv_path = table_csv_path(config.backup_dir, table_name)
    write_table_csv(rows, csv_path)
    logger.info(f"Exported {len(rows)} record(s) to: {csv_path}")

    if stats is not None:
        stats.records += len(records)

    downloaded = download_table_attachments(
        client,
        records,
        table_name,
        config,
        stats=stats,
        progress=progress
    )
    if downloaded:
        logger.info(f"Downloaded {downloaded} attachment(s) for table: {table_name}")

    return len(records)
