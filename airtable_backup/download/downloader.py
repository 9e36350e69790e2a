"""
Attachment Downloader

Downloads the attachments of one record field into
<backup_dir>/<table>.<field>/<record name>/.
"""

import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from airtable_backup.api.client import AirtableClient
from airtable_backup.cli.config import BackupConfig
from airtable_backup.exceptions import AttachmentDownloadError
from airtable_backup.models import Attachment, Record

from .stats import BackupStats
from .filename import (
    sanitize_filename,
    sanitize_record_name,
    resolve_attachment_filenames,
)

logger = logging.getLogger(__name__)


def attachment_directory(
    backup_dir: Path,
    table_name: str,
    field_name: str,
    record: Record
) -> Path:
    """Directory holding one record's attachments for one field."""
    field_dir = sanitize_filename(f"{table_name}.{field_name}")
    return backup_dir / field_dir / sanitize_record_name(record.display_name, record.id)


def _parse_attachment(item: Any) -> Optional[Attachment]:
    # None marks an item without a url; it fails only when its turn comes
    if isinstance(item, Mapping) and item.get('url'):
        return Attachment.from_api(item)
    return None


def _validate_output_path(path: Path, attachment_dir: Path) -> None:
    # Attachment names come from the remote side; keep writes inside the directory
    try:
        path.resolve().relative_to(attachment_dir.resolve())
    except ValueError:
        logger.error(f"Path traversal attempt detected: {path.name}")
        raise AttachmentDownloadError(f"Path traversal validation failed for {path.name}")


def download_field_attachments(
    client: AirtableClient,
    record: Record,
    table_name: str,
    field_name: str,
    config: BackupConfig,
    stats: Optional[BackupStats] = None,
    progress: Optional[Any] = None
) -> int:
    """
    Download every attachment of a record field, in list order.

    A missing or empty field is a silent no-op. Existing files are
    overwritten. The first failure aborts the remaining attachments of
    this field.

    Args:
        client: Airtable client used for streaming downloads
        record: Record owning the field
        table_name: Table the record belongs to
        field_name: Field holding the attachment list
        config: Backup configuration (backup_dir, chunk_size)
        stats: Optional run statistics to update
        progress: Optional ProgressTracker to notify per file

    Returns:
        Number of files downloaded

    Raises:
        AttachmentDownloadError: If an attachment cannot be fetched
        OSError: If the directory or file cannot be written
    """
    value = record.fields.get(field_name)
    if not value:
        return 0

    attachments = [_parse_attachment(item) for item in value]
    filenames = iter(resolve_attachment_filenames([a for a in attachments if a is not None]))

    attachment_dir = attachment_directory(config.backup_dir, table_name, field_name, record)
    attachment_dir.mkdir(parents=True, exist_ok=True)

    downloaded = 0
    for position, attachment in enumerate(attachments, start=1):
        if attachment is None:
            raise AttachmentDownloadError(
                f"Item {position} of field '{field_name}' on {record.id} has no url"
            )
        filename = next(filenames)
        file_path = attachment_dir / filename
        _validate_output_path(file_path, attachment_dir)

        bytes_downloaded = client.download_file(
            attachment.url,
            file_path,
            chunk_size=config.chunk_size
        )
        downloaded += 1
        logger.info(f"Downloaded: {file_path}")

        if stats is not None:
            stats.attachments += 1
            stats.bytes_downloaded += bytes_downloaded
        if progress is not None:
            progress.attachment_downloaded(filename, bytes_downloaded)

    return downloaded
