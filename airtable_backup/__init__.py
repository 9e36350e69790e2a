"""Airtable Base Backup Package"""

# Expose key components at package level for convenience

# Exceptions (centralized)
from airtable_backup.exceptions import (
    AirtableError,
    ConfigError,
    AirtableAPIError,
    RemoteQueryError,
    AttachmentDownloadError,
)

# Models
from airtable_backup.models import Attachment, Record, FieldKind, classify_field

# API
from airtable_backup.api.client import AirtableClient
from airtable_backup.api.pagination import fetch_all_records, iter_record_pages

# CLI
from airtable_backup.cli.config import BackupConfig, ErrorPolicy, load_config

# Download
from airtable_backup.download.downloader import download_field_attachments
from airtable_backup.download.stats import BackupStats
from airtable_backup.download.filename import sanitize_record_name, sanitize_filename

# Export
from airtable_backup.export.exporter import export_table, write_table_csv
from airtable_backup.export.rows import build_export_row

# Workflows
from airtable_backup.workflows.backup import backup_base

__version__ = "0.1.0"
__all__ = [
    # Exceptions
    "AirtableError",
    "ConfigError",
    "AirtableAPIError",
    "RemoteQueryError",
    "AttachmentDownloadError",
    # Models
    "Attachment",
    "Record",
    "FieldKind",
    "classify_field",
    # API
    "AirtableClient",
    "fetch_all_records",
    "iter_record_pages",
    # CLI
    "BackupConfig",
    "ErrorPolicy",
    "load_config",
    # Download
    "download_field_attachments",
    "BackupStats",
    "sanitize_record_name",
    "sanitize_filename",
    # Export
    "export_table",
    "write_table_csv",
    "build_export_row",
    # Workflows
    "backup_base",
]
