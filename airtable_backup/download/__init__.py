"""Attachment download operations"""
from airtable_backup.download.downloader import download_field_attachments, attachment_directory
from airtable_backup.download.stats import BackupStats
from airtable_backup.download.filename import (
    sanitize_filename,
    sanitize_record_name,
    resolve_attachment_filenames,
    MAX_FILENAME_LENGTH,
)

__all__ = [
    "download_field_attachments",
    "attachment_directory",
    "BackupStats",
    "sanitize_filename",
    "sanitize_record_name",
    "resolve_attachment_filenames",
    "MAX_FILENAME_LENGTH",
]
