"""High-level workflows"""
from airtable_backup.workflows.backup import backup_base
from airtable_backup.workflows.common import ensure_directories

__all__ = ["backup_base", "ensure_directories"]
