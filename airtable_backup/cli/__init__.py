"""Command-line configuration"""
from airtable_backup.cli.config import (
    BackupConfig,
    ErrorPolicy,
    parse_arguments,
    build_config,
    load_config,
)

__all__ = [
    "BackupConfig",
    "ErrorPolicy",
    "parse_arguments",
    "build_config",
    "load_config",
]
