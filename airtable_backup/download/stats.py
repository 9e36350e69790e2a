"""
Backup Statistics

Data classes for tracking backup run statistics.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class BackupStats:
    """Statistics for one backup run."""
    tables_total: int = 0
    tables_succeeded: int = 0
    tables_failed: int = 0
    records: int = 0
    attachments: int = 0
    bytes_downloaded: int = 0
    errors: List[Dict[str, str]] = field(default_factory=list)
    run_error: Optional[str] = None

    def record_error(self, table_name: str, error: Exception) -> None:
        """Remember a table failure."""
        self.tables_failed += 1
        self.errors.append({
            'table': table_name,
            'error': str(error)
        })

    def record_run_error(self, error: Exception) -> None:
        """Remember the error that ended the run."""
        self.run_error = str(error)

    @property
    def failed(self) -> bool:
        return bool(self.errors or self.run_error)

    @property
    def tables_skipped(self) -> int:
        """Tables never attempted because the run stopped early."""
        return max(0, self.tables_total - self.tables_succeeded - self.tables_failed)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for summaries."""
        return {
            'tables_total': self.tables_total,
            'tables_succeeded': self.tables_succeeded,
            'tables_failed': self.tables_failed,
            'tables_skipped': self.tables_skipped,
            'records': self.records,
            'attachments': self.attachments,
            'bytes_downloaded': self.bytes_downloaded,
            'errors': self.errors,
            'run_error': self.run_error,
            'failed': self.failed
        }
