"""
Progress Tracking Module

Rich progress display and run summary for the backup workflow.
"""

from airtable_backup.progress.tracker import ProgressTracker, ProgressMode

__all__ = [
    'ProgressTracker',
    'ProgressMode',
]
