"""
Progress Tracker Module

Rich progress display for a backup run: one bar over the base's tables
and a running attachment counter, plus the end-of-run summary panel.
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional, TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from airtable_backup.utils import format_bytes, log_section_header

if TYPE_CHECKING:
    from airtable_backup.logging import LoggingManager

logger = logging.getLogger(__name__)


class ProgressMode(Enum):
    """Progress display modes."""
    AUTO = "auto"      # Show progress when attached to a terminal
    ON = "on"          # Force progress display
    OFF = "off"        # Plain logging only


class ProgressTracker:
    """
    Tracks tables and attachments of a backup run.

    With mode OFF every method is a no-op except the completion summary,
    which is then logged as plain lines.
    """

    def __init__(
        self,
        mode: ProgressMode = ProgressMode.OFF,
        logging_manager: Optional["LoggingManager"] = None,
        console: Optional[Console] = None,
    ) -> None:
        self.mode = mode
        self.console = console or Console()
        self._logging_manager = logging_manager
        self._progress: Optional[Progress] = None
        self._tables_task: Optional[TaskID] = None
        self._attachments_task: Optional[TaskID] = None
        self._attachment_count = 0
        self._bytes = 0

    @property
    def enabled(self) -> bool:
        if self.mode == ProgressMode.ON:
            return True
        if self.mode == ProgressMode.AUTO:
            return self.console.is_terminal
        return False

    @property
    def is_started(self) -> bool:
        return self._progress is not None

    def start(self) -> None:
        """Start the progress display."""
        if self.is_started or not self.enabled:
            return

        if self._logging_manager:
            self._logging_manager.enable_progress_mode()

        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self.console,
        )
        self._progress.start()
        logger.debug("Started Rich progress display")

    def stop(self) -> None:
        """Stop the progress display."""
        if not self.is_started:
            return

        self._progress.stop()
        self._progress = None
        self._tables_task = None
        self._attachments_task = None

        if self._logging_manager:
            self._logging_manager.disable_progress_mode()
        logger.debug("Stopped Rich progress display")

    def start_tables(self, total: int) -> None:
        if not self.is_started:
            return
        self._tables_task = self._progress.add_task("Tables", total=total)
        self._attachments_task = self._progress.add_task("Attachments", total=None)

    def table_started(self, table_name: str) -> None:
        if self._tables_task is None:
            return
        self._progress.update(self._tables_task, description=f"Tables [cyan]{escape(table_name)}[/cyan]")

    def table_finished(self, table_name: str) -> None:
        if self._tables_task is None:
            return
        self._progress.update(self._tables_task, advance=1, description="Tables")

    def attachment_downloaded(self, filename: str, bytes_downloaded: int) -> None:
        self._attachment_count += 1
        self._bytes += bytes_downloaded
        if self._attachments_task is None:
            return
        self._progress.update(
            self._attachments_task,
            completed=self._attachment_count,
            description=f"Attachments ({format_bytes(self._bytes)}) {escape(filename)}",
        )

    def display_completion_summary(self, stats: Dict[str, Any]) -> None:
        """Show the run summary as a Rich panel, or log it when progress is off."""
        rows = [
            ("Tables backed up:", f"{stats.get('tables_succeeded', 0)}/{stats.get('tables_total', 0)}"),
            ("Tables failed:", f"{stats.get('tables_failed', 0)}"),
            ("Tables not attempted:", f"{stats.get('tables_skipped', 0)}"),
            ("Records exported:", f"{stats.get('records', 0)}"),
            ("Attachments downloaded:", f"{stats.get('attachments', 0)}"),
            ("Data transferred:", format_bytes(stats.get('bytes_downloaded', 0))),
        ]
        if stats.get('run_error'):
            rows.append(("Run stopped by:", str(stats['run_error'])))
        failed = bool(stats.get('errors') or stats.get('run_error'))

        if not self.enabled:
            log_section_header("BACKUP SUMMARY (FINISHED WITH ERRORS)" if failed else "BACKUP SUMMARY")
            for label, value in rows:
                logger.info(f"{label} {value}")
            return

        summary_table = Table.grid(padding=(0, 2))
        summary_table.add_column(style="cyan bold")
        summary_table.add_column()
        for label, value in rows:
            summary_table.add_row(label, Text(value))

        title = Text(
            "BACKUP FINISHED WITH ERRORS" if failed else "BACKUP COMPLETE",
            style="bold red" if failed else "bold green",
        )
        self.console.print()
        self.console.print(Panel(
            summary_table,
            title=title,
            border_style="red" if failed else "green",
            padding=(1, 2),
        ))
        self.console.print()

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
