"""
Logging Manager - Core Handler Management

LoggingManager installs the file and console handlers and switches the
console into progress mode while a Rich progress display is live.
"""

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from threading import RLock
from typing import Iterator, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from airtable_backup.logging.handlers import ProgressAwareConsoleHandler

logger = logging.getLogger(__name__)


class LoggingManager:
    """
    Logging manager with dynamic console handler control.

    File logging always runs at DEBUG. Console logging runs at the
    configured level, except in progress mode where only errors are shown
    (as Rich panels) and warnings are held back until the display stops.
    """

    _global_lock = RLock()
    _instance: Optional['LoggingManager'] = None

    def __init__(self, console: Optional[Console] = None) -> None:
        self._lock = RLock()
        self._console_handler: Optional[ProgressAwareConsoleHandler] = None
        self._file_handler: Optional[logging.FileHandler] = None
        self._original_handlers: List[logging.Handler] = []
        self._original_level = logging.WARNING

        self._progress_mode_count = 0  # Track nested calls

        self._buffered_warnings: List[str] = []
        self._max_buffered_messages = 50

        self._rich_console = console

    @classmethod
    def get_instance(cls) -> 'LoggingManager':
        """Get or create singleton instance."""
        if cls._instance is None:
            with cls._global_lock:
                if cls._instance is None:
                    cls._instance = LoggingManager()
        return cls._instance

    @property
    def console(self) -> Console:
        if self._rich_console is None:
            self._rich_console = Console(stderr=True)
        return self._rich_console

    def setup(self, log_file: Path, console_level: int = logging.INFO) -> None:
        """
        Configure logging to file and console with different log levels.

        Args:
            log_file: Path to the log file where logs will be written
            console_level: Logging level for console output (default: INFO)
                          - WARNING: Only errors and warnings (--quiet)
                          - INFO: Per-table progress and downloaded files
                          - DEBUG: All technical details (--debug)
        """
        with self._lock:
            log_file.parent.mkdir(parents=True, exist_ok=True)

            file_formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            console_formatter = logging.Formatter(
                '%(levelname)s - %(message)s' if console_level <= logging.DEBUG
                else '%(message)s'
            )

            self._file_handler = logging.FileHandler(log_file, encoding='utf-8')
            self._file_handler.setLevel(logging.DEBUG)
            self._file_handler.setFormatter(file_formatter)

            self._console_handler = ProgressAwareConsoleHandler(
                stream=sys.stdout,
                logging_manager=self
            )
            self._console_handler.setLevel(console_level)
            self._console_handler.setFormatter(console_formatter)

            root_logger = logging.getLogger()
            self._original_handlers = root_logger.handlers.copy()
            self._original_level = root_logger.level
            root_logger.setLevel(logging.DEBUG)

            root_logger.handlers.clear()
            root_logger.addHandler(self._file_handler)
            root_logger.addHandler(self._console_handler)

            # Keep HTTP client chatter out of the console
            logging.getLogger('urllib3').setLevel(logging.WARNING)

            logger.debug("Logging manager setup complete")

    def enable_progress_mode(self) -> None:
        """Suppress console logging; nested calls are reference counted."""
        with self._lock:
            self._progress_mode_count += 1
            if self._progress_mode_count == 1:
                if self._console_handler:
                    self._console_handler.set_progress_mode(True)
                self._buffered_warnings.clear()
                logger.debug("Progress mode enabled - console logging suppressed")

    def disable_progress_mode(self) -> None:
        """Restore console logging and show buffered warnings."""
        with self._lock:
            if self._progress_mode_count == 0:
                return
            self._progress_mode_count -= 1
            if self._progress_mode_count == 0:
                if self._console_handler:
                    self._console_handler.set_progress_mode(False)
                self._display_buffered_warnings()
                logger.debug("Progress mode disabled - console logging restored")

    @contextmanager
    def progress_mode(self) -> Iterator[None]:
        """Context manager for progress mode with guaranteed cleanup."""
        self.enable_progress_mode()
        try:
            yield
        finally:
            self.disable_progress_mode()

    def is_progress_mode_active(self) -> bool:
        with self._lock:
            return self._progress_mode_count > 0

    def buffer_warning(self, record: logging.LogRecord) -> None:
        """Hold a warning until progress mode ends."""
        with self._lock:
            if len(self._buffered_warnings) >= self._max_buffered_messages:
                self._buffered_warnings.pop(0)
            self._buffered_warnings.append(record.getMessage())

    def display_critical_error(self, record: logging.LogRecord) -> None:
        """Show an error immediately as a Rich panel on stderr."""
        error_text = Text()
        error_text.append("ERROR", style="bold red")
        if record.name:
            error_text.append(f" ({record.name})", style="dim red")
        error_text.append(f": {record.getMessage()}", style="red")

        self.console.print(Panel(
            error_text,
            title="Critical Error",
            border_style="red",
            padding=(0, 1),
            expand=False,
        ))

    def _display_buffered_warnings(self) -> None:
        if not self._buffered_warnings:
            return

        self.console.print(
            f"\n[yellow]{len(self._buffered_warnings)} warning(s) occurred during processing:[/yellow]"
        )
        for message in self._buffered_warnings:
            self.console.print(Text.assemble(("  - ", "yellow"), message))
        self._buffered_warnings.clear()

    def cleanup(self) -> None:
        """Restore the original root handlers and close the log file."""
        with self._lock:
            self._progress_mode_count = 0
            self._display_buffered_warnings()

            root_logger = logging.getLogger()
            root_logger.handlers.clear()
            root_logger.handlers.extend(self._original_handlers)
            root_logger.setLevel(self._original_level)

            if self._file_handler:
                self._file_handler.close()
                self._file_handler = None
            self._console_handler = None


def setup_logging(log_file: Path, console_level: int = logging.INFO) -> LoggingManager:
    """Set up logging through the shared LoggingManager instance."""
    manager = LoggingManager.get_instance()
    manager.setup(log_file, console_level)
    return manager
