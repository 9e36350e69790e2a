"""Tests for the progress tracker and the logging manager's progress mode."""

import io
import logging

from rich.console import Console

from airtable_backup.logging import LoggingManager
from airtable_backup.progress import ProgressMode, ProgressTracker

STATS = {
    'tables_total': 3,
    'tables_succeeded': 2,
    'tables_failed': 1,
    'tables_skipped': 0,
    'records': 12,
    'attachments': 4,
    'bytes_downloaded': 2048,
    'errors': [{'table': 'Projects', 'error': 'HTTP 404'}],
}


def make_console():
    return Console(file=io.StringIO(), force_terminal=False, width=100)


def test_off_mode_is_inert():
    tracker = ProgressTracker(mode=ProgressMode.OFF, console=make_console())

    with tracker:
        tracker.start_tables(2)
        tracker.table_started('Clients')
        tracker.attachment_downloaded('a.png', 10)
        tracker.table_finished('Clients')
        assert not tracker.is_started


def test_auto_mode_disabled_without_terminal():
    tracker = ProgressTracker(mode=ProgressMode.AUTO, console=make_console())
    assert not tracker.enabled


def test_off_mode_summary_is_logged(caplog):
    tracker = ProgressTracker(mode=ProgressMode.OFF, console=make_console())

    with caplog.at_level(logging.INFO):
        tracker.display_completion_summary(STATS)

    assert 'BACKUP SUMMARY' in caplog.text
    assert 'Tables backed up: 2/3' in caplog.text
    assert 'Data transferred: 2.0 KB' in caplog.text


def test_on_mode_renders_panel_and_toggles_logging():
    console = make_console()
    manager = LoggingManager(console=make_console())
    tracker = ProgressTracker(mode=ProgressMode.ON, logging_manager=manager, console=console)

    with tracker:
        assert tracker.is_started
        assert manager.is_progress_mode_active()
        tracker.start_tables(1)
        tracker.table_started('Clients')
        tracker.attachment_downloaded('a.png', 10)
        tracker.table_finished('Clients')

    assert not manager.is_progress_mode_active()

    tracker.display_completion_summary(STATS)
    output = console.file.getvalue()
    assert 'BACKUP FINISHED WITH ERRORS' in output
    assert 'Records exported:' in output


def test_progress_mode_buffers_warnings_and_shows_errors(tmp_path):
    err_console = make_console()
    manager = LoggingManager(console=err_console)
    manager.setup(tmp_path / 'logs' / 'backup.log', console_level=logging.INFO)
    test_logger = logging.getLogger('airtable_backup.tests')

    try:
        with manager.progress_mode():
            test_logger.info("quiet info")
            test_logger.warning("held warning")
            test_logger.error("loud error")
            assert 'held warning' not in err_console.file.getvalue()
            assert 'loud error' in err_console.file.getvalue()

        output = err_console.file.getvalue()
        assert 'held warning' in output
        assert 'quiet info' not in output
    finally:
        manager.cleanup()

    log_text = (tmp_path / 'logs' / 'backup.log').read_text()
    assert 'quiet info' in log_text
    assert 'held warning' in log_text
