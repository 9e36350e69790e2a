"""Shared fixtures: an in-memory Airtable client and a backup config."""

from pathlib import Path
from typing import Dict, List, Optional

import pytest

from airtable_backup.cli.config import BackupConfig, ErrorPolicy
from airtable_backup.exceptions import AttachmentDownloadError, RemoteQueryError


class FakeAirtableClient:
    """Duck-typed stand-in for AirtableClient backed by dictionaries.

    tables: table name -> list of raw record dicts ({'id', 'fields'})
    files: attachment url -> bytes
    """

    def __init__(
        self,
        tables: Dict[str, List[dict]],
        files: Optional[Dict[str, bytes]] = None,
        page_size: int = 2,
        failing_tables: Optional[List[str]] = None,
        fail_listing: bool = False,
    ):
        self.tables = tables
        self.files = files or {}
        self.page_size = page_size
        self.failing_tables = failing_tables or []
        self.fail_listing = fail_listing
        self.calls: List[tuple] = []

    def list_tables(self) -> List[str]:
        self.calls.append(('list_tables',))
        if self.fail_listing:
            raise RemoteQueryError("HTTP 401: AUTHENTICATION_REQUIRED", status_code=401)
        return list(self.tables)

    def fetch_records_page(self, table_name, offset=None, page_size=100):
        self.calls.append(('fetch_records_page', table_name, offset))
        if table_name in self.failing_tables:
            raise RemoteQueryError("HTTP 404: TABLE_NOT_FOUND", status_code=404)

        records = self.tables[table_name]
        start = int(offset) if offset else 0
        end = start + self.page_size
        payload = {'records': records[start:end]}
        if end < len(records):
            payload['offset'] = str(end)
        return payload

    def download_file(self, url: str, output_path: Path, chunk_size: int = 8192) -> int:
        self.calls.append(('download_file', url, output_path))
        if url not in self.files:
            raise AttachmentDownloadError(f"HTTP 404 downloading {output_path.name}", status_code=404)
        data = self.files[url]
        output_path.write_bytes(data)
        return len(data)

    def downloads(self) -> List[str]:
        return [call[1] for call in self.calls if call[0] == 'download_file']


def make_record(record_id: str, **fields) -> dict:
    """Raw record as returned by the records endpoint."""
    return {'id': record_id, 'createdTime': '2024-01-01T00:00:00.000Z', 'fields': fields}


def make_attachment(url: str, filename: str, attachment_id: Optional[str] = None) -> dict:
    data = {'url': url, 'filename': filename, 'size': 3, 'type': 'image/png'}
    if attachment_id:
        data['id'] = attachment_id
    return data


@pytest.fixture
def backup_dir(tmp_path: Path) -> Path:
    path = tmp_path / 'airtable_backup'
    path.mkdir()
    return path


@pytest.fixture
def config(backup_dir: Path) -> BackupConfig:
    return BackupConfig(
        api_key='keyTEST',
        base_id='appTEST',
        backup_dir=backup_dir,
        error_policy=ErrorPolicy.FAIL_FAST,
    )
