"""Tests for the attachment downloader."""

import logging

import pytest

from airtable_backup.download.downloader import attachment_directory, download_field_attachments
from airtable_backup.exceptions import AttachmentDownloadError
from airtable_backup.models import Record

from conftest import FakeAirtableClient, make_attachment


def test_missing_field_is_noop(config, backup_dir):
    client = FakeAirtableClient(tables={})
    record = Record('rec1', {'Name': 'Acme'})

    assert download_field_attachments(client, record, 'Clients', 'Files', config) == 0
    assert list(backup_dir.iterdir()) == []


def test_directory_layout(config, backup_dir):
    client = FakeAirtableClient(tables={}, files={'http://x/a.png': b'A', 'http://x/b.png': b'B'})
    record = Record('rec1', {'Name': 'Café #1!', 'Files': [
        make_attachment('http://x/a.png', 'a.png'),
        make_attachment('http://x/b.png', 'b.png'),
    ]})

    assert download_field_attachments(client, record, 'Clients', 'Files', config) == 2

    target = backup_dir / 'Clients.Files' / 'caf___1_'
    assert (target / 'a.png').read_bytes() == b'A'
    assert (target / 'b.png').read_bytes() == b'B'
    assert client.downloads() == ['http://x/a.png', 'http://x/b.png']


def test_existing_directory_and_file_overwritten(config, backup_dir):
    target = backup_dir / 'Clients.Files' / 'acme'
    target.mkdir(parents=True)
    (target / 'a.png').write_bytes(b'old')
    client = FakeAirtableClient(tables={}, files={'http://x/a.png': b'new'})
    record = Record('rec1', {'Name': 'Acme', 'Files': [make_attachment('http://x/a.png', 'a.png')]})

    download_field_attachments(client, record, 'Clients', 'Files', config)

    assert (target / 'a.png').read_bytes() == b'new'


def test_failure_aborts_remaining_attachments(config):
    client = FakeAirtableClient(tables={}, files={'http://x/1': b'1', 'http://x/3': b'3'})
    record = Record('rec1', {'Files': [
        make_attachment('http://x/1', '1.png'),
        make_attachment('http://x/2', '2.png'),
        make_attachment('http://x/3', '3.png'),
    ]})

    with pytest.raises(AttachmentDownloadError):
        download_field_attachments(client, record, 'T', 'Files', config)

    assert client.downloads() == ['http://x/1', 'http://x/2']


def test_item_without_url_fails_when_reached(config, backup_dir):
    client = FakeAirtableClient(tables={}, files={'http://x/1': b'1', 'http://x/3': b'3'})
    record = Record('rec1', {'Name': 'Acme', 'Files': [
        make_attachment('http://x/1', '1.png'),
        'stray',
        make_attachment('http://x/3', '3.png'),
    ]})

    with pytest.raises(AttachmentDownloadError, match='Item 2'):
        download_field_attachments(client, record, 'T', 'Files', config)

    assert client.downloads() == ['http://x/1']
    assert (backup_dir / 'T.Files' / 'acme' / '1.png').read_bytes() == b'1'


def test_colliding_filenames_are_kept_apart(config, backup_dir):
    client = FakeAirtableClient(tables={}, files={'http://x/1': b'first', 'http://x/2': b'second'})
    record = Record('rec1', {'Name': 'Acme', 'Files': [
        make_attachment('http://x/1', 'scan.pdf', 'att1'),
        make_attachment('http://x/2', 'scan.pdf', 'att2'),
    ]})

    download_field_attachments(client, record, 'T', 'Files', config)

    target = backup_dir / 'T.Files' / 'acme'
    assert (target / 'att1_scan.pdf').read_bytes() == b'first'
    assert (target / 'att2_scan.pdf').read_bytes() == b'second'


def test_traversal_in_filename_stays_inside(config, backup_dir):
    client = FakeAirtableClient(tables={}, files={'http://x/1': b'x'})
    record = Record('rec1', {'Name': 'Acme', 'Files': [make_attachment('http://x/1', '../../evil.sh')]})

    download_field_attachments(client, record, 'T', 'Files', config)

    assert (backup_dir / 'T.Files' / 'acme' / '.._.._evil.sh').exists()


def test_logs_one_line_per_file(config, caplog):
    client = FakeAirtableClient(tables={}, files={'http://x/1': b'1', 'http://x/2': b'2'})
    record = Record('rec1', {'Files': [make_attachment('http://x/1', '1'), make_attachment('http://x/2', '2')]})

    with caplog.at_level(logging.INFO, logger='airtable_backup.download.downloader'):
        download_field_attachments(client, record, 'T', 'Files', config)

    lines = [r.getMessage() for r in caplog.records if r.getMessage().startswith('Downloaded: ')]
    assert len(lines) == 2


def test_attachment_directory(backup_dir):
    record = Record('recX', {})
    assert attachment_directory(backup_dir, 'Clients', 'Files', record) == backup_dir / 'Clients.Files' / 'recx'
