"""Tests for environment and command-line configuration."""

import logging
from pathlib import Path

import pytest

from airtable_backup.cli import config as config_module
from airtable_backup.cli.config import ErrorPolicy, load_config, parse_arguments
from airtable_backup.exceptions import ConfigError

ENV_VARS = [
    'API_KEY', 'BASE_ID', 'BACKUP_DIR', 'LOG_FILE', 'ERROR_POLICY',
    'CHUNK_SIZE', 'PAGE_SIZE', 'PROGRESS', 'AIRTABLE_API_URL',
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr(config_module, 'load_dotenv', lambda: None)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv('API_KEY', 'keyTEST')
    monkeypatch.setenv('BASE_ID', 'appTEST')


def test_defaults():
    config = load_config([])

    assert config.api_key == 'keyTEST'
    assert config.base_id == 'appTEST'
    assert config.backup_dir == Path('./airtable_backup')
    assert config.error_policy is ErrorPolicy.FAIL_FAST
    assert config.chunk_size == 8192
    assert config.page_size == 100
    assert config.progress == 'off'
    assert config.console_log_level == logging.INFO


@pytest.mark.parametrize('missing', ['API_KEY', 'BASE_ID'])
def test_missing_credentials(monkeypatch, missing):
    monkeypatch.delenv(missing)

    with pytest.raises(ConfigError, match=missing):
        load_config([])


def test_empty_credential_counts_as_missing(monkeypatch):
    monkeypatch.setenv('API_KEY', '')

    with pytest.raises(ConfigError):
        load_config([])


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv('BACKUP_DIR', str(tmp_path / 'out'))
    monkeypatch.setenv('ERROR_POLICY', 'continue')
    monkeypatch.setenv('CHUNK_SIZE', '65536')
    monkeypatch.setenv('PAGE_SIZE', '50')

    config = load_config([])

    assert config.backup_dir == tmp_path / 'out'
    assert config.error_policy is ErrorPolicy.CONTINUE
    assert config.chunk_size == 65536
    assert config.page_size == 50


def test_invalid_values_fall_back(monkeypatch, caplog):
    monkeypatch.setenv('ERROR_POLICY', 'sometimes')
    monkeypatch.setenv('CHUNK_SIZE', 'big')
    monkeypatch.setenv('PAGE_SIZE', '1000')
    monkeypatch.setenv('PROGRESS', 'fancy')

    with caplog.at_level(logging.WARNING):
        config = load_config([])

    assert config.error_policy is ErrorPolicy.FAIL_FAST
    assert config.chunk_size == 8192
    assert config.page_size == 100
    assert config.progress == 'off'
    assert "Invalid CHUNK_SIZE value 'big'" in caplog.text


def test_flags_override_environment(monkeypatch, tmp_path):
    monkeypatch.setenv('ERROR_POLICY', 'continue')

    config = load_config([
        '--output', str(tmp_path / 'flag'),
        '--error-policy', 'fail-fast',
        '--progress', 'on',
        '--debug',
    ])

    assert config.backup_dir == tmp_path / 'flag'
    assert config.error_policy is ErrorPolicy.FAIL_FAST
    assert config.progress == 'on'
    assert config.console_log_level == logging.DEBUG


def test_quiet_flag():
    args = parse_arguments(['--quiet'])
    assert args.console_log_level == logging.WARNING


def test_repr_hides_token():
    assert 'keyTEST' not in repr(load_config([]))
