"""
CLI Configuration Module

Handles command-line argument parsing and environment configuration.
"""

import os
import argparse
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional
from dotenv import load_dotenv

from airtable_backup.api.client import AIRTABLE_API_URL, DEFAULT_CHUNK_SIZE, MAX_PAGE_SIZE
from airtable_backup.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_BACKUP_DIR = './airtable_backup'
DEFAULT_LOG_FILE = './logs/backup.log'


class ErrorPolicy(Enum):
    """What the orchestrator does after a table fails."""
    FAIL_FAST = "fail-fast"    # Stop at the first failed table
    CONTINUE = "continue"      # Log the failure and move to the next table


@dataclass
class BackupConfig:
    """Settings threaded through every backup component."""
    api_key: str
    base_id: str
    backup_dir: Path
    error_policy: ErrorPolicy = ErrorPolicy.FAIL_FAST
    chunk_size: int = DEFAULT_CHUNK_SIZE
    page_size: int = MAX_PAGE_SIZE
    api_url: str = AIRTABLE_API_URL
    log_file: Path = Path(DEFAULT_LOG_FILE)
    console_log_level: int = logging.INFO
    progress: str = 'off'

    def __repr__(self) -> str:
        # Keep the token out of logs
        return (
            f"BackupConfig(base_id='{self.base_id}', backup_dir='{self.backup_dir}', "
            f"error_policy={self.error_policy.value})"
        )


def _int_setting(name: str, raw: str, default: int, minimum: int = 1, maximum: Optional[int] = None) -> int:
    """Convert an env setting to int, falling back to the default on bad input."""
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Invalid {name} value '{raw}', using default {default}")
        return default

    if value < minimum or (maximum is not None and value > maximum):
        logger.warning(f"{name} out of range, got {value}. Using default {default}.")
        return default
    return value


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments and load environment configuration.

    No flag is required: with none given, everything comes from the
    environment (or a .env file).

    Returns:
        argparse.Namespace: Parsed arguments with additional attributes:
            - api_key: Optional[str]
            - base_id: Optional[str]
            - chunk_size: int
            - page_size: int
            - console_log_level: int
    """
    # Load environment variables from .env file (if present)
    load_dotenv()

    env_backup_dir = os.getenv('BACKUP_DIR', DEFAULT_BACKUP_DIR)
    env_log_file = os.getenv('LOG_FILE', DEFAULT_LOG_FILE)
    env_chunk_size = os.getenv('CHUNK_SIZE', str(DEFAULT_CHUNK_SIZE))
    env_page_size = os.getenv('PAGE_SIZE', str(MAX_PAGE_SIZE))
    env_api_url = os.getenv('AIRTABLE_API_URL', AIRTABLE_API_URL)
    env_progress = os.getenv('PROGRESS', 'off')

    env_error_policy = os.getenv('ERROR_POLICY', ErrorPolicy.FAIL_FAST.value)
    valid_policies = [policy.value for policy in ErrorPolicy]
    if env_error_policy not in valid_policies:
        logger.warning(f"Invalid ERROR_POLICY value '{env_error_policy}', using default 'fail-fast'")
        env_error_policy = ErrorPolicy.FAIL_FAST.value

    if env_progress not in ['auto', 'on', 'off']:
        logger.warning(f"Invalid PROGRESS value '{env_progress}', using default 'off'")
        env_progress = 'off'

    parser = argparse.ArgumentParser(
        description='Back up every table and attachment of an Airtable base'
    )
    parser.add_argument(
        '--output',
        type=Path,
        default=Path(env_backup_dir),
        help=f'Backup root directory (default: {env_backup_dir})'
    )
    parser.add_argument(
        '--log-file',
        type=Path,
        default=Path(env_log_file),
        help=f'Debug log file (default: {env_log_file})'
    )
    parser.add_argument(
        '--error-policy',
        type=str,
        choices=valid_policies,
        default=env_error_policy,
        help='fail-fast (stop at first failed table) or continue (log and move on)'
    )
    parser.add_argument(
        '--progress',
        type=str,
        choices=['auto', 'on', 'off'],
        default=env_progress,
        help='Progress display mode (default: off)'
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        '--debug',
        action='store_true',
        help='Show all technical details on the console'
    )
    verbosity.add_argument(
        '--quiet',
        action='store_true',
        help='Only show warnings and errors on the console'
    )

    args = parser.parse_args(argv)

    args.api_key = os.getenv('API_KEY')
    args.base_id = os.getenv('BASE_ID')
    args.api_url = env_api_url
    args.chunk_size = _int_setting('CHUNK_SIZE', env_chunk_size, DEFAULT_CHUNK_SIZE)
    args.page_size = _int_setting('PAGE_SIZE', env_page_size, MAX_PAGE_SIZE, maximum=MAX_PAGE_SIZE)

    if args.debug:
        args.console_log_level = logging.DEBUG
    elif args.quiet:
        args.console_log_level = logging.WARNING
    else:
        args.console_log_level = logging.INFO

    return args


def build_config(args: argparse.Namespace) -> BackupConfig:
    """
    Validate parsed arguments and build the backup configuration.

    Raises:
        ConfigError: If API_KEY or BASE_ID is missing
    """
    if not args.api_key:
        raise ConfigError("Missing API_KEY environment variable")
    if not args.base_id:
        raise ConfigError("Missing BASE_ID environment variable")

    return BackupConfig(
        api_key=args.api_key,
        base_id=args.base_id,
        backup_dir=args.output,
        error_policy=ErrorPolicy(args.error_policy),
        chunk_size=args.chunk_size,
        page_size=args.page_size,
        api_url=args.api_url,
        log_file=args.log_file,
        console_log_level=args.console_log_level,
        progress=args.progress,
    )


def load_config(argv: Optional[List[str]] = None) -> BackupConfig:
    """Parse arguments and environment into a BackupConfig."""
    return build_config(parse_arguments(argv))
