"""
Filename Utilities

Functions for building filesystem-safe directory and file names,
including collision handling for attachments of one record field.
"""

import logging
import re
from collections import defaultdict
from typing import Dict, List, Sequence

from airtable_backup.models import Attachment

logger = logging.getLogger(__name__)

# Maximum filename length supported by most filesystems
MAX_FILENAME_LENGTH = 255

_NON_ALNUM = re.compile(r'[^a-z0-9]', re.IGNORECASE | re.ASCII)


def sanitize_record_name(name: str, fallback: str) -> str:
    """
    Turn a record display name into a directory segment.

    Every character outside [a-zA-Z0-9] becomes '_' and the result is
    lowercased, so 'Café #1!' becomes 'caf___1_'.

    Args:
        name: Record display name
        fallback: Used instead when the result would be empty (record ID)

    Returns:
        Non-empty directory name
    """
    sanitized = _NON_ALNUM.sub('_', name).lower()[:MAX_FILENAME_LENGTH]
    if not sanitized:
        sanitized = _NON_ALNUM.sub('_', fallback).lower() or 'record'
    return sanitized


def sanitize_filename(filename: str) -> str:
    """
    Sanitize filename to be filesystem-safe.

    Only what cannot appear in a POSIX path segment is replaced: the
    separator '/' and NUL. Everything else, such as ':' or '?', is
    kept so names match the base. Names that would resolve to '.' or
    '..' are prefixed with '_', and overlong names are truncated.

    Args:
        filename: Original attachment filename

    Returns:
        Sanitized filename safe for filesystem use
    """
    invalid_chars = '/\0'
    for char in invalid_chars:
        filename = filename.replace(char, '_')

    if filename in ('', '.', '..'):
        filename = f'_{filename}'

    # Limit length to maximum supported by most filesystems
    if len(filename) > MAX_FILENAME_LENGTH:
        name, ext = filename.rsplit('.', 1) if '.' in filename else (filename, '')
        max_name_length = MAX_FILENAME_LENGTH - len(ext) - 1
        filename = name[:max_name_length] + '.' + ext if ext else name[:MAX_FILENAME_LENGTH]

    return filename


def resolve_attachment_filenames(attachments: Sequence[Attachment]) -> List[str]:
    """
    Pick an output filename for every attachment of one record field.

    Names are compared lowercase so the result is safe on case-insensitive
    filesystems. Colliding attachments get their attachment ID (or list
    position when there is none) as prefix; unique ones keep their name.

    Args:
        attachments: Attachments in list order

    Returns:
        Output filenames, same order as the input
    """
    safe_names = [sanitize_filename(attachment.filename) for attachment in attachments]

    occurrence_count: Dict[str, int] = defaultdict(int)
    for safe_name in safe_names:
        occurrence_count[safe_name.lower()] += 1

    result: List[str] = []
    for position, (attachment, safe_name) in enumerate(zip(attachments, safe_names), start=1):
        if occurrence_count[safe_name.lower()] > 1:
            prefix = attachment.id or str(position)
            result.append(sanitize_filename(f"{prefix}_{safe_name}"))
        else:
            result.append(safe_name)

    total_collisions = sum(1 for name in safe_names if occurrence_count[name.lower()] > 1)
    if total_collisions > 0:
        logger.warning(
            f"Detected {total_collisions} attachment(s) with name collisions - "
            f"will use Id prefix for these files"
        )

    return result
