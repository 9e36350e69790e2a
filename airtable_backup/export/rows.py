"""
Export Rows

Flattens records into CSV-ready rows.
"""

import json
from typing import Any, Dict, Iterable, List, Mapping

from airtable_backup.models import FieldKind, ID_KEY, Record, classify_field


def join_attachment_urls(value: List[Any]) -> str:
    """Comma-and-space join of each attachment's url, in list order."""
    urls = []
    for item in value:
        url = item.get('url') if isinstance(item, Mapping) else None
        urls.append('' if url is None else str(url))
    return ', '.join(urls)


def build_export_row(record: Record) -> Dict[str, Any]:
    """
    Project a record onto an export row.

    Starts from the record's fields, stores the record ID under 'id'
    (replacing a field of that name) and collapses attachment lists to
    their joined URLs.
    """
    row: Dict[str, Any] = dict(record.fields)
    row[ID_KEY] = record.id

    for key, value in row.items():
        if classify_field(value) is FieldKind.ATTACHMENT_LIST:
            row[key] = join_attachment_urls(value)

    return row


def collect_fieldnames(rows: Iterable[Mapping[str, Any]]) -> List[str]:
    """Union of row keys in first-seen order."""
    fieldnames: List[str] = []
    seen = set()
    for row in rows:
        for key in row:
            if key not in seen:
                seen.add(key)
                fieldnames.append(key)
    return fieldnames


def format_cell(value: Any) -> str:
    """
    Render a field value as CSV cell text.

    Booleans are written lowercase, None as empty, and remaining lists or
    mappings (linked records, collaborators) as compact JSON.
    """
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False, separators=(',', ':'))
    return str(value)
