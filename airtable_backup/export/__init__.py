"""Table export to CSV"""
from airtable_backup.export.exporter import (
    export_table,
    write_table_csv,
    table_csv_path,
    download_table_attachments,
)
from airtable_backup.export.rows import (
    build_export_row,
    collect_fieldnames,
    format_cell,
    join_attachment_urls,
)

__all__ = [
    "export_table",
    "write_table_csv",
    "table_csv_path",
    "download_table_attachments",
    "build_export_row",
    "collect_fieldnames",
    "format_cell",
    "join_attachment_urls",
]
