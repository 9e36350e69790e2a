"""Airtable API access"""
from airtable_backup.api.client import AirtableClient, AIRTABLE_API_URL, MAX_PAGE_SIZE
from airtable_backup.api.pagination import iter_record_pages, fetch_all_records

__all__ = [
    "AirtableClient",
    "AIRTABLE_API_URL",
    "MAX_PAGE_SIZE",
    "iter_record_pages",
    "fetch_all_records",
]
