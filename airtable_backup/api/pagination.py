"""
Pagination Module

Follows the Airtable 'offset' cursor to retrieve every record of a table.
"""

import logging
from typing import Iterator, List

from airtable_backup.api.client import AirtableClient, MAX_PAGE_SIZE
from airtable_backup.models import Record

logger = logging.getLogger(__name__)


def iter_record_pages(
    client: AirtableClient,
    table_name: str,
    page_size: int = MAX_PAGE_SIZE
) -> Iterator[List[Record]]:
    """
    Yield pages of records until the API stops returning an offset.

    Args:
        client: Airtable client
        table_name: Table to list
        page_size: Records per page (clamped to 1-100)

    Yields:
        List of Record objects for each page

    Raises:
        RemoteQueryError: If any page request fails
    """
    if page_size < 1 or page_size > MAX_PAGE_SIZE:
        logger.warning(f"Page size must be 1-{MAX_PAGE_SIZE}, got {page_size}. Using {MAX_PAGE_SIZE}.")
        page_size = MAX_PAGE_SIZE

    offset = None
    page_num = 1

    while True:
        payload = client.fetch_records_page(table_name, offset=offset, page_size=page_size)
        records = [Record.from_api(item) for item in payload['records']]
        logger.debug(f"{table_name}: page {page_num} returned {len(records)} record(s)")

        yield records

        offset = payload.get('offset')
        if not offset:
            break
        page_num += 1


def fetch_all_records(
    client: AirtableClient,
    table_name: str,
    page_size: int = MAX_PAGE_SIZE
) -> List[Record]:
    """
    Fetch the complete record set of a table.

    Returns:
        All records in API order
    """
    records: List[Record] = []
    for page in iter_record_pages(client, table_name, page_size):
        records.extend(page)

    logger.info(f"Fetched {len(records)} record(s) from {table_name}")
    return records
