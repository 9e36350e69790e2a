"""
Airtable REST API Client

Provides a simple client for the Airtable metadata and records endpoints
and for streaming attachment files to disk.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from airtable_backup.exceptions import AttachmentDownloadError, RemoteQueryError

logger = logging.getLogger(__name__)

AIRTABLE_API_URL = 'https://api.airtable.com/v0'

# Airtable caps pageSize at 100
MAX_PAGE_SIZE = 100

DEFAULT_CHUNK_SIZE = 8192


def _error_detail(response: requests.Response) -> str:
    """Extract a readable error message from an Airtable error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or response.reason or ''

    error = body.get('error') if isinstance(body, dict) else None
    if isinstance(error, dict):
        return error.get('message') or error.get('type') or str(error)
    if error:
        return str(error)
    return str(body)[:200]


class AirtableClient:
    """
    Simple Airtable REST API client.

    Holds one authenticated session for API calls and a separate plain
    session for attachment URLs, which are pre-signed and must not receive
    the bearer token.
    """

    def __init__(self, api_key: str, base_id: str, api_url: str = AIRTABLE_API_URL):
        """
        Initialize Airtable client.

        Args:
            api_key: Personal access token or API key
            base_id: ID of the base to read (e.g., appXXXXXXXXXXXXXX)
            api_url: API root URL (default: https://api.airtable.com/v0)
        """
        self.base_id = base_id
        self.api_url = api_url.rstrip('/')
        self.session = requests.Session()
        self.download_session = requests.Session()

        self.session.headers.update({
            'Authorization': f'Bearer {api_key}',
            'Content-Type': 'application/json'
        })

        logger.debug(f"Initialized Airtable client for base: {base_id}")

    def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        GET a JSON document from the API.

        Raises:
            RemoteQueryError: On network failure, non-2xx status or invalid JSON
        """
        logger.debug(f"GET {url} params={params}")

        try:
            response = self.session.get(url, params=params)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed for {url}: {e}")
            raise RemoteQueryError(f"Request failed: {e}") from e

        if not response.ok:
            detail = _error_detail(response)
            logger.error(f"HTTP {response.status_code} from {url}: {detail}")
            raise RemoteQueryError(
                f"HTTP {response.status_code}: {detail}",
                status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from {url}: {e}")
            raise RemoteQueryError(f"Invalid JSON response: {e}", status_code=response.status_code) from e

    def list_tables(self) -> List[str]:
        """
        List the table names of the base, in the order the API returns them.

        Returns:
            List of table names

        Raises:
            RemoteQueryError: If the metadata endpoint fails
        """
        url = f"{self.api_url}/meta/bases/{self.base_id}/tables"
        logger.info(f"Fetching table list for base: {self.base_id}")

        payload = self._get_json(url)
        tables = payload.get('tables')
        if not isinstance(tables, list):
            raise RemoteQueryError("Metadata response has no 'tables' list")

        names = [table['name'] for table in tables]
        logger.debug(f"Found {len(names)} table(s): {names}")
        return names

    def fetch_records_page(
        self,
        table_name: str,
        offset: Optional[str] = None,
        page_size: int = MAX_PAGE_SIZE
    ) -> Dict[str, Any]:
        """
        Fetch one page of records from a table.

        Args:
            table_name: Table name (URL-encoded here)
            offset: Cursor returned by the previous page, None for the first
            page_size: Records per page (1-100)

        Returns:
            Raw page payload with 'records' and, unless last, 'offset'

        Raises:
            RemoteQueryError: If the records endpoint fails
        """
        url = f"{self.api_url}/{self.base_id}/{quote(table_name, safe='')}"
        params: Dict[str, Any] = {'pageSize': page_size}
        if offset:
            params['offset'] = offset

        payload = self._get_json(url, params=params)
        if not isinstance(payload.get('records'), list):
            raise RemoteQueryError(f"Records response for '{table_name}' has no 'records' list")
        return payload

    def download_file(
        self,
        url: str,
        output_path: Path,
        chunk_size: int = DEFAULT_CHUNK_SIZE
    ) -> int:
        """
        Stream a file from a URL to disk, overwriting any existing file.

        Args:
            url: Attachment URL
            output_path: Local file path to write
            chunk_size: Size of chunks for streaming download (default: 8KB)

        Returns:
            Number of bytes written

        Raises:
            AttachmentDownloadError: If the request fails or returns non-2xx
            OSError: If the file cannot be written
        """
        logger.debug(f"Downloading {url} -> {output_path}")

        try:
            response = self.download_session.get(url, stream=True)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed for {url}: {e}")
            raise AttachmentDownloadError(f"Request failed: {e}") from e

        with response:
            if not response.ok:
                logger.error(f"HTTP {response.status_code} downloading {url}")
                raise AttachmentDownloadError(
                    f"HTTP {response.status_code} downloading {output_path.name}",
                    status_code=response.status_code
                )

            bytes_downloaded = 0
            try:
                with output_path.open('wb') as f:
                    for chunk in response.iter_content(chunk_size=chunk_size):
                        if chunk:  # Filter out keep-alive chunks
                            f.write(chunk)
                            bytes_downloaded += len(chunk)
            except requests.exceptions.RequestException as e:
                logger.error(f"Stream interrupted for {url}: {e}")
                raise AttachmentDownloadError(f"Stream interrupted: {e}") from e

        logger.debug(f"Wrote {bytes_downloaded} bytes to: {output_path.name}")
        return bytes_downloaded

    def close(self):
        """Close both sessions"""
        self.session.close()
        self.download_session.close()
        logger.debug("Closed Airtable client sessions")

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - ensure sessions are closed"""
        self.close()
        return False
