"""
Airtable Backup - Exceptions

Centralized exception hierarchy for all Airtable-related errors.
"""

from typing import Optional


class AirtableError(Exception):
    """Base exception for all Airtable backup operations."""
    pass


class ConfigError(AirtableError):
    """Exception for configuration errors.

    Raised when:
    - API_KEY or BASE_ID is missing
    - A setting has an unusable value
    """
    pass


class AirtableAPIError(AirtableError):
    """Exception for Airtable API errors.

    Carries the HTTP status code when the remote service answered.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RemoteQueryError(AirtableAPIError):
    """Exception for metadata and record listing failures.

    Raised when:
    - The table listing endpoint is unreachable or returns non-2xx
    - A record listing page is unreachable or returns non-2xx
    - The response body is not the expected JSON
    """
    pass


class AttachmentDownloadError(AirtableAPIError):
    """Exception for attachment download failures.

    Raised when:
    - The attachment URL is unreachable
    - The attachment host returns a non-2xx status
    """
    pass
