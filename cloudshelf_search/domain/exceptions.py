"""
Custom exceptions for the catalog search domain.

These exceptions represent domain-level errors and are independent
of infrastructure concerns (HTTP, GraphQL, etc.).
"""

from typing import Optional


class SearchServiceException(Exception):
    """Base exception for all catalog search errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class CatalogFetchException(SearchServiceException):
    """Raised when the catalog collaborator fails to return a page."""

    def __init__(self, source: str, reason: Optional[str] = None):
        message = f"Catalog source '{source}' unavailable"
        if reason:
            message += f": {reason}"
        super().__init__(message=message, details={"source": source, "reason": reason})
