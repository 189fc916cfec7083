"""
Custom Exception Classes for Thread Scraper Application

This module defines custom exceptions for better error handling and
categorization of failures across the application.
"""

from typing import Optional


class ThreadScraperError(Exception):
    """Base exception for all Thread Scraper application errors."""
    pass


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(ThreadScraperError):
    """Raised when configuration validation fails or required settings are missing."""
    pass


# =============================================================================
# Request Errors
# =============================================================================

class ScrapeRequestError(ThreadScraperError):
    """Base exception for problems with the caller's scrape request."""
    pass


class MissingInputError(ScrapeRequestError):
    """Raised when no thread URL was supplied."""
    pass


class InvalidUrlError(ScrapeRequestError):
    """Raised when no upstream endpoint can be derived from the supplied URL."""
    pass


# =============================================================================
# Upstream Errors
# =============================================================================

class AuthenticationError(ThreadScraperError):
    """Raised when credentialed access is configured but no access token is obtainable."""
    pass


class UpstreamError(ThreadScraperError):
    """Raised when the upstream platform answers with a non-success status.

    Attributes:
        status_code: The upstream HTTP status, or None when the upstream
            could not be reached at all.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedDocumentError(ThreadScraperError):
    """Raised when the upstream payload is not a listing array."""
    pass
