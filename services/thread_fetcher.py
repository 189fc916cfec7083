"""
Thread Fetcher Module

This module downloads the raw JSON document for a thread endpoint. It makes
exactly one request per call and never retries; callers own retry policy.
"""

from typing import Any, List, Optional

import requests

from config import settings
from services.protocols import TokenProvider
from utils.exceptions import AuthenticationError, UpstreamError, MalformedDocumentError
from utils.helpers import truncate_text
from utils.logger import get_logger

logger = get_logger(__name__)


class ThreadFetcher:
    """Fetch raw thread documents from Reddit, publicly or with an OAuth token."""

    def __init__(self, token_cache: Optional[TokenProvider] = None,
                 session=None):
        """
        Initialize the fetcher.

        Args:
            token_cache: Token source for credentialed mode. When None the
                public endpoints are used without credentials.
            session: Object providing get(); defaults to the requests module so
                each call makes its own connection.
        """
        self.token_cache = token_cache
        self.session = session or requests
        self.user_agent = settings.USER_AGENT
        self.timeout = settings.UPSTREAM_TIMEOUT

    @property
    def credentialed(self) -> bool:
        return self.token_cache is not None

    def _build_headers(self) -> dict:
        headers = {'User-Agent': self.user_agent}

        if self.credentialed:
            token = self.token_cache.get_token()
            if not token:
                # No unauthenticated fallback in credentialed mode
                raise AuthenticationError("Could not obtain a Reddit access token. "
                                          "Check REDDIT_CLIENT_ID and REDDIT_CLIENT_SECRET.")
            headers['Authorization'] = f"bearer {token}"
        else:
            headers.update(settings.PUBLIC_REQUEST_HEADERS)

        return headers

    def fetch(self, endpoint: str) -> List[Any]:
        """
        Fetch the raw listing array for a thread.

        Args:
            endpoint: The resolved JSON endpoint URL.

        Returns:
            List[Any]: The decoded document, normally [post_listing, comment_listing].

        Raises:
            AuthenticationError: Credentialed mode is on but no token is available.
            UpstreamError: Reddit answered with a non-success status or was unreachable.
            MalformedDocumentError: The response is not a JSON listing array.
        """
        headers = self._build_headers()

        try:
            response = self.session.get(endpoint, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Request to Reddit failed for {endpoint}: {e}")
            raise UpstreamError(f"Could not reach Reddit: {e}") from e

        if not 200 <= response.status_code < 300:
            logger.error(f"Reddit returned status {response.status_code} for {endpoint}")
            # Body is read for diagnostics only
            snippet = truncate_text(response.text or "", settings.RESPONSE_SNIPPET_LENGTH)
            logger.info(f"Response snippet: {snippet}")
            raise UpstreamError(f"Reddit returned status {response.status_code}",
                                status_code=response.status_code)

        try:
            document = response.json()
        except ValueError as e:
            logger.error(f"Reddit response for {endpoint} is not JSON: {e}")
            raise MalformedDocumentError("Reddit returned a response that is not JSON") from e

        if not isinstance(document, list):
            raise MalformedDocumentError("Reddit response is not a listing array")

        logger.info(f"Successfully fetched JSON for: {endpoint}")
        return document
