"""
Token Cache Module

This module obtains app-only OAuth tokens from Reddit with the
client-credentials grant and reuses them until shortly before they expire.
"""

import time
from typing import Optional, Callable

import requests
from requests.auth import HTTPBasicAuth

from config import settings
from data.models import AccessToken
from utils.helpers import truncate_text
from utils.logger import get_logger

logger = get_logger(__name__)


class TokenCache:
    """
    Process-wide cache for a single Reddit access token.

    The cached token is one immutable AccessToken swapped in a single
    assignment, so concurrent readers always see a consistent value/expiry
    pair. Concurrent refreshes are not serialized; a redundant exchange
    only replaces the token with an equally valid one.
    """

    def __init__(self,
                 client_id: Optional[str] = None,
                 client_secret: Optional[str] = None,
                 session=None,
                 clock: Callable[[], float] = time.time):
        self.client_id = client_id if client_id is not None else settings.REDDIT_CLIENT_ID
        self.client_secret = client_secret if client_secret is not None else settings.REDDIT_CLIENT_SECRET
        self.token_url = settings.REDDIT_TOKEN_URL
        self.user_agent = settings.USER_AGENT
        self.expiry_buffer = settings.TOKEN_EXPIRY_BUFFER
        self.timeout = settings.UPSTREAM_TIMEOUT
        self.session = session or requests
        self._clock = clock
        self._token: Optional[AccessToken] = None

    def get_token(self) -> Optional[str]:
        """
        Return a valid access token, exchanging credentials when needed.

        Returns:
            Optional[str]: The token string, or None if no token could be obtained.
        """
        token = self._token
        if token is not None and token.is_valid(self._clock(), self.expiry_buffer):
            return token.value

        return self._refresh()

    def _refresh(self) -> Optional[str]:
        """Exchange the client credentials for a new token. Failures are not cached."""
        if not self.client_id or not self.client_secret:
            logger.error("Missing Reddit OAuth credentials (REDDIT_CLIENT_ID / REDDIT_CLIENT_SECRET)")
            return None

        try:
            response = self.session.post(
                self.token_url,
                auth=HTTPBasicAuth(self.client_id, self.client_secret),
                data={"grant_type": "client_credentials"},
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Failed to reach Reddit token endpoint: {e}")
            return None

        if not 200 <= response.status_code < 300:
            logger.error(f"Reddit token exchange failed with status {response.status_code}: "
                         f"{truncate_text(response.text or '', settings.RESPONSE_SNIPPET_LENGTH)}")
            return None

        try:
            payload = response.json()
            value = payload["access_token"]
            expires_in = float(payload.get("expires_in", 0))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error(f"Unexpected token response from Reddit: {e}")
            return None

        if not value:
            logger.error("Reddit token response did not contain a token")
            return None

        self._token = AccessToken(value=value, issued_at=self._clock(), expires_in=expires_in)
        logger.info(f"Obtained new Reddit access token (expires in {int(expires_in)}s)")
        return value
