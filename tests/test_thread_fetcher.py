"""
Tests for Thread Fetcher

Unit tests for the ThreadFetcher class covering:
- Public mode headers
- Credentialed mode token handling
- Upstream status propagation
- Malformed and unreachable upstream responses
"""

import pytest
from unittest.mock import MagicMock, patch
import requests
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from services.thread_fetcher import ThreadFetcher
from utils.exceptions import AuthenticationError, UpstreamError, MalformedDocumentError

ENDPOINT = "https://www.reddit.com/comments/abc123.json"


# =============================================================================
# Public Mode
# =============================================================================

class TestPublicFetch:
    """Fetching without credentials."""

    def test_returns_document(self, mock_session, mock_http_response, raw_document):
        document = raw_document(title="T")
        mock_session.get.return_value = mock_http_response(json_data=document)

        result = ThreadFetcher(session=mock_session).fetch(ENDPOINT)

        assert result == document
        mock_session.get.assert_called_once()
        assert mock_session.get.call_args[0][0] == ENDPOINT

    def test_sends_browser_like_headers(self, mock_session, mock_http_response):
        mock_session.get.return_value = mock_http_response(json_data=[])

        ThreadFetcher(session=mock_session).fetch(ENDPOINT)

        headers = mock_session.get.call_args[1]["headers"]
        assert headers["User-Agent"]
        assert headers["Accept-Language"].startswith("en-US")
        assert "Referer" in headers
        assert "Authorization" not in headers


# =============================================================================
# Credentialed Mode
# =============================================================================

class TestCredentialedFetch:
    """Fetching with an OAuth token."""

    def test_attaches_bearer_token(self, mock_session, mock_http_response):
        token_cache = MagicMock()
        token_cache.get_token.return_value = "secret-token"
        mock_session.get.return_value = mock_http_response(json_data=[])

        ThreadFetcher(token_cache=token_cache, session=mock_session).fetch(ENDPOINT)

        headers = mock_session.get.call_args[1]["headers"]
        assert headers["Authorization"] == "bearer secret-token"
        assert "Referer" not in headers

    def test_no_token_fails_fast(self, mock_session):
        """Without a token no request is made at all."""
        token_cache = MagicMock()
        token_cache.get_token.return_value = None

        with pytest.raises(AuthenticationError):
            ThreadFetcher(token_cache=token_cache, session=mock_session).fetch(ENDPOINT)

        mock_session.get.assert_not_called()


# =============================================================================
# Upstream Failures
# =============================================================================

class TestUpstreamFailures:
    """Non-success statuses and unusable bodies."""

    @pytest.mark.parametrize("status", [403, 404, 429, 500])
    def test_status_code_is_propagated(self, mock_session, mock_http_response, status):
        mock_session.get.return_value = mock_http_response(status_code=status, text="<html>blocked</html>")

        with pytest.raises(UpstreamError) as exc_info:
            ThreadFetcher(session=mock_session).fetch(ENDPOINT)

        assert exc_info.value.status_code == status
        assert str(status) in str(exc_info.value)

    def test_error_body_is_not_parsed(self, mock_session, mock_http_response):
        response = mock_http_response(status_code=403, text="Forbidden")
        mock_session.get.return_value = response

        with pytest.raises(UpstreamError):
            ThreadFetcher(session=mock_session).fetch(ENDPOINT)

        response.json.assert_not_called()

    def test_error_snippet_is_logged(self, mock_session, mock_http_response, capture_logs):
        mock_session.get.return_value = mock_http_response(status_code=403, text="x" * 500)

        with pytest.raises(UpstreamError):
            ThreadFetcher(session=mock_session).fetch(ENDPOINT)

        messages = [r.getMessage() for r in capture_logs]
        assert any("403" in m for m in messages)
        assert any(m.startswith("Response snippet: ") and len(m) < 250 for m in messages)

    def test_network_error(self, mock_session):
        mock_session.get.side_effect = requests.ConnectionError("connection reset")

        with pytest.raises(UpstreamError) as exc_info:
            ThreadFetcher(session=mock_session).fetch(ENDPOINT)

        assert exc_info.value.status_code is None

    def test_non_json_body(self, mock_session, mock_http_response):
        mock_session.get.return_value = mock_http_response(text="<html>login</html>")

        with pytest.raises(MalformedDocumentError):
            ThreadFetcher(session=mock_session).fetch(ENDPOINT)

    def test_non_listing_document(self, mock_session, mock_http_response):
        mock_session.get.return_value = mock_http_response(json_data={"message": "Not Found"})

        with pytest.raises(MalformedDocumentError):
            ThreadFetcher(session=mock_session).fetch(ENDPOINT)


# =============================================================================
# Status Handling With Real Responses
# =============================================================================

class TestNonSuccessStatuses:
    """Statuses below 400 that are still not a 2xx success."""

    @staticmethod
    def _real_response(status: int, body: bytes = b"") -> requests.Response:
        response = requests.Response()
        response.status_code = status
        response._content = body
        response.url = ENDPOINT
        return response

    @pytest.mark.parametrize("status", [304, 302, 101])
    def test_non_2xx_is_upstream_error(self, mock_session, status):
        mock_session.get.return_value = self._real_response(status)

        with pytest.raises(UpstreamError) as exc_info:
            ThreadFetcher(session=mock_session).fetch(ENDPOINT)

        assert exc_info.value.status_code == status

    def test_real_success_response(self, mock_session):
        mock_session.get.return_value = self._real_response(200, b'[{"data": {}}, {"data": {}}]')

        assert ThreadFetcher(session=mock_session).fetch(ENDPOINT) == [{"data": {}}, {"data": {}}]


class TestDefaultTransport:

    def test_uses_module_level_requests_per_call(self, mock_http_response):
        """Without an injected session each fetch goes through requests.get."""
        with patch('services.thread_fetcher.requests.get',
                   return_value=mock_http_response(json_data=[])) as mock_get:
            ThreadFetcher().fetch(ENDPOINT)

        mock_get.assert_called_once()
        assert mock_get.call_args[0][0] == ENDPOINT
