"""
Shared Test Fixtures for Thread Scraper Application

This module provides common fixtures used across all test modules.
Fixtures include mock HTTP responses and sessions, log capture, and
factories for raw Reddit documents.
"""

import pytest
from unittest.mock import MagicMock
from typing import Optional, Dict, Any, List
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


# =============================================================================
# Logging Fixtures
# =============================================================================

@pytest.fixture
def capture_logs():
    """
    Capture log messages for assertion in tests.

    Records from the application logger are collected in a list.

    Returns:
        list: A list that will contain captured log records.
    """
    import logging

    class LogCapture(logging.Handler):
        def __init__(self):
            super().__init__()
            self.records = []

        def emit(self, record):
            self.records.append(record)

    handler = LogCapture()
    handler.setLevel(logging.DEBUG)

    app_logger = logging.getLogger("thread_scraper")
    original_level = app_logger.level
    app_logger.setLevel(logging.DEBUG)
    app_logger.addHandler(handler)

    yield handler.records

    app_logger.removeHandler(handler)
    app_logger.setLevel(original_level)


# =============================================================================
# HTTP Response Fixtures
# =============================================================================

@pytest.fixture
def mock_http_response():
    """
    Factory fixture for creating mock HTTP responses.

    Usage:
        def test_http_request(mock_http_response):
            response = mock_http_response(status_code=200, json_data=[...])

    Returns:
        callable: A factory function for creating mock responses.
    """
    def _create_response(
        status_code: int = 200,
        text: str = '',
        json_data: Any = None,
        headers: Optional[Dict[str, str]] = None,
        url: str = 'https://www.reddit.com'
    ) -> MagicMock:
        """
        Create a mock HTTP response object.

        Args:
            status_code: HTTP status code (default 200).
            text: Text content (auto-generated from json_data if not provided).
            json_data: Value to return from response.json().
            headers: Response headers dictionary.
            url: The URL of the response.

        Returns:
            MagicMock: A mock response object mimicking requests.Response.
        """
        import json

        mock_response = MagicMock()
        mock_response.status_code = status_code
        mock_response.url = url
        mock_response.headers = headers or {'Content-Type': 'application/json'}
        mock_response.ok = 200 <= status_code < 300

        if text:
            mock_response.text = text
        elif json_data is not None:
            mock_response.text = json.dumps(json_data)
        else:
            mock_response.text = ''

        if json_data is not None:
            mock_response.json.return_value = json_data
        else:
            mock_response.json.side_effect = ValueError("No JSON data")

        return mock_response

    return _create_response


@pytest.fixture
def mock_session():
    """
    A stand-in for requests.Session with get/post as MagicMocks.

    Usage:
        def test_fetch(mock_session, mock_http_response):
            mock_session.get.return_value = mock_http_response(json_data=[])
    """
    session = MagicMock()
    return session


# =============================================================================
# Reddit Document Factories
# =============================================================================

@pytest.fixture
def comment_node():
    """
    Factory fixture for raw Reddit comment nodes.

    Usage:
        node = comment_node(body="hi", replies=[comment_node(body="yo")])
    """
    def _create_node(
        body: Optional[str] = "comment body",
        author: Optional[str] = "someone",
        score: Optional[int] = 1,
        created_utc: Optional[float] = 1700000000.0,
        replies: Optional[List[Dict[str, Any]]] = None,
        kind: str = "t1",
        **extra
    ) -> Dict[str, Any]:
        data = dict(extra)
        if body is not None:
            data["body"] = body
        if author is not None:
            data["author"] = author
        if score is not None:
            data["score"] = score
        if created_utc is not None:
            data["created_utc"] = created_utc
        # Reddit sends "" when a comment has no replies
        data["replies"] = {"kind": "Listing", "data": {"children": replies}} if replies else ""
        return {"kind": kind, "data": data}

    return _create_node


@pytest.fixture
def raw_document():
    """
    Factory fixture for a raw [post_listing, comment_listing] document.

    Usage:
        doc = raw_document(title="T", selftext="S", comments=[...])
    """
    def _create_document(
        title: Optional[str] = "Thread title",
        selftext: Optional[str] = "",
        comments: Optional[List[Dict[str, Any]]] = None
    ) -> List[Dict[str, Any]]:
        post = {}
        if title is not None:
            post["title"] = title
        if selftext is not None:
            post["selftext"] = selftext
        return [
            {"kind": "Listing", "data": {"children": [{"kind": "t3", "data": post}]}},
            {"kind": "Listing", "data": {"children": comments or []}},
        ]

    return _create_document
