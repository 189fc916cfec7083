"""
Scrape Service Module

This module ties the resolver, fetcher and flattener together into the
single scrape operation exposed by the API and the command line.
"""

from typing import Any, List, Optional

from config import settings
from data.models import ThreadResult
from services.comment_flattener import flatten_comments
from services.protocols import ThreadSource
from services.thread_fetcher import ThreadFetcher
from services.token_cache import TokenCache
from services.url_resolver import UrlResolver
from utils.exceptions import MissingInputError
from utils.helpers import safe_get
from utils.logger import get_logger

logger = get_logger(__name__)


class ScrapeService:
    """Scrape a Reddit thread into a title, body and flat comment list."""

    def __init__(self, resolver: Optional[UrlResolver] = None, fetcher: Optional[ThreadSource] = None):
        self.resolver = resolver or UrlResolver(use_oauth=False)
        self.fetcher = fetcher or ThreadFetcher()

    @classmethod
    def from_settings(cls) -> "ScrapeService":
        """
        Build the service for the configured access mode.

        With OAuth credentials configured the service owns the one TokenCache
        shared by all requests; otherwise it uses the public JSON endpoints.
        """
        use_oauth = settings.REDDIT_USE_OAUTH
        token_cache = TokenCache() if use_oauth else None
        logger.info(f"Reddit access mode: {'oauth' if use_oauth else 'public'}")
        return cls(
            resolver=UrlResolver(use_oauth=use_oauth),
            fetcher=ThreadFetcher(token_cache=token_cache)
        )

    def scrape(self, url: Optional[str]) -> ThreadResult:
        """
        Scrape one thread.

        Args:
            url: The thread URL supplied by the user.

        Returns:
            ThreadResult: Title, body and comments in reading order.

        Raises:
            MissingInputError: If no URL was supplied.
            InvalidUrlError: If the URL cannot be resolved.
            AuthenticationError: If credentialed mode has no token.
            UpstreamError: If Reddit rejects the request.
            MalformedDocumentError: If the response is not a listing array.
        """
        if not url or not str(url).strip():
            raise MissingInputError("URL is required")

        endpoint = self.resolver.resolve(str(url))
        logger.info(f"SCRAPE REQUEST: {endpoint}")

        document = self.fetcher.fetch(endpoint)
        result = build_thread_result(document)

        logger.info(f"Extracted {len(result.comments)} comments from: {endpoint}")
        return result


def build_thread_result(document: List[Any]) -> ThreadResult:
    """
    Assemble a ThreadResult from a raw [post_listing, comment_listing] document.

    Missing pieces fall back to empty values.
    """
    post = safe_get(document, 0, "data", "children", 0, "data", default={})
    if not isinstance(post, dict):
        post = {}

    children = safe_get(document, 1, "data", "children", default=[])
    if not isinstance(children, list):
        children = []

    return ThreadResult(
        title=_text(post.get("title")),
        body=_text(post.get("selftext")),
        comments=flatten_comments(children)
    )


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""
