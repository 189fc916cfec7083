"""
URL Resolver Module

This module turns the thread URLs people paste (desktop, old, mobile, share
links) into the JSON endpoint the fetcher should request. It never performs
I/O.
"""

import re
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from config import settings
from utils.exceptions import InvalidUrlError
from utils.helpers import is_valid_url

SUBREDDIT_THREAD_PATTERN = re.compile(r"/r/([A-Za-z0-9_]+)/comments/([A-Za-z0-9]+)", re.IGNORECASE)
THREAD_ID_PATTERN = re.compile(r"/comments/([A-Za-z0-9]+)", re.IGNORECASE)


class UrlResolver:
    """Resolve user-supplied thread URLs to canonical Reddit JSON endpoints."""

    def __init__(self, use_oauth: Optional[bool] = None):
        """
        Initialize the resolver.

        Args:
            use_oauth: Build authenticated-host endpoints when possible.
                Defaults to whether OAuth credentials are configured.
        """
        self.use_oauth = settings.REDDIT_USE_OAUTH if use_oauth is None else use_oauth
        self.oauth_template = settings.OAUTH_THREAD_URL_TEMPLATE
        self.public_template = settings.PUBLIC_THREAD_URL_TEMPLATE

    def resolve(self, url: str) -> str:
        """
        Resolve a thread URL to its JSON endpoint.

        Args:
            url: The URL as supplied by the user.

        Returns:
            str: The absolute endpoint URL.

        Raises:
            InvalidUrlError: If the input is not an absolute http(s) URL with a path.
        """
        url = _with_scheme(url.strip())
        if not is_valid_url(url):
            raise InvalidUrlError(f"Not a valid thread URL: {url}")

        path = urlsplit(url).path

        if self.use_oauth:
            match = SUBREDDIT_THREAD_PATTERN.search(path)
            if match:
                return self.oauth_template.format(subreddit=match.group(1), thread_id=match.group(2))

        match = THREAD_ID_PATTERN.search(path)
        if match:
            return self.public_template.format(thread_id=match.group(1))

        return self._fallback(url)

    def _fallback(self, url: str) -> str:
        """Strip query and trailing slashes, add the JSON suffix and fix the host."""
        cleaned = url.split("?", 1)[0].split("#", 1)[0].rstrip("/")
        parsed = urlsplit(cleaned)
        if not parsed.path.strip("/"):
            raise InvalidUrlError(f"No thread path in URL: {url}")

        path = parsed.path
        if not path.endswith(settings.JSON_SUFFIX):
            path += settings.JSON_SUFFIX

        netloc = parsed.netloc
        if netloc.lower() in settings.ALTERNATE_HOSTS:
            netloc = settings.CANONICAL_HOST

        return urlunsplit((parsed.scheme, netloc, path, "", ""))


def _with_scheme(url: str) -> str:
    """Add https:// to scheme-less inputs such as 'reddit.com/r/...'."""
    if "://" in url:
        return url
    host = url.split("/", 1)[0]
    if "." in host:
        return "https://" + url
    return url
