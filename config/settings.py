"""
Configuration Settings for Thread Scraper

This module centralizes all configuration settings for the Thread Scraper application,
including environment variables, upstream endpoints, and application constants.
"""

import os
import time
from pathlib import Path
from dotenv import load_dotenv

# Determine the application root directory
APP_ROOT = Path(__file__).resolve().parent.parent

# Load environment variables from .env file
load_dotenv(dotenv_path=os.path.join(APP_ROOT, '.env'))

# =============================================================================
# Application Settings
# =============================================================================

APP_NAME = "Thread Scraper"
APP_BASE_VERSION = "1.0.2"
APP_VERSION = f"{APP_BASE_VERSION}-{int(time.time() * 1000)}"  # Changes on every deploy/restart

API_HOST = os.getenv("HOST", "0.0.0.0")
API_PORT = int(os.getenv("PORT", "3000"))

# Deployment detection (Vercel exposes one of these in its runtime)
IS_VERCEL = bool(os.getenv("VERCEL") or os.getenv("NOW_REGION"))
DEPLOY_ENV = "vercel" if IS_VERCEL else "local"

# Visitor statistics (Vercel only allows writes under /tmp)
STATS_FILE = os.path.join("/tmp", "stats.json") if IS_VERCEL else os.path.join(APP_ROOT, "stats.json")
PUBLIC_DIR = os.path.join(APP_ROOT, "public")
ADMIN_STATS_KEY = os.getenv("ADMIN_STATS_KEY", "")

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# =============================================================================
# Reddit API Settings
# =============================================================================

# Credentialed (OAuth app-only) access is enabled when both values are present
REDDIT_CLIENT_ID = os.getenv("REDDIT_CLIENT_ID")
REDDIT_CLIENT_SECRET = os.getenv("REDDIT_CLIENT_SECRET")
REDDIT_USE_OAUTH = bool(REDDIT_CLIENT_ID and REDDIT_CLIENT_SECRET)

REDDIT_TOKEN_URL = "https://www.reddit.com/api/v1/access_token"
OAUTH_THREAD_URL_TEMPLATE = "https://oauth.reddit.com/r/{subreddit}/comments/{thread_id}.json"
PUBLIC_THREAD_URL_TEMPLATE = "https://www.reddit.com/comments/{thread_id}.json"

CANONICAL_HOST = "www.reddit.com"
ALTERNATE_HOSTS = [
    "old.reddit.com",
    "mobile.reddit.com",
    "pay.reddit.com",
]
JSON_SUFFIX = ".json"

TOKEN_EXPIRY_BUFFER = 60             # Seconds subtracted from token lifetime before refreshing

# =============================================================================
# Fetch Settings
# =============================================================================

USER_AGENT = os.getenv(
    "REDDIT_USER_AGENT",
    f"python:thread-scraper:{APP_BASE_VERSION} (comment export tool)"
)

# Extra headers sent only in public mode; they lower the odds of bot filtering
PUBLIC_REQUEST_HEADERS = {
    'Accept': 'application/json',
    'Accept-Language': 'en-US,en;q=0.9',
    'Referer': 'https://www.google.com/',
    'DNT': '1'
}

_timeout = os.getenv("UPSTREAM_TIMEOUT")
UPSTREAM_TIMEOUT = float(_timeout) if _timeout else None  # None = rely on the platform's own timeout

RESPONSE_SNIPPET_LENGTH = 200        # Characters of an error body written to the log

# =============================================================================
# Extraction Settings
# =============================================================================

DELETED_AUTHOR = "[deleted]"
COMMENT_KIND = "t1"
