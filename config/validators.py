"""
Configuration Validation for Thread Scraper Application

This module contains configuration validation logic.
Kept apart from settings.py so importing settings never raises.
"""

from utils.exceptions import ConfigurationError
from utils.logger import get_logger

logger = get_logger(__name__)


def validate_settings():
    """
    Validate that all required settings are properly configured.

    Raises:
        ConfigurationError: If required settings are missing or invalid.
    """
    # Import settings here to avoid circular imports
    from config import settings

    errors = []

    # OAuth credentials must be configured as a pair
    if bool(settings.REDDIT_CLIENT_ID) != bool(settings.REDDIT_CLIENT_SECRET):
        errors.append("REDDIT_CLIENT_ID and REDDIT_CLIENT_SECRET must be set together "
                      "to enable credentialed access.")

    if not settings.USER_AGENT:
        errors.append("USER_AGENT must not be empty")

    if not 1 <= settings.API_PORT <= 65535:
        errors.append(f"API_PORT must be between 1 and 65535, got {settings.API_PORT}")

    if settings.TOKEN_EXPIRY_BUFFER < 0:
        errors.append(f"TOKEN_EXPIRY_BUFFER must not be negative, got {settings.TOKEN_EXPIRY_BUFFER}")

    if settings.UPSTREAM_TIMEOUT is not None and settings.UPSTREAM_TIMEOUT <= 0:
        errors.append(f"UPSTREAM_TIMEOUT must be positive, got {settings.UPSTREAM_TIMEOUT}")

    # Validate URL templates carry their placeholders
    template_checks = [
        ("OAUTH_THREAD_URL_TEMPLATE", settings.OAUTH_THREAD_URL_TEMPLATE, ["{subreddit}", "{thread_id}"]),
        ("PUBLIC_THREAD_URL_TEMPLATE", settings.PUBLIC_THREAD_URL_TEMPLATE, ["{thread_id}"]),
    ]

    for name, template, placeholders in template_checks:
        for placeholder in placeholders:
            if placeholder not in template:
                errors.append(f"{name} is missing the {placeholder} placeholder")

    if not settings.ADMIN_STATS_KEY:
        logger.warning("ADMIN_STATS_KEY is not set; the admin stats page is disabled.")

    # Raise all errors at once
    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigurationError(error_msg)

    return True


def get_config_summary() -> dict:
    """
    Returns a summary of current configuration (without sensitive values).
    Useful for logging startup state.
    """
    # Import settings here to avoid circular imports
    from config import settings

    return {
        "app": {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "env": settings.DEPLOY_ENV,
        },
        "reddit": {
            "mode": "oauth" if settings.REDDIT_USE_OAUTH else "public",
            "client_id": settings.REDDIT_CLIENT_ID[:4] + "..." if settings.REDDIT_CLIENT_ID else None,
            "user_agent": settings.USER_AGENT,
            "timeout": settings.UPSTREAM_TIMEOUT,
        },
        "stats": {
            "file": settings.STATS_FILE,
            "admin_page_enabled": bool(settings.ADMIN_STATS_KEY),
        },
    }
