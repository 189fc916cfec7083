"""
Thread Scraper Application

This is the main entry point for the Thread Scraper application.
It serves the scrape API, or scrapes a single thread from the command line
and prints the result as JSON.

Version: 1.0.2
"""

import sys
import json
import argparse
import logging

import uvicorn

from config import settings
from config.validators import validate_settings, get_config_summary
from utils.logger import get_logger, setup_file_logging
from utils.exceptions import ThreadScraperError, ConfigurationError
from services.scrape_service import ScrapeService

# Set up logging
logger = get_logger(__name__)


def scrape_once(url: str) -> int:
    """
    Scrape a single thread and print it to stdout.

    Args:
        url: The thread URL to scrape.

    Returns:
        int: 0 on success, 1 on a handled scrape error, 2 on an unexpected error.
    """
    try:
        result = ScrapeService.from_settings().scrape(url)
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return 0
    except ThreadScraperError as e:
        logger.error(f"Scrape failed: {e}")
        return 1
    except Exception as e:
        logger.error(f"Unhandled exception while scraping: {e}", exc_info=True)
        return 2


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Thread Scraper Application')
    parser.add_argument('--host', type=str, default=settings.API_HOST, help='Interface to bind the API server to')
    parser.add_argument('--port', type=int, default=settings.API_PORT, help='Port for the API server')
    parser.add_argument('--log-file', type=str, default=None, help='Log file path')
    parser.add_argument('--log-level', type=str, choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        default='INFO', help='Logging level')
    parser.add_argument('--scrape', type=str, default=None, metavar='URL',
                        help='Scrape one thread, print it as JSON and exit')
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point for the application."""
    args = parse_arguments(argv)

    # Set up logging
    log_level = getattr(logging, args.log_level)
    if args.log_file:
        setup_file_logging(args.log_file, log_level)
    else:
        logging.getLogger("thread_scraper").setLevel(log_level)

    try:
        validate_settings()
    except ConfigurationError as e:
        logger.error(str(e))
        return 2

    logger.info(f"Configuration: {get_config_summary()}")

    if args.scrape:
        return scrape_once(args.scrape)

    from api.app import create_app

    logger.info(f"Server running at http://{args.host}:{args.port}")
    uvicorn.run(create_app(), host=args.host, port=args.port, log_level=args.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
