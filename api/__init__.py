"""HTTP API for the thread scraper."""
