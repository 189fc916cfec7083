"""Thread scraping services: URL resolution, token caching, fetching and flattening."""
