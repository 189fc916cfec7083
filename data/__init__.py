"""Data models and the visitor statistics store."""
