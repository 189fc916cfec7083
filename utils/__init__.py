"""Logging, exceptions and small helpers."""
