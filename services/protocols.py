"""
Service Protocol Definitions

This module defines typing.Protocol interfaces for services used in the Thread
Scraper application. These protocols enable loose coupling, dependency
injection, and easier testing.

Protocols defined:
- TokenProvider: Interface for access token sources
- ThreadSource: Interface for fetching raw thread documents
- StatsStore: Interface for the visitor counter
"""

from typing import Protocol, Optional, List, Any, Dict


class TokenProvider(Protocol):
    """Protocol for objects that hand out OAuth access tokens."""

    def get_token(self) -> Optional[str]:
        """Return a currently valid token, or None if none can be obtained."""
        ...


class ThreadSource(Protocol):
    """Protocol defining the interface for thread document fetchers."""

    def fetch(self, endpoint: str) -> List[Any]:
        """Fetch the raw listing array for a resolved endpoint.

        Args:
            endpoint: The JSON endpoint URL.

        Returns:
            The decoded listing array.
        """
        ...


class StatsStore(Protocol):
    """Protocol defining the interface for the visitor counter.

    Implementations should provide methods for:
    - Reading the current visitor count
    - Recording one more visit
    """

    def read(self) -> Dict[str, int]:
        """Return {"visitorCount": n}."""
        ...

    def increment(self) -> int:
        """Record one visit and return the new count."""
        ...
