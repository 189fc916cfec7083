"""
Data Models for Thread Scraper Application

This module contains data classes and models used throughout the application.
"""

from dataclasses import dataclass, field, asdict
from typing import Optional, List, Dict, Any, Union


@dataclass(frozen=True)
class AccessToken:
    """An app-only OAuth credential and its lifetime."""
    value: str                         # Opaque bearer token
    issued_at: float                   # Epoch seconds when the token was received
    expires_in: float                  # Lifetime in seconds as reported by the upstream

    @property
    def expires_at(self) -> float:
        return self.issued_at + self.expires_in

    def is_valid(self, now: float, buffer: float = 0) -> bool:
        """Whether the token can still be handed out at `now`, keeping `buffer` seconds spare."""
        return now < self.expires_at - buffer


@dataclass
class CommentRecord:
    """One flattened comment from a thread."""
    author: str
    body: str
    score: int = 0
    created_utc: Optional[Union[int, float]] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ThreadResult:
    """Post title and body plus the comments in reading order."""
    title: str = ""
    body: str = ""
    comments: List[CommentRecord] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "body": self.body,
            "comments": [c.to_dict() for c in self.comments],
        }
