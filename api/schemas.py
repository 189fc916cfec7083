"""
Pydantic request/response models for the scrape API.
"""

from typing import List, Optional, Union

from pydantic import BaseModel


class ScrapeRequest(BaseModel):
    """Body of POST /api/scrape. `url` is optional so a missing value reports as a 400."""
    url: Optional[str] = None


class CommentOut(BaseModel):
    author: str
    body: str
    score: int = 0
    created_utc: Optional[Union[int, float]] = None


class ThreadOut(BaseModel):
    """A scraped thread: post title, post body and comments in reading order."""
    title: str = ""
    body: str = ""
    comments: List[CommentOut] = []


class HealthOut(BaseModel):
    status: str
    version: str
    env: str


class ErrorOut(BaseModel):
    error: str
    status_code: Optional[int] = None
