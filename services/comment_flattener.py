"""
Comment Flattener Module

Walks a Reddit comment listing and returns its comments as a flat list in
reading order: each comment is followed by its replies, then its next sibling.
"""

import math
from typing import Any, Dict, List

from config import settings
from data.models import CommentRecord
from utils.helpers import safe_get


def flatten_comments(children: List[Dict[str, Any]]) -> List[CommentRecord]:
    """
    Flatten a comment tree in pre-order.

    Only "t1" nodes are considered. A comment without a body (deleted or
    removed placeholder) produces no record, but its replies are still
    visited. Other kinds such as "more" stubs are skipped entirely.

    Args:
        children: The `data.children` list of a comment listing.

    Returns:
        List[CommentRecord]: The comments in reading order.
    """
    comments = []
    # Explicit stack instead of recursion; reply trees can be arbitrarily deep
    stack = list(reversed(children or []))

    while stack:
        node = stack.pop()
        if not isinstance(node, dict) or node.get("kind") != settings.COMMENT_KIND:
            continue

        data = node.get("data")
        if not isinstance(data, dict):
            continue

        record = _to_record(data)
        if record is not None:
            comments.append(record)

        replies = safe_get(data, "replies", "data", "children", default=[])
        if isinstance(replies, list):
            stack.extend(reversed(replies))

    return comments


def _to_record(data: Dict[str, Any]):
    body = data.get("body")
    if not body or not isinstance(body, str):
        return None

    author = data.get("author")
    score = data.get("score")
    created_utc = data.get("created_utc")

    return CommentRecord(
        author=author if isinstance(author, str) else settings.DELETED_AUTHOR,
        body=body,
        score=int(score) if _is_number(score) else 0,
        created_utc=created_utc if _is_number(created_utc) else None
    )


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    # NaN and Infinity are valid tokens for the JSON decoder
    return isinstance(value, int) or math.isfinite(value)
