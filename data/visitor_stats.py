"""
Visitor Statistics Store

Keeps a single visitor counter in a small JSON file. Read and write
failures are logged and never interrupt the request that triggered them.
"""

import json
import os
from typing import Dict

from config import settings
from utils.helpers import ensure_dir_exists
from utils.logger import get_logger

logger = get_logger(__name__)


class VisitorStats:
    """File-backed visitor counter."""

    def __init__(self, stats_file: str = None):
        self.stats_file = stats_file or settings.STATS_FILE

    def read(self) -> Dict[str, int]:
        """
        Read the current statistics.

        Returns:
            Dict[str, int]: {"visitorCount": n}; zero when the file is missing or unreadable.
        """
        try:
            if not os.path.exists(self.stats_file):
                return {"visitorCount": 0}

            with open(self.stats_file, 'r', encoding='utf-8') as f:
                stats = json.load(f)

            return {"visitorCount": int(stats.get("visitorCount", 0))}
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.error(f"Error reading stats file {self.stats_file}: {e}")
            return {"visitorCount": 0}

    def _write(self, stats: Dict[str, int]) -> None:
        try:
            ensure_dir_exists(os.path.dirname(self.stats_file))
            with open(self.stats_file, 'w', encoding='utf-8') as f:
                json.dump(stats, f, indent=2)
        except OSError as e:
            logger.error(f"Error saving stats file {self.stats_file}: {e}")

    def increment(self) -> int:
        """
        Add one visit and persist it.

        Returns:
            int: The new visitor count.
        """
        stats = self.read()
        stats["visitorCount"] += 1
        self._write(stats)
        return stats["visitorCount"]
