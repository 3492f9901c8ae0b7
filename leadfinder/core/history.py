"""Small on-disk list of recently submitted search queries."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


class QueryHistory:
    """Most-recent-first query list stored as a JSON array, capped at ``limit`` entries."""

    def __init__(self, path: Path, limit: int = 10) -> None:
        if limit <= 0:
            raise ValueError("limit must be positive")
        self.path = Path(path)
        self.limit = limit

    def entries(self) -> List[str]:
        if not self.path.exists():
            return []
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable query history %s: %s", self.path, exc)
            return []
        if not isinstance(data, list):
            logger.warning("Ignoring query history %s: expected a list", self.path)
            return []
        return [str(item) for item in data if isinstance(item, str) and item.strip()][: self.limit]

    def add(self, query: str) -> List[str]:
        query = query.strip()
        if not query:
            return self.entries()
        entries = [query] + [item for item in self.entries() if item != query]
        entries = entries[: self.limit]
        self._write(entries)
        return entries

    def clear(self) -> None:
        self._write([])
        logger.info("Cleared query history at %s", self.path)

    def _write(self, entries: List[str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as fh:
            json.dump(entries, fh, ensure_ascii=False, indent=2)
