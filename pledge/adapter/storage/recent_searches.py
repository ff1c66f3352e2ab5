"""File-backed store of recent campaign searches."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class RecentSearchStore:
    """Most-recent-first list of search queries.

    The store is created and loaded explicitly by its owner and passed to
    whoever needs it; nothing reads the file behind the owner's back.
    ``path=None`` keeps the list in memory only.
    """

    def __init__(self, path: Path | None, limit: int = 5) -> None:
        """Initialize recent search store.

        Args:
            path: JSON file to persist to, or None for memory only
            limit: Maximum number of queries kept
        """
        self.path = path
        self.limit = limit
        self._items: list[str] = []

    @property
    def items(self) -> tuple[str, ...]:
        return tuple(self._items)

    def load(self) -> tuple[str, ...]:
        """Read the persisted list; a missing or corrupt file yields nothing."""
        if self.path is None or not self.path.exists():
            self._items = []
            return self.items
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable recent searches at {self.path}: {e}")
            data = []
        if not isinstance(data, list):
            data = []
        self._items = [q for q in data if isinstance(q, str)][: self.limit]
        return self.items

    def add(self, query: str) -> tuple[str, ...]:
        """Put ``query`` in front, dropping an older copy of it.

        Surrounding whitespace is dropped and blank queries are ignored.
        """
        query = query.strip()
        if not query:
            return self.items
        self._items = [query, *(q for q in self._items if q != query)][: self.limit]
        self._save()
        return self.items

    def clear(self) -> None:
        self._items = []
        self._save()

    def _save(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._items), encoding="utf-8")
