"""Client query cache for task and tag results.

Entries are keyed by the fully resolved query so that two views with the
same filters share one entry. Keys are tuples whose first element is the
resource scope (``"tasks"`` or ``"tags"``); invalidation works on that
prefix.

Overlapping list requests are ordered by generation: every request takes a
token from ``begin_request`` and may only populate the cache while its token
is still the latest one issued for its scope.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Optional, Tuple

logger = logging.getLogger(__name__)

TASKS_SCOPE = "tasks"
TAGS_SCOPE = "tags"

CacheKey = Tuple[Hashable, ...]


@dataclass(frozen=True)
class TaskQuery:
    """A resolved task list query.

    Unset filters are None and are neither sent nor part of the key.

    Example:
        >>> TaskQuery(priority=1, page=2).to_params()
        {'priority': 1, 'sortBy': 'createdAt', 'order': 'desc', 'page': 2, 'pageSize': 20}
    """

    q: Optional[str] = None
    completed: Optional[bool] = None
    priority: Optional[int] = None
    tag: Optional[str] = None
    sort_by: str = "createdAt"
    order: str = "desc"
    page: int = 1
    page_size: int = 20

    def to_params(self) -> Dict[str, Any]:
        params = {
            "q": self.q,
            "completed": None if self.completed is None else str(self.completed).lower(),
            "priority": self.priority,
            "tag": self.tag,
            "sortBy": self.sort_by,
            "order": self.order,
            "page": self.page,
            "pageSize": self.page_size,
        }
        return {name: value for name, value in params.items() if value is not None}

    def key(self) -> CacheKey:
        return (TASKS_SCOPE,) + tuple(sorted(self.to_params().items()))


@dataclass
class CacheEntry:
    value: Any
    stale: bool = False


class QueryCache:
    """In-memory result cache with prefix invalidation and snapshots."""

    def __init__(self):
        self._entries: Dict[CacheKey, CacheEntry] = {}
        self._generations: Dict[str, int] = {}

    def get(self, key: CacheKey) -> Optional[Any]:
        entry = self._entries.get(key)
        return entry.value if entry else None

    def set(self, key: CacheKey, value: Any) -> None:
        self._entries[key] = CacheEntry(value=value)

    def is_stale(self, key: CacheKey) -> bool:
        """A missing entry counts as stale."""
        entry = self._entries.get(key)
        return entry is None or entry.stale

    def invalidate(self, *prefix: Hashable) -> int:
        """Mark every entry whose key starts with ``prefix`` as stale.

        Returns:
            int: Number of entries marked.
        """
        marked = 0
        for key, entry in self._entries.items():
            if key[: len(prefix)] == prefix:
                entry.stale = True
                marked += 1
        logger.debug(f"Invalidated {marked} cache entries under {prefix}")
        return marked

    def patch(self, key: CacheKey, update: Callable[[Any], Any]) -> None:
        """Replace the value at ``key`` with ``update(value)``; no-op when absent."""
        entry = self._entries.get(key)
        if entry is not None:
            entry.value = update(entry.value)

    def snapshot(self, key: CacheKey) -> Optional[CacheEntry]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        return CacheEntry(value=_deep_copy(entry.value), stale=entry.stale)

    def restore(self, key: CacheKey, snapshot: Optional[CacheEntry]) -> None:
        """Put back an entry captured by ``snapshot``; None removes the key."""
        if snapshot is None:
            self._entries.pop(key, None)
        else:
            self._entries[key] = CacheEntry(value=snapshot.value, stale=snapshot.stale)

    def begin_request(self, scope: str) -> int:
        self._generations[scope] = self._generations.get(scope, 0) + 1
        return self._generations[scope]

    def is_current(self, scope: str, token: int) -> bool:
        return self._generations.get(scope) == token


def _deep_copy(value: Any) -> Any:
    # Pydantic models copy themselves; anything else is stored as-is
    if hasattr(value, "model_copy"):
        return value.model_copy(deep=True)
    return value
