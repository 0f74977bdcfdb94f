# repo_explorer/result_cache.py
import logging
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, Dict, List, Optional

from repo_explorer.models import Repository, SearchFilters, SearchResponse

logger = logging.getLogger(__name__)

FRESHNESS_WINDOW = timedelta(minutes=30)

_SORT_KEYS: Dict[str, Callable[[Repository], object]] = {
    "stars": lambda repo: repo.stargazers_count,
    "forks": lambda repo: repo.forks_count,
    "updated": lambda repo: repo.updated,
    "created": lambda repo: repo.created,
}


def sort_repositories(items: List[Repository], sort: str, order: str = "desc") -> List[Repository]:
    """Returns a re-sorted copy. Unknown sort keys keep the given order."""
    key = _SORT_KEYS.get(sort)
    if key is None:
        return list(items)
    return sorted(items, key=key, reverse=order != "asc")


@dataclass(frozen=True)
class CacheEntry:
    filters: Dict[str, str]
    response: SearchResponse
    captured_at: float

    def view(self, sort: str, order: str = "desc") -> List[Repository]:
        return sort_repositories(self.response.items, sort, order)


class ResultCache:
    """
    Holds the last successful search of a session. Sort and order are not
    part of the key, so changing them re-sorts in memory instead of refetching.
    """

    def __init__(self, ttl: timedelta = FRESHNESS_WINDOW, clock: Callable[[], float] = time.time):
        self.ttl = ttl
        self.clock = clock
        self.entry: Optional[CacheEntry] = None

    def get(self, filters: SearchFilters) -> Optional[CacheEntry]:
        entry = self.entry
        if entry is None:
            return None
        if entry.filters != filters.without_sort():
            return None
        if self.clock() - entry.captured_at >= self.ttl.total_seconds():
            logger.debug("Cached results expired")
            return None
        return entry

    def put(self, filters: SearchFilters, response: SearchResponse) -> CacheEntry:
        self.entry = CacheEntry(
            filters=filters.without_sort(),
            response=response,
            captured_at=self.clock(),
        )
        return self.entry

    def invalidate(self):
        self.entry = None
