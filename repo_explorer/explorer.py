# repo_explorer/explorer.py
"""
Front-end session state: the filters being edited, what is on screen, and the
cached result set. Display state only changes through the transition
functions below; ExplorerSession wires them to a search backend and the cache.
"""

import logging
import threading
import time
import uuid
from dataclasses import dataclass, replace
from datetime import timedelta
from typing import Callable, Dict, Optional, Tuple

import requests

from repo_explorer.errors import SearchError
from repo_explorer.models import RateLimit, Repository, SearchFilters, SearchResponse
from repo_explorer.pager import run_search
from repo_explorer.result_cache import FRESHNESS_WINDOW, CacheEntry, ResultCache

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchState:
    results: Tuple[Repository, ...] = ()
    loading: bool = False
    error: Optional[str] = None
    total_count: int = 0
    status: Optional[int] = None
    rate_limit: Optional[RateLimit] = None
    incomplete_results: bool = False
    has_searched: bool = False
    from_cache: bool = False


INITIAL_STATE = SearchState()


def begin_search(state: SearchState) -> SearchState:
    return replace(state, loading=True, error=None)


def search_succeeded(state: SearchState, response: SearchResponse) -> SearchState:
    return SearchState(
        results=tuple(response.items),
        total_count=response.total_count,
        status=response.status,
        rate_limit=response.rate_limit,
        incomplete_results=response.incomplete_results,
        has_searched=True,
    )


def served_from_cache(state: SearchState, entry: CacheEntry, sort: str, order: str) -> SearchState:
    response = entry.response
    return SearchState(
        results=tuple(entry.view(sort, order)),
        total_count=response.total_count,
        status=response.status,
        rate_limit=response.rate_limit,
        incomplete_results=response.incomplete_results,
        has_searched=True,
        from_cache=True,
    )


def search_failed(state: SearchState, message: str) -> SearchState:
    """Previous results stay on screen next to the error, no longer marked as cached."""
    return replace(state, loading=False, error=message, from_cache=False)


def describe_failure(exc: Exception) -> str:
    if isinstance(exc, SearchError):
        return f"HTTP {exc.status}: {exc.message or 'Request failed'}"
    return str(exc) or "Search failed"


class LocalSearchBackend:
    """Runs the search in this process against a GitHub client."""

    def __init__(self, client):
        self.client = client

    def __call__(self, filters: SearchFilters) -> SearchResponse:
        return run_search(filters, self.client)


class ApiSearchBackend:
    """Talks to a running explorer server through GET /api/search."""

    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: int = 120):
        self.url = base_url.rstrip("/") + "/api/search"
        self.session = session or requests.Session()
        self.timeout = timeout

    def __call__(self, filters: SearchFilters) -> SearchResponse:
        response = self.session.get(self.url, params=filters.to_query_params(), timeout=self.timeout)
        try:
            body = response.json()
        except ValueError:
            if response.ok:
                raise SearchError("Invalid response", status=502)
            body = {}
        if not response.ok:
            raise SearchError(body.get("error") or "Request failed", status=response.status_code)
        return SearchResponse.from_dict(body, status=response.status_code)


class ExplorerSession:
    """One user's filters, on-screen state and result cache."""

    def __init__(self, backend, cache: Optional[ResultCache] = None):
        self.backend = backend
        self.cache = cache or ResultCache()
        self.filters = SearchFilters()
        self.state = INITIAL_STATE

    @property
    def using_cache(self) -> bool:
        return self.cache.get(self.filters) is not None

    def update_filter(self, name: str, value: str):
        self.filters = self.filters.replace(name, value)

    def set_filters(self, filters: SearchFilters):
        self.filters = filters

    def search(self) -> SearchState:
        entry = self.cache.get(self.filters)
        if entry is not None:
            logger.info(f"Serving {len(entry.response.items)} cached repositories (sort={self.filters.sort or 'none'})")
            self.state = served_from_cache(self.state, entry, self.filters.sort, self.filters.order)
            return self.state

        filters = self.filters
        self.state = begin_search(self.state)
        try:
            response = self.backend(filters)
        except Exception as e:
            logger.warning(f"Search failed: {e}")
            self.state = search_failed(self.state, describe_failure(e))
            return self.state

        self.cache.put(filters, response)
        self.state = search_succeeded(self.state, response)
        return self.state

    def clear(self):
        self.filters = SearchFilters()
        self.state = INITIAL_STATE
        self.cache.invalidate()


class SessionStore:
    """
    Explorer sessions of this process, keyed by the browser's session id.
    Sessions unused for longer than idle_ttl are dropped on the next access;
    their cached results would be stale by then anyway.
    """

    def __init__(self, backend_factory, idle_ttl: timedelta = FRESHNESS_WINDOW,
                 clock: Callable[[], float] = time.time):
        self.backend_factory = backend_factory
        self.idle_ttl = idle_ttl
        self.clock = clock
        self._sessions: Dict[str, ExplorerSession] = {}
        self._last_used: Dict[str, float] = {}
        self._lock = threading.Lock()

    def new_id(self) -> str:
        return uuid.uuid4().hex

    def get(self, session_id: str) -> ExplorerSession:
        """Returns the session for session_id, creating it if needed."""
        with self._lock:
            now = self.clock()
            self._evict_idle(now)
            session = self._sessions.get(session_id)
            if session is None:
                session = ExplorerSession(self.backend_factory())
                self._sessions[session_id] = session
            self._last_used[session_id] = now
            return session

    def peek(self, session_id: Optional[str]) -> Optional[ExplorerSession]:
        """Like get(), but never creates a session."""
        if not session_id:
            return None
        with self._lock:
            now = self.clock()
            self._evict_idle(now)
            session = self._sessions.get(session_id)
            if session is not None:
                self._last_used[session_id] = now
            return session

    def _evict_idle(self, now: float):
        cutoff = now - self.idle_ttl.total_seconds()
        for session_id in [sid for sid, used in self._last_used.items() if used < cutoff]:
            logger.debug(f"Dropping idle explorer session {session_id}")
            del self._sessions[session_id]
            del self._last_used[session_id]

    def __len__(self):
        return len(self._sessions)
