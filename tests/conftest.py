"""Shared fixtures: a fake GitHub client so nothing here touches the network."""
import pytest

from repo_explorer.models import PageResult, RateLimit


def make_item(id, created_at="2024-01-01T00:00:00Z", updated_at="2024-06-01T00:00:00Z",
              stars=0, forks=0, **extra):
    item = {
        "id": id,
        "full_name": f"owner/repo-{id}",
        "html_url": f"https://github.com/owner/repo-{id}",
        "description": f"Repository {id}",
        "language": "Python",
        "topics": [],
        "license": {"key": "mit", "name": "MIT License"},
        "created_at": created_at,
        "updated_at": updated_at,
        "stargazers_count": stars,
        "forks_count": forks,
        "owner": {"login": "owner"},
        "watchers_count": 3,
    }
    item.update(extra)
    return item


class FakeGitHubClient:
    """Serves pre-built pages and records every call."""

    def __init__(self, pages=None, total_count=None, incomplete_results=False, rate_limit=None):
        self.pages = pages if pages is not None else [[make_item(1)]]
        self.total_count = total_count if total_count is not None else sum(len(p) for p in self.pages)
        self.incomplete_results = incomplete_results
        self.rate_limit = rate_limit if rate_limit is not None else RateLimit(limit=30, remaining=29, reset=1700000000)
        self.search_calls = []
        self.rate_limit_calls = 0

    def search_repositories(self, query, page=1, per_page=100, sort=None, order=None):
        self.search_calls.append({"query": query, "page": page, "per_page": per_page, "sort": sort, "order": order})
        items = self.pages[page - 1] if page <= len(self.pages) else []
        return PageResult(
            total_count=self.total_count if page == 1 else 999999,
            incomplete_results=self.incomplete_results if page == 1 else (not self.incomplete_results),
            items=items,
        )

    def get_rate_limit(self):
        self.rate_limit_calls += 1
        if isinstance(self.rate_limit, Exception):
            raise self.rate_limit
        return self.rate_limit


@pytest.fixture
def fake_client():
    return FakeGitHubClient()
