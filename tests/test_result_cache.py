"""Tests for the session result cache and in-memory re-sorting."""
from datetime import timedelta

import pytest

from conftest import make_item
from repo_explorer.models import Repository, SearchFilters, SearchResponse
from repo_explorer.result_cache import FRESHNESS_WINDOW, ResultCache, sort_repositories


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


def make_response():
    items = [
        Repository.from_api(make_item(1, stars=10, forks=3, created_at="2021-01-01T00:00:00Z", updated_at="2024-03-01T00:00:00Z")),
        Repository.from_api(make_item(2, stars=30, forks=1, created_at="2023-01-01T00:00:00Z", updated_at="2024-01-01T00:00:00Z")),
        Repository.from_api(make_item(3, stars=20, forks=2, created_at="2022-01-01T00:00:00Z", updated_at="2024-02-01T00:00:00Z")),
    ]
    return SearchResponse(status=200, total_count=3, incomplete_results=False, items=items)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return ResultCache(clock=clock)


def test_empty_cache_misses(cache):
    assert cache.get(SearchFilters(query="x")) is None


def test_same_filters_hit(cache):
    filters = SearchFilters(language="go", stars=">10")
    response = make_response()
    cache.put(filters, response)
    entry = cache.get(SearchFilters(language="go", stars=">10"))
    assert entry is not None
    assert entry.response is response


def test_sort_and_order_changes_still_hit(cache):
    cache.put(SearchFilters(language="go"), make_response())
    assert cache.get(SearchFilters(language="go", sort="forks", order="asc")) is not None


@pytest.mark.parametrize("name", ["query", "user", "org", "language", "created", "pushed", "size",
                                  "stars", "forks", "topics", "license", "is", "archived", "fork"])
def test_any_other_field_change_misses(cache, name):
    filters = SearchFilters(language="go")
    cache.put(filters, make_response())
    assert cache.get(filters.replace(name, "changed")) is None


def test_entry_expires_after_freshness_window(cache, clock):
    filters = SearchFilters(language="go")
    cache.put(filters, make_response())

    clock.now += FRESHNESS_WINDOW.total_seconds() - 1
    assert cache.get(filters) is not None
    clock.now += 1
    assert cache.get(filters) is None


def test_put_overwrites_and_invalidate_clears(cache):
    cache.put(SearchFilters(language="go"), make_response())
    cache.put(SearchFilters(language="rust"), make_response())
    assert cache.get(SearchFilters(language="go")) is None
    assert cache.get(SearchFilters(language="rust")) is not None

    cache.invalidate()
    assert cache.get(SearchFilters(language="rust")) is None


def test_custom_ttl(clock):
    cache = ResultCache(ttl=timedelta(seconds=5), clock=clock)
    cache.put(SearchFilters(query="x"), make_response())
    clock.now += 5
    assert cache.get(SearchFilters(query="x")) is None


@pytest.mark.parametrize("sort, order, expected", [
    ("stars", "desc", [2, 3, 1]),
    ("stars", "asc", [1, 3, 2]),
    ("forks", "desc", [1, 3, 2]),
    ("forks", "asc", [2, 3, 1]),
    ("updated", "desc", [1, 3, 2]),
    ("updated", "asc", [2, 3, 1]),
    ("created", "desc", [2, 3, 1]),
    ("created", "asc", [1, 3, 2]),
    ("", "desc", [1, 2, 3]),
    ("help-wanted-issues", "asc", [1, 2, 3]),
])
def test_view_resorts_without_touching_entry(cache, sort, order, expected):
    response = make_response()
    entry = cache.put(SearchFilters(query="x"), response)

    view = entry.view(sort, order)

    assert [repo.id for repo in view] == expected
    assert [repo.id for repo in entry.response.items] == [1, 2, 3]
    assert entry.response.total_count == 3
    assert sorted(view, key=lambda r: r.id) == sorted(response.items, key=lambda r: r.id)


def test_sort_defaults_to_descending():
    items = make_response().items
    assert [r.id for r in sort_repositories(items, "stars")] == [2, 3, 1]
    assert [r.id for r in sort_repositories(items, "stars", "sideways")] == [2, 3, 1]
