# repo_explorer/pager.py
"""Paginated repository search: the only place that talks to GitHub."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from repo_explorer.models import Repository, SearchFilters, SearchResponse, parse_timestamp
from repo_explorer.query_builder import require_search_query

logger = logging.getLogger(__name__)

PER_PAGE = 100
# GitHub never returns more than 1,000 search results, i.e. 10 pages of 100.
MAX_PAGES = 10

# Sort keys GitHub should not be asked to apply.
LOCAL_SORTS = ("", "created")


@dataclass
class PagedResults:
    total_count: int = 0
    incomplete_results: bool = False
    items: List[Dict[str, Any]] = field(default_factory=list)
    pages: int = 0


def fetch_all_pages(client, query: str, sort: str = "", order: str = "desc",
                    per_page: int = PER_PAGE, max_pages: int = MAX_PAGES) -> PagedResults:
    """
    Requests pages 1..max_pages one after another and stops at the first
    short page. total_count and incomplete_results are those of page 1.

    GitHub has no "created" sort for repositories, so that one is applied
    here over the accumulated items instead of being sent upstream.
    """
    server_sort = None if sort in LOCAL_SORTS else sort
    results = PagedResults()

    for page in range(1, max_pages + 1):
        page_result = client.search_repositories(
            query, page=page, per_page=per_page, sort=server_sort, order=order
        )
        if page == 1:
            results.total_count = page_result.total_count
            results.incomplete_results = page_result.incomplete_results

        results.items.extend(page_result.items)
        results.pages = page

        if len(page_result.items) < per_page:
            break

    if sort == "created":
        # sorted() is stable, also with reverse=True, so ties keep GitHub's order
        results.items = sorted(
            results.items,
            key=lambda item: parse_timestamp(item["created_at"]),
            reverse=order != "asc",
        )

    return results


def run_search(filters: SearchFilters, client) -> SearchResponse:
    """Backend side of GET /api/search. Raises SearchError subclasses on failure."""
    query = require_search_query(filters)
    logger.info(f"Searching GitHub for '{query}' (sort={filters.sort or 'best-match'}, order={filters.order})")

    results = fetch_all_pages(client, query, filters.sort, filters.order)
    items = [Repository.from_api(item) for item in results.items]
    logger.info(f"Fetched {len(items)} repositories in {results.pages} page(s), total_count={results.total_count}")

    try:
        rate_limit = client.get_rate_limit()
    except Exception as e:
        logger.debug(f"Rate limit lookup failed, reporting none: {e}")
        rate_limit = None

    return SearchResponse(
        status=200,
        total_count=results.total_count,
        incomplete_results=results.incomplete_results,
        items=items,
        rate_limit=rate_limit,
    )
