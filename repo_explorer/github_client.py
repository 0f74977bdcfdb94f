# repo_explorer/github_client.py
import logging
from typing import Optional

import requests

from repo_explorer.errors import UpstreamError
from repo_explorer.models import PageResult, RateLimit

logger = logging.getLogger(__name__)

API_ROOT = "https://api.github.com"
SEARCH_URL = f"{API_ROOT}/search/repositories"
RATE_LIMIT_URL = f"{API_ROOT}/rate_limit"

USER_AGENT = "github-repo-explorer/1.0.0"
API_VERSION = "2022-11-28"
REQUEST_TIMEOUT = 30


class GitHubClient:
    """
    The two GitHub REST calls the explorer needs. The token is optional;
    without it GitHub applies the unauthenticated search quota.
    """

    def __init__(self, token: Optional[str] = None, session: Optional[requests.Session] = None):
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
            "User-Agent": USER_AGENT,
        })
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def search_repositories(self, query: str, page: int = 1, per_page: int = 100,
                            sort: Optional[str] = None, order: Optional[str] = None) -> PageResult:
        params = {"q": query, "per_page": per_page, "page": page}
        if sort:
            params["sort"] = sort
        if order:
            params["order"] = order

        data = self._get(SEARCH_URL, params)
        return PageResult(
            total_count=data.get("total_count", 0),
            incomplete_results=bool(data.get("incomplete_results")),
            items=data.get("items") or [],
        )

    def get_rate_limit(self) -> RateLimit:
        rate = self._get(RATE_LIMIT_URL)["rate"]
        return RateLimit(limit=rate["limit"], remaining=rate["remaining"], reset=rate["reset"])

    def _get(self, url: str, params: Optional[dict] = None) -> dict:
        response = self.session.get(url, params=params, timeout=REQUEST_TIMEOUT)
        if not response.ok:
            message = _error_message(response)
            logger.warning(f"GitHub answered {response.status_code} for {url}: {message}")
            raise UpstreamError(message, status=response.status_code)
        return response.json()


def _error_message(response: requests.Response) -> str:
    """GitHub puts a human readable reason under 'message'; fall back to the HTTP reason."""
    try:
        message = response.json().get("message")
    except ValueError:
        message = None
    return message or response.reason or f"HTTP {response.status_code}"
