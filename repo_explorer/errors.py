# repo_explorer/errors.py


class SearchError(Exception):
    """A failed search, carrying the HTTP status to answer with."""

    def __init__(self, message: str, status: int = 500):
        super().__init__(message)
        self.message = message
        self.status = status


class MissingQueryError(SearchError):
    """Raised when the filters produce an empty query string."""

    def __init__(self, message: str = "Search query is required"):
        super().__init__(message, status=400)


class UpstreamError(SearchError):
    """GitHub answered with a non-2xx status."""
    pass
