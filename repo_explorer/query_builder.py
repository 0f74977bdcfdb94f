# repo_explorer/query_builder.py
from repo_explorer.errors import MissingQueryError
from repo_explorer.models import SearchFilters

# Qualifiers emitted before the topic list, then the ones emitted after it.
LEADING_QUALIFIERS = ["user", "org", "language", "created", "pushed", "size", "stars", "forks"]
TRAILING_QUALIFIERS = ["license", "is", "archived", "fork"]


def split_topics(topics: str) -> list[str]:
    """'ml, rl,,vision' -> ['ml', 'rl', 'vision']"""
    return [topic.strip() for topic in topics.split(",") if topic.strip()]


def build_search_query(filters: SearchFilters) -> str:
    """
    Turns the form fields into a GitHub search string, e.g.
    user=torvalds, language=c -> "user:torvalds language:c".
    Nothing is escaped or validated; GitHub reports malformed qualifiers itself.
    """
    parts = []
    if filters.query:
        parts.append(filters.query)

    for name in LEADING_QUALIFIERS:
        value = filters.get(name)
        if value:
            parts.append(f"{name}:{value}")

    for topic in split_topics(filters.topics):
        parts.append(f"topic:{topic}")

    for name in TRAILING_QUALIFIERS:
        value = filters.get(name)
        if value:
            parts.append(f"{name}:{value}")

    return " ".join(parts)


def require_search_query(filters: SearchFilters) -> str:
    """Same as build_search_query, but refuses to return an empty query."""
    query = build_search_query(filters)
    if not query:
        raise MissingQueryError()
    return query
