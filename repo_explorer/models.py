# repo_explorer/models.py
"""Data records shared by the backend proxy and the front-end session."""

from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

# Sort keys the form offers. "" means GitHub's best match.
SORT_OPTIONS = [
    ("", "Best match"),
    ("stars", "Stars"),
    ("forks", "Forks"),
    ("help-wanted-issues", "Help wanted"),
    ("updated", "Updated"),
    ("created", "Created"),
]
ORDER_OPTIONS = [("desc", "Desc"), ("asc", "Asc")]


@dataclass(frozen=True)
class SearchFilters:
    """Everything the filter form collects. Values are passed through as typed."""

    query: str = ""
    user: str = ""
    org: str = ""
    language: str = ""
    created: str = ""
    pushed: str = ""
    size: str = ""
    stars: str = ""
    forks: str = ""
    topics: str = ""
    license: str = ""
    is_: str = ""
    archived: str = ""
    fork: str = ""
    sort: str = ""
    order: str = "desc"

    @staticmethod
    def field_names() -> List[str]:
        """Public field names, in form order (``is_`` is exposed as ``is``)."""
        return [_public_name(f.name) for f in fields(SearchFilters)]

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SearchFilters":
        """Build filters from request args or form data. Unknown keys are ignored."""
        values = {}
        for f in fields(cls):
            raw = data.get(_public_name(f.name))
            if raw is not None:
                values[f.name] = str(raw)
        return cls(**values)

    def get(self, name: str) -> str:
        return getattr(self, _attr_name(name))

    def replace(self, name: str, value: str) -> "SearchFilters":
        if name not in self.field_names():
            raise KeyError(name)
        return replace(self, **{_attr_name(name): value})

    def without_sort(self) -> Dict[str, str]:
        """The subset of fields a cached result is keyed on."""
        return {
            name: self.get(name)
            for name in self.field_names()
            if name not in ("sort", "order")
        }

    def to_dict(self) -> Dict[str, str]:
        return {name: self.get(name) for name in self.field_names()}

    def to_query_params(self) -> Dict[str, str]:
        """Non-empty fields only, as the front-end puts them on the query string."""
        return {name: value for name, value in self.to_dict().items() if value}


def _public_name(attr: str) -> str:
    return "is" if attr == "is_" else attr


def _attr_name(name: str) -> str:
    return "is_" if name == "is" else name


def parse_timestamp(value: str) -> datetime:
    """Parse GitHub's ISO-8601 timestamps ('2024-01-02T03:04:05Z')."""
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@dataclass(frozen=True)
class Repository:
    """Trimmed, read-only view of a GitHub search item."""

    id: int
    full_name: str
    html_url: str
    description: Optional[str]
    language: Optional[str]
    topics: List[str]
    license: Optional[Dict[str, str]]
    created_at: str
    updated_at: str
    stargazers_count: int
    forks_count: int

    @classmethod
    def from_api(cls, item: Mapping[str, Any]) -> "Repository":
        """Keep only the fields the explorer shows. Works on upstream items and our own JSON."""
        license_info = item.get("license")
        return cls(
            id=item["id"],
            full_name=item["full_name"],
            html_url=item["html_url"],
            description=item.get("description"),
            language=item.get("language"),
            topics=list(item.get("topics") or []),
            license={"name": license_info["name"]} if license_info else None,
            created_at=item["created_at"],
            updated_at=item["updated_at"],
            stargazers_count=item.get("stargazers_count", 0),
            forks_count=item.get("forks_count", 0),
        )

    @property
    def created(self) -> datetime:
        return parse_timestamp(self.created_at)

    @property
    def updated(self) -> datetime:
        return parse_timestamp(self.updated_at)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "full_name": self.full_name,
            "html_url": self.html_url,
            "description": self.description,
            "language": self.language,
            "topics": list(self.topics),
            "license": dict(self.license) if self.license else None,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "stargazers_count": self.stargazers_count,
            "forks_count": self.forks_count,
        }


@dataclass(frozen=True)
class RateLimit:
    limit: int
    remaining: int
    reset: int

    def to_dict(self) -> Dict[str, int]:
        return {"limit": self.limit, "remaining": self.remaining, "reset": self.reset}

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> Optional["RateLimit"]:
        if not data:
            return None
        return cls(limit=data["limit"], remaining=data["remaining"], reset=data["reset"])


@dataclass(frozen=True)
class PageResult:
    """One page of /search/repositories, as returned by GitHub."""

    total_count: int
    incomplete_results: bool
    items: List[Dict[str, Any]]


@dataclass(frozen=True)
class SearchResponse:
    status: int
    total_count: int
    incomplete_results: bool
    items: List[Repository] = field(default_factory=list)
    rate_limit: Optional[RateLimit] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        body = {
            "status": self.status,
            "rate_limit": self.rate_limit.to_dict() if self.rate_limit else None,
            "total_count": self.total_count,
            "incomplete_results": self.incomplete_results,
            "items": [repo.to_dict() for repo in self.items],
        }
        if self.error is not None:
            body["error"] = self.error
        return body

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], status: Optional[int] = None) -> "SearchResponse":
        return cls(
            status=status if status is not None else data.get("status", 200),
            total_count=data.get("total_count") or 0,
            incomplete_results=bool(data.get("incomplete_results")),
            items=[Repository.from_api(item) for item in data.get("items") or []],
            rate_limit=RateLimit.from_dict(data.get("rate_limit")),
            error=data.get("error"),
        )
