# repo_explorer/render.py
from typing import Optional

from repo_explorer.models import Repository

# Text inputs of the filter form: (field, label, placeholder)
FORM_FIELDS = [
    ("query", "Query", "e.g. cache OR search in:name"),
    ("user", "User", "e.g. torvalds"),
    ("org", "Org", "e.g. NVIDIA"),
    ("language", "Language", "e.g. typescript"),
    ("created", "Created", ">=2024-01-01"),
    ("pushed", "Pushed", ">=2025-01-01"),
    ("size", "Size", ">1000"),
    ("stars", "Stars", ">=100"),
    ("forks", "Forks", ">=10"),
    ("topics", "Topics", "ml,rl,vision"),
    ("license", "License", "apache-2.0"),
    ("is", "Is", "public OR private"),
    ("archived", "Archived", "true OR false"),
    ("fork", "Fork", "true OR only"),
]


def card_label(repo: Repository) -> Optional[str]:
    """Language, else the first topic, else the license name."""
    if repo.language:
        return repo.language
    if repo.topics:
        return repo.topics[0]
    if repo.license and repo.license.get("name"):
        return repo.license["name"]
    return None


def card_metadata(repo: Repository) -> str:
    return " • ".join([
        f"★ {repo.stargazers_count}",
        f"⑂ {repo.forks_count}",
        f"Created {repo.created.date().isoformat()}",
        f"Updated {repo.updated.date().isoformat()}",
    ])


def card_description(repo: Repository) -> str:
    metadata = card_metadata(repo)
    if repo.description:
        return f"{repo.description} • {metadata}"
    return metadata


def status_line(state) -> Optional[str]:
    if not state.status:
        return None
    suffix = " (incomplete)" if state.incomplete_results else ""
    return f"Status: {state.status}{suffix}"


def rate_limit_line(state) -> Optional[str]:
    if not state.rate_limit:
        return None
    return f"Rate Limit: {state.rate_limit.remaining}/{state.rate_limit.limit}"
