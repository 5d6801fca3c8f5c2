"""
Repository reference parsing and validation.

Accepts either a full GitHub URL (``https://github.com/owner/name``) or the
short ``owner/name`` form.
"""

import re

from archflow.schemas import RepoRef
from archflow.services.github.exceptions import RepoRefError

_URL_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"github\.com/([^/]+)/([^/]+)"),
    re.compile(r"^([^/]+)/([^/]+)$"),
]

_VALID_SEGMENT = re.compile(r"^[a-zA-Z0-9._-]+$")


def parse_github_url(url: str) -> RepoRef | None:
    """Extract owner and name from a GitHub URL or ``owner/name`` string."""
    text = url.strip()
    for pattern in _URL_PATTERNS:
        match = pattern.search(text)
        if match:
            name = re.sub(r"\.git$", "", match.group(2))
            return RepoRef(owner=match.group(1), name=name)
    return None


def validate_repo_url(url: str) -> RepoRef:
    """
    Parse and validate a repository reference.

    Returns:
        The parsed RepoRef

    Raises:
        RepoRefError: If the reference is unparseable or has invalid characters
    """
    repo = parse_github_url(url)
    if repo is None:
        raise RepoRefError("Invalid GitHub repository URL")

    if not repo.owner or not repo.name:
        raise RepoRefError("Invalid repository format")

    if not _VALID_SEGMENT.match(repo.owner) or not _VALID_SEGMENT.match(repo.name):
        raise RepoRefError("Invalid characters in repository name")

    return repo


def get_repo_key(repo: RepoRef) -> str:
    """Deterministic cache identity for a repository."""
    return f"{repo.owner}/{repo.name}"
