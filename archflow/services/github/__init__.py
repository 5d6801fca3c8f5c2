"""
GitHub service package.

Usage: `from archflow.services.github import download_repo_tarball, validate_repo_url`

Module structure:
- repo_ref.py: Repository reference parsing and validation
- tarball.py: Tarball download
- http_client.py: Shared HTTP client lifecycle
- helpers.py: Rate limit handling and error utilities
- exceptions.py: Custom exceptions
"""

from archflow.services.github.exceptions import GitHubAPIError, RepoRefError
from archflow.services.github.helpers import RateLimitInfo, handle_error_response
from archflow.services.github.http_client import close_github_client, get_github_client
from archflow.services.github.repo_ref import get_repo_key, parse_github_url, validate_repo_url
from archflow.services.github.tarball import download_repo_tarball

__all__ = [
    # Download
    "download_repo_tarball",
    # Repository references
    "get_repo_key",
    "parse_github_url",
    "validate_repo_url",
    # HTTP client lifecycle
    "close_github_client",
    "get_github_client",
    # Utilities
    "handle_error_response",
    "RateLimitInfo",
    # Exceptions
    "GitHubAPIError",
    "RepoRefError",
]
