"""
GitHub API helper utilities.

Provides rate limit handling and error response processing for GitHub API calls.
"""

import logging

import httpx

from archflow.services.github.exceptions import GitHubAPIError

logger = logging.getLogger(__name__)


class RateLimitInfo:
    """Rate limit information from GitHub API response."""

    def __init__(self, response: httpx.Response) -> None:
        self.remaining = response.headers.get("X-RateLimit-Remaining")
        self.reset = response.headers.get("X-RateLimit-Reset")

    @property
    def reset_timestamp(self) -> int | None:
        """Get reset timestamp as integer, or None if not available."""
        return int(self.reset) if self.reset else None

    @property
    def is_exhausted(self) -> bool:
        """Check if rate limit is exhausted."""
        return self.remaining is not None and int(self.remaining) == 0


def handle_error_response(response: httpx.Response, repo_name: str) -> None:
    """
    Raise for non-success responses from the GitHub API.

    Args:
        response: The HTTP response from GitHub API (after redirects)
        repo_name: Repository name for error context (format: "owner/repo")

    Raises:
        GitHubAPIError: For authentication, authorization, missing repos or other API errors
    """
    if response.is_success:
        return

    rate_info = RateLimitInfo(response)

    if response.status_code == 401:
        raise GitHubAPIError("Invalid or expired GitHub token", 401)
    elif response.status_code == 404:
        raise GitHubAPIError(f"Repository or branch not found: {repo_name}", 404)
    elif response.status_code in (403, 429):
        if rate_info.is_exhausted or response.status_code == 429:
            raise GitHubAPIError(
                "GitHub API rate limit exceeded",
                response.status_code,
                rate_limit_reset=rate_info.reset_timestamp,
            )
        raise GitHubAPIError(f"Access to {repo_name} is forbidden", 403)
    else:
        reason = response.reason_phrase or "error"
        raise GitHubAPIError(
            f"Failed to download repository: {response.status_code} {reason}",
            response.status_code,
        )
