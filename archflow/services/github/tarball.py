"""Repository tarball download."""

import logging

from archflow.schemas import RepoRef
from archflow.services.github.helpers import handle_error_response
from archflow.services.github.http_client import get_github_client

logger = logging.getLogger(__name__)

BASE_URL = "https://api.github.com"
API_VERSION = "2022-11-28"
DEFAULT_BRANCH = "main"


def build_headers(token: str | None) -> dict[str, str]:
    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": API_VERSION,
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


async def download_repo_tarball(repo: RepoRef, token: str | None = None) -> bytes:
    """
    Download the gzipped tarball of a repository branch.

    Args:
        repo: Repository identity; ``repo.branch`` defaults to ``main``
        token: Optional GitHub token (private repos, higher rate limits)

    Returns:
        Raw tarball bytes

    Raises:
        GitHubAPIError: If GitHub rejects the request
    """
    branch = repo.branch or DEFAULT_BRANCH
    url = f"{BASE_URL}/repos/{repo.owner}/{repo.name}/tarball/{branch}"

    client = get_github_client()
    response = await client.get(url, headers=build_headers(token))
    handle_error_response(response, repo.key)

    logger.info(f"Downloaded {repo.key}@{branch}: {len(response.content)} bytes")
    return response.content
