"""GitHub API client for repository tags and branches.

Provides a lightweight REST client for the two lookups the release run needs
from the hosting side: the repository's default branch and its tag names.
"""
from __future__ import annotations

import os
import re
from typing import List, Optional, Dict, Any, Tuple
from urllib.parse import quote

from constants import Constants
from common.http_client import get_json

_NEXT_LINK = re.compile(r'<([^>]+)>\s*;\s*rel="next"')


class RepositoryError(RuntimeError):
    """Raised when the hosting API cannot answer a required lookup."""


def split_repository(slug: str) -> Tuple[str, str]:
    """Split an ``owner/repo`` slug.

    Raises:
        ValueError: If the slug is not exactly two non-empty segments.
    """
    parts = (slug or "").strip().strip("/").split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"Invalid repository '{slug}'. Expected 'owner/repo'.")
    return parts[0], parts[1]


class GitHubClient:
    """Lightweight REST client for GitHub API operations.

    Supports optional authentication via GITHUB_TOKEN environment variable.
    """

    def __init__(self, base_url: Optional[str] = None, token: Optional[str] = None):
        """Initialize GitHub client.

        Args:
            base_url: Base URL for GitHub API (defaults to GITHUB_API_URL or Constants.GITHUB_API_BASE)
            token: GitHub token (defaults to GITHUB_TOKEN env var)
        """
        self.base_url = (
            base_url or os.environ.get(Constants.ENV_GITHUB_API_URL) or Constants.GITHUB_API_BASE
        ).rstrip('/')
        self.token = token or os.environ.get(Constants.ENV_GITHUB_TOKEN)

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers including authorization if token is available."""
        headers = {'Accept': 'application/vnd.github+json'}
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        return headers

    def _repo_url(self, owner: str, repo: str) -> str:
        return f"{self.base_url}/repos/{quote(owner, safe='')}/{quote(repo, safe='')}"

    def get_repository(self, owner: str, repo: str) -> Dict[str, Any]:
        """Fetch repository metadata.

        Raises:
            RepositoryError: If the repository cannot be fetched.
        """
        url = self._repo_url(owner, repo)
        status, _, data = get_json(url, headers=self._get_headers())
        if status == 200 and isinstance(data, dict):
            return data
        raise RepositoryError(f"Unable to fetch repository {owner}/{repo} (HTTP {status})")

    def get_default_branch(self, owner: str, repo: str) -> str:
        """Return the repository's default branch name."""
        data = self.get_repository(owner, repo)
        branch = data.get('default_branch')
        if not branch:
            raise RepositoryError(f"Repository {owner}/{repo} reports no default branch")
        return branch

    def get_tags(self, owner: str, repo: str) -> List[str]:
        """Fetch all tag names, in the order the API returns them.

        Args:
            owner: Repository owner
            repo: Repository name

        Returns:
            List of tag names; the first entry is treated as the latest tag.
        """
        results = self._get_paginated_results(f"{self._repo_url(owner, repo)}/tags")
        return [tag['name'] for tag in results if isinstance(tag, dict) and tag.get('name')]

    def _get_paginated_results(self, url: str) -> List[Dict[str, Any]]:
        """Fetch all pages of a paginated endpoint following ``Link`` headers.

        Raises:
            RepositoryError: If any page fails.
        """
        results: List[Dict[str, Any]] = []
        current_url: Optional[str] = f"{url}?per_page={Constants.REPO_API_PER_PAGE}"

        while current_url:
            status, headers, data = get_json(current_url, headers=self._get_headers())

            if status != 200 or data is None:
                raise RepositoryError(f"Unable to list {url} (HTTP {status})")
            if not data:
                break

            results.extend(data)
            current_url = self._get_next_page(headers)

        return results

    def _get_next_page(self, headers: Dict[str, str]) -> Optional[str]:
        """Extract the next page URL from response headers.

        Args:
            headers: Response headers

        Returns:
            Next page URL or None
        """
        link = headers.get('Link') or headers.get('link')
        if not link:
            return None
        match = _NEXT_LINK.search(link)
        return match.group(1) if match else None
