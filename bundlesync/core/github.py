"""Synchronous GitHub API client used to fetch pull request diffs."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from bundlesync.config import DEFAULT_GITHUB_API_URL, DEFAULT_GITHUB_TIMEOUT

log = structlog.get_logger("bundlesync.github")

DIFF_MEDIA_TYPE = "application/vnd.github.v3.diff"


class GitHubError(Exception):
    """Raised when a GitHub request fails (HTTP status or transport error)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class GitHubClient:
    """Thin sync wrapper around the GitHub REST API."""

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_GITHUB_API_URL,
        timeout: float = DEFAULT_GITHUB_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "Authorization": f"token {token}",
        }
        self._client = httpx.Client(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    # ── lifecycle ──────────────────────────────────────────────────────────

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # ── public ─────────────────────────────────────────────────────────────

    def get_pull_request_diff(self, owner: str, repo: str, number: int) -> Any:
        """Return the unified diff of a pull request.

        The body text is returned for diff responses. When GitHub answers
        with JSON instead (it ignored the diff media type), the decoded JSON
        value is returned unchanged so the caller can reject it.

        Raises :class:`GitHubError` on non-2xx responses or network errors.
        """
        path = f"/repos/{owner}/{repo}/pulls/{number}"
        try:
            resp = self._client.get(path, headers={"Accept": DIFF_MEDIA_TYPE})
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            log.debug("github.http_error", path=path, status=status)
            raise GitHubError(f"GET {path} returned {status}", status_code=status) from exc
        except httpx.HTTPError as exc:
            log.debug("github.transport_error", path=path, error=str(exc))
            raise GitHubError(f"GET {path} failed: {exc}") from exc

        content_type = resp.headers.get("Content-Type", "")
        if "json" in content_type and "diff" not in content_type:
            return resp.json()
        return resp.text


def fetch_pr_diff(
    owner: str,
    repo: str,
    number: int,
    token: str,
    *,
    base_url: str = DEFAULT_GITHUB_API_URL,
    timeout: float = DEFAULT_GITHUB_TIMEOUT,
) -> Any:
    """Fetch a pull request diff with a short-lived authenticated client."""
    with GitHubClient(token, base_url=base_url, timeout=timeout) as client:
        return client.get_pull_request_diff(owner, repo, number)
