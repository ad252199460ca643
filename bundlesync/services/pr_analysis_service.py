"""PRAnalysisService — list modules whose transfer.xml changed in a pull request."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import structlog

from bundlesync.config import DEFAULT_BUNDLES_DIR
from bundlesync.core.github import fetch_pr_diff
from bundlesync.engines.diff_analyzer import MARKER_FILENAME, parse_modules_from_diff
from bundlesync.services.models import AnalysisResult, AnalyzePRRequest

log = structlog.get_logger("bundlesync.analyze")

# (owner, repo, pr_number, token) -> diff text
DiffFetcher = Callable[[str, str, int, str], Any]


class PRAnalysisService:
    def __init__(
        self,
        fetch_diff: DiffFetcher = fetch_pr_diff,
        bundles_dir: str = DEFAULT_BUNDLES_DIR,
    ) -> None:
        self._fetch_diff = fetch_diff
        self._bundles_dir = bundles_dir

    def analyze(self, request: AnalyzePRRequest) -> AnalysisResult:
        """Validate the request, fetch the PR diff and extract changed modules.

        Transport problems are logged with their cause and reported to the
        caller as a single generic error.
        """
        owner = request.repository_owner
        if not owner or not owner.strip():
            log.warning("analyze.empty_owner")
            return AnalysisResult.failure("Repository owner cannot be empty")

        repo = request.repository_name
        if not repo or not repo.strip():
            log.warning("analyze.empty_repository")
            return AnalysisResult.failure("Repository name cannot be empty")

        number = request.pull_request_number
        if number <= 0:
            log.warning("analyze.invalid_pr_number", pr_number=number)
            return AnalysisResult.failure("Pull request number must be greater than zero")

        token = request.github_token
        if token is None or not token.strip():
            log.warning("analyze.missing_token")
            return AnalysisResult.failure("GitHub token is required for API access")

        try:
            diff = self._fetch_diff(owner, repo, number, token)
        except Exception as exc:
            log.error(
                "github.fetch_failed",
                owner=owner,
                repo=repo,
                pr_number=number,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return AnalysisResult.failure("Failed to fetch PR diff from GitHub")

        if not isinstance(diff, str):
            log.error("analyze.invalid_diff_type", received=type(diff).__name__)
            return AnalysisResult.failure("Invalid diff content format received from GitHub API")

        changed = parse_modules_from_diff(diff, MARKER_FILENAME, self._bundles_dir)
        log.info("analyze.completed", owner=owner, repo=repo, pr_number=number, modules=len(changed))
        return AnalysisResult(
            success=True,
            changed_modules=changed,
            message=f"Found {len(changed)} modules with {MARKER_FILENAME} changes",
        )
