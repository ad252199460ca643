"""Application facade — wires services from :class:`Settings`.

The CLI talks to this object only; tests can swap the diff fetcher.
"""

from __future__ import annotations

import functools

from bundlesync.config import Settings
from bundlesync.core.github import fetch_pr_diff
from bundlesync.engines.manifest_store import ManifestStore
from bundlesync.services.dependency_update_service import DependencyUpdateService
from bundlesync.services.models import (
    AnalysisResult,
    AnalyzePRRequest,
    UpdateDependencyRequest,
    UpdateResult,
)
from bundlesync.services.pr_analysis_service import DiffFetcher, PRAnalysisService


class App:
    def __init__(self, settings: Settings, fetch_diff: DiffFetcher | None = None) -> None:
        self.settings = settings
        if fetch_diff is None:
            fetch_diff = functools.partial(
                fetch_pr_diff,
                base_url=settings.github_api_url,
                timeout=settings.github_timeout,
            )
        self._store = ManifestStore()
        self._analysis_service = PRAnalysisService(fetch_diff, settings.bundles_dir)
        self._update_service = DependencyUpdateService(self._store, settings.bundles_path)

    def analyze_pr(self, request: AnalyzePRRequest) -> AnalysisResult:
        return self._analysis_service.analyze(request)

    def update_dependency(self, request: UpdateDependencyRequest) -> UpdateResult:
        return self._update_service.update(request)
