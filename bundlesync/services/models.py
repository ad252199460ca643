"""Request and response objects exchanged between the CLI and the services."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ErrorDetail:
    message: str


@dataclass
class UpdateDependencyRequest:
    module_names: list[str]
    package_name: str
    expected_version: str
    description: str | None = None


@dataclass
class UpdateResult:
    """Outcome of a batch dependency update.

    ``skipped_modules`` lists requested modules that were neither updated nor
    already at the expected version.
    """

    success: bool
    updated_modules: list[str] = field(default_factory=list)
    message: str = ""
    errors: list[ErrorDetail] = field(default_factory=list)
    skipped_modules: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, message: str) -> UpdateResult:
        return cls(success=False, errors=[ErrorDetail(message)])


@dataclass
class AnalyzePRRequest:
    repository_owner: str
    repository_name: str
    pull_request_number: int
    github_token: str | None = None


@dataclass
class AnalysisResult:
    success: bool
    changed_modules: list[str] = field(default_factory=list)
    message: str = ""
    errors: list[ErrorDetail] = field(default_factory=list)

    @classmethod
    def failure(cls, message: str) -> AnalysisResult:
        return cls(success=False, errors=[ErrorDetail(message)])
