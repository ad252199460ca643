"""DependencyUpdateService — set a package constraint across module manifests."""

from __future__ import annotations

import enum
from collections.abc import Callable
from pathlib import Path

import structlog

from bundlesync.core.errors import Outcome
from bundlesync.engines.manifest_store import (
    DECLARATION_PACKAGE,
    MANIFEST_FILENAME,
    ManifestStore,
)
from bundlesync.services.models import UpdateDependencyRequest, UpdateResult

log = structlog.get_logger("bundlesync.update")

_FORBIDDEN_NAME_CHARS = ("/", "\\", "\x00")

# (store, module_root, current_version, description) -> Outcome
PreUpdateHook = Callable[[ManifestStore, Path, str | None, str | None], Outcome]


def _ensure_transfer_declaration(
    store: ManifestStore,
    module_root: Path,
    current_version: str | None,
    description: str | None,
) -> Outcome:
    """Modules gaining spryker/transfer for the first time need a dependency.json."""
    if current_version is not None:
        return Outcome.success()
    return store.ensure_dependency_declaration(module_root, description)


PRE_UPDATE_HOOKS: dict[str, PreUpdateHook] = {
    DECLARATION_PACKAGE: _ensure_transfer_declaration,
}


class ModuleStatus(str, enum.Enum):
    UPDATED = "updated"
    CURRENT = "current"
    SKIPPED = "skipped"


class DependencyUpdateService:
    """Applies one explicit version to a package in every listed module.

    Per-module problems are logged and the module is skipped; the batch
    itself still succeeds once the request passes validation.
    """

    def __init__(
        self,
        store: ManifestStore,
        bundles_path: Path,
        pre_update_hooks: dict[str, PreUpdateHook] | None = None,
    ) -> None:
        self._store = store
        self._bundles_path = Path(bundles_path)
        self._hooks = PRE_UPDATE_HOOKS if pre_update_hooks is None else pre_update_hooks

    def manifest_path(self, module_name: str) -> Path:
        return self._bundles_path / module_name / MANIFEST_FILENAME

    def update(self, request: UpdateDependencyRequest) -> UpdateResult:
        package_name = request.package_name
        if not package_name or not package_name.strip():
            log.warning("update.empty_package_name")
            return UpdateResult.failure("Package name cannot be empty")

        expected_version = request.expected_version
        if not expected_version or not expected_version.strip():
            log.warning("update.empty_expected_version")
            return UpdateResult.failure("Expected version cannot be empty")

        if not any(name and name.strip() for name in request.module_names):
            log.warning("update.no_module_names")
            return UpdateResult.failure("At least one module name must be provided")

        updated: list[str] = []
        skipped: list[str] = []
        seen: set[str] = set()

        for raw_name in request.module_names:
            module_name = (raw_name or "").strip()
            if not module_name:
                log.warning("update.empty_module_name")
                continue
            if module_name in seen:
                continue
            seen.add(module_name)

            status = self._update_module(module_name, request)
            if status is ModuleStatus.UPDATED:
                updated.append(module_name)
            elif status is ModuleStatus.SKIPPED:
                skipped.append(module_name)

        log.info(
            "update.completed",
            package=package_name,
            version=expected_version,
            updated=len(updated),
            skipped=len(skipped),
        )
        return UpdateResult(
            success=True,
            updated_modules=updated,
            message=f"Updated {len(updated)} modules with {package_name} version {expected_version}",
            skipped_modules=skipped,
        )

    def _update_module(self, module_name: str, request: UpdateDependencyRequest) -> ModuleStatus:
        if module_name in (".", "..") or any(ch in module_name for ch in _FORBIDDEN_NAME_CHARS):
            log.warning("update.invalid_module_name", module=module_name)
            return ModuleStatus.SKIPPED

        manifest_path = self.manifest_path(module_name)
        if not self._store.exists(manifest_path):
            log.warning("update.manifest_not_found", module=module_name, path=str(manifest_path))
            return ModuleStatus.SKIPPED

        package_name = request.package_name
        current_version = self._store.get_field(manifest_path, package_name)
        if current_version == request.expected_version:
            log.debug("update.already_current", module=module_name, version=current_version)
            return ModuleStatus.CURRENT

        hook = self._hooks.get(package_name)
        if hook is not None:
            outcome = hook(self._store, manifest_path.parent, current_version, request.description)
            if not outcome.ok:
                log.error(
                    "update.pre_step_failed",
                    module=module_name,
                    package=package_name,
                    kind=outcome.kind.value if outcome.kind else None,
                    reason=outcome.message,
                )
                return ModuleStatus.SKIPPED

        outcome = self._store.set_field(manifest_path, package_name, request.expected_version)
        if not outcome.ok:
            log.error(
                "update.write_failed",
                module=module_name,
                path=str(manifest_path),
                reason=outcome.message,
            )
            return ModuleStatus.SKIPPED

        log.info(
            "update.module_updated",
            module=module_name,
            package=package_name,
            previous=current_version,
            version=request.expected_version,
        )
        return ModuleStatus.UPDATED
